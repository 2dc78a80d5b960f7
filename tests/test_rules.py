"""Tests for the rule registry."""
import itertools

import pytest

from alchemist.errors import RuleError
from alchemist.models.rules import CoRunConfig, LoadLimitConfig, RuleType
from alchemist.rules import RuleRegistry


@pytest.fixture
def registry():
    ticks = itertools.count(1_700_000_000)
    return RuleRegistry(clock=lambda: next(ticks))


class TestRuleRegistry:
    """Tests for add/toggle/priority/config/delete."""

    def test_add_defaults(self, registry):
        rule = registry.add(RuleType.LOAD_LIMIT, "  Cap load ", "desc")
        assert rule.name == "Cap load"
        assert rule.enabled is True
        assert rule.priority == 1
        assert rule.config == LoadLimitConfig(worker_group="", max_slots_per_phase=5)
        assert rule.id.startswith("rule_")

    def test_add_assigns_increasing_priority(self, registry):
        rules = [registry.add("coRun", f"R{i}") for i in range(3)]
        assert [r.priority for r in rules] == [1, 2, 3]
        assert len({r.id for r in rules}) == 3

    def test_add_requires_name(self, registry):
        with pytest.raises(ValueError):
            registry.add(RuleType.CO_RUN, "   ")
        assert len(registry) == 0

    def test_same_millisecond_ids_unique(self):
        reg = RuleRegistry(clock=lambda: 1.0)
        a = reg.add(RuleType.CO_RUN, "A")
        b = reg.add(RuleType.CO_RUN, "B")
        assert a.id == "rule_1000"
        assert b.id == "rule_1000_1"

    def test_toggle(self, registry):
        rule = registry.add(RuleType.PRECEDENCE, "Order")
        registry.toggle(rule.id)
        assert registry.get(rule.id).enabled is False
        registry.toggle(rule.id)
        assert registry.get(rule.id).enabled is True

    def test_set_priority_reorders(self, registry):
        a = registry.add(RuleType.CO_RUN, "A")
        b = registry.add(RuleType.CO_RUN, "B")
        c = registry.add(RuleType.CO_RUN, "C")
        registry.set_priority(c.id, 1)
        # C ties with A at 1 and sorts after it; B keeps priority 2
        assert [r.name for r in registry] == ["A", "C", "B"]
        registry.set_priority(b.id, 0)
        assert [r.name for r in registry] == ["B", "A", "C"]

    def test_update_config(self, registry):
        rule = registry.add(RuleType.CO_RUN, "Together")
        registry.update_config(rule.id, {"taskIds": ["T1", "T2"]})
        assert registry.get(rule.id).config == CoRunConfig(task_ids=["T1", "T2"])
        registry.update_config(rule.id, CoRunConfig(task_ids=["T3"]))
        assert registry.get(rule.id).config.task_ids == ["T3"]

    def test_update_config_wrong_type(self, registry):
        rule = registry.add(RuleType.CO_RUN, "Together")
        with pytest.raises(TypeError):
            registry.update_config(rule.id, LoadLimitConfig())

    def test_delete(self, registry):
        a = registry.add(RuleType.CO_RUN, "A")
        b = registry.add(RuleType.CO_RUN, "B")
        registry.delete(a.id)
        assert [r.id for r in registry] == [b.id]
        assert a.id not in registry

    def test_unknown_id(self, registry):
        with pytest.raises(RuleError, match="Unknown rule: nope"):
            registry.toggle("nope")
        with pytest.raises(KeyError):
            registry.delete("nope")

    def test_dicts_roundtrip(self, registry):
        registry.add(RuleType.PHASE_WINDOW, "Window")
        registry.update_config(registry.to_list()[0].id, {"taskId": "T1", "allowedPhases": [1, 2]})
        restored = RuleRegistry.from_dicts(registry.to_dicts())
        assert restored.to_list() == registry.to_list()
