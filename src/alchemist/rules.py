"""In-memory registry of user-defined business rules."""
import time
from typing import Any, Dict, Iterator, List, Optional, Union

from alchemist.errors import RuleError
from alchemist.models.rules import (
    CONFIG_TYPES,
    BusinessRule,
    RuleConfig,
    RuleType,
    config_from_dict,
    default_config,
)
from alchemist.utils.logging_setup import get_logger

logger = get_logger("alchemist.rules")


class RuleRegistry:
    """Ordered list of rules keyed by generated id.

    The list order is the display/export order. Changing a priority
    re-sorts the whole list ascending by priority; the sort is stable so
    ties keep their previous relative order.
    """

    def __init__(self, rules: Optional[List[BusinessRule]] = None, clock=time.time):
        self._rules: List[BusinessRule] = list(rules or [])
        self._clock = clock

    def __iter__(self) -> Iterator[BusinessRule]:
        return iter(list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: str) -> bool:
        return any(r.id == rule_id for r in self._rules)

    def _new_id(self) -> str:
        base = f"rule_{int(self._clock() * 1000)}"
        rule_id, n = base, 1
        while rule_id in self:
            rule_id = f"{base}_{n}"
            n += 1
        return rule_id

    def get(self, rule_id: str) -> BusinessRule:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        raise RuleError(rule_id)

    def add(self, rule_type: Union[RuleType, str], name: str, description: str = "") -> BusinessRule:
        """Append a rule with default config and priority ``len + 1``."""
        if not name or not name.strip():
            raise ValueError("Rule name is required")
        rule = BusinessRule(
            id=self._new_id(),
            type=RuleType(rule_type),
            name=name.strip(),
            description=description.strip(),
            config=default_config(RuleType(rule_type)),
            priority=len(self._rules) + 1,
            enabled=True,
        )
        self._rules.append(rule)
        logger.info("Added rule %s (%s) priority=%d", rule.id, rule.type.value, rule.priority)
        return rule

    def toggle(self, rule_id: str) -> BusinessRule:
        rule = self.get(rule_id)
        rule.enabled = not rule.enabled
        logger.debug("Rule %s enabled=%s", rule_id, rule.enabled)
        return rule

    def set_priority(self, rule_id: str, priority: int) -> List[BusinessRule]:
        """Reassign one priority, then stable-sort the whole list."""
        rule = self.get(rule_id)
        rule.priority = int(priority)
        self._rules.sort(key=lambda r: r.priority)
        logger.debug("Rule %s priority=%d, order=%s", rule_id, rule.priority, [r.id for r in self._rules])
        return self.to_list()

    def update_config(self, rule_id: str, config: Union[RuleConfig, Dict[str, Any]]) -> BusinessRule:
        """Replace a rule's config; mappings are parsed with defaults for missing keys."""
        rule = self.get(rule_id)
        if isinstance(config, dict):
            config = config_from_dict(rule.type, config)
        elif not isinstance(config, CONFIG_TYPES[rule.type]):
            raise TypeError(
                f"{type(config).__name__} is not a valid config for {rule.type.value} rules"
            )
        rule.config = config
        return rule

    def delete(self, rule_id: str) -> None:
        self.get(rule_id)
        self._rules = [r for r in self._rules if r.id != rule_id]
        logger.info("Deleted rule %s", rule_id)

    def to_list(self) -> List[BusinessRule]:
        return list(self._rules)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self._rules]

    @classmethod
    def from_dicts(cls, items: List[Dict[str, Any]]) -> "RuleRegistry":
        return cls([BusinessRule.from_dict(d) for d in items])
