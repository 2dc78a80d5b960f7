"""
Business Rule Definitions
=========================
Rule types, their per-type configuration records and the rule record itself.
Rules are exported as metadata only; nothing in this package enforces them.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

from alchemist.parsing import safe_int


class RuleType(str, Enum):
    """Closed set of rule kinds (values are the exported wire names)."""
    CO_RUN = "coRun"
    SLOT_RESTRICTION = "slotRestriction"
    LOAD_LIMIT = "loadLimit"
    PHASE_WINDOW = "phaseWindow"
    PATTERN_MATCH = "patternMatch"
    PRECEDENCE = "precedence"

    @property
    def label(self) -> str:
        return RULE_TYPE_INFO[self][0]

    @property
    def description(self) -> str:
        return RULE_TYPE_INFO[self][1]


RULE_TYPE_INFO = {
    RuleType.CO_RUN: ("Co-Run Rule", "Tasks that must run together"),
    RuleType.SLOT_RESTRICTION: ("Slot Restriction", "Limit available time slots for groups"),
    RuleType.LOAD_LIMIT: ("Load Limit", "Maximum workload per phase for worker groups"),
    RuleType.PHASE_WINDOW: ("Phase Window", "Restrict tasks to specific phases"),
    RuleType.PATTERN_MATCH: ("Pattern Match", "Apply rules based on task patterns"),
    RuleType.PRECEDENCE: ("Precedence", "Define task execution order"),
}


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v) for v in value]


def _int_or(value: Any, default: int) -> int:
    parsed = safe_int(value)
    return default if parsed is None else parsed


@dataclass
class CoRunConfig:
    task_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"taskIds": list(self.task_ids)}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CoRunConfig":
        return cls(task_ids=_str_list(d.get("taskIds")))


@dataclass
class SlotRestrictionConfig:
    group: str = ""
    min_common_slots: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"group": self.group, "minCommonSlots": self.min_common_slots}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SlotRestrictionConfig":
        return cls(
            group=str(d.get("group") or ""),
            min_common_slots=_int_or(d.get("minCommonSlots"), 1),
        )


@dataclass
class LoadLimitConfig:
    worker_group: str = ""
    max_slots_per_phase: int = 5

    def to_dict(self) -> Dict[str, Any]:
        return {"workerGroup": self.worker_group, "maxSlotsPerPhase": self.max_slots_per_phase}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LoadLimitConfig":
        return cls(
            worker_group=str(d.get("workerGroup") or ""),
            max_slots_per_phase=_int_or(d.get("maxSlotsPerPhase"), 5),
        )


@dataclass
class PhaseWindowConfig:
    task_id: str = ""
    allowed_phases: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"taskId": self.task_id, "allowedPhases": list(self.allowed_phases)}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PhaseWindowConfig":
        phases = d.get("allowedPhases")
        if not isinstance(phases, (list, tuple)):
            phases = []
        return cls(
            task_id=str(d.get("taskId") or ""),
            allowed_phases=[p for p in (safe_int(v) for v in phases) if p is not None],
        )


@dataclass
class PatternMatchConfig:
    pattern: str = ""
    rule_template: str = ""
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "ruleTemplate": self.rule_template,
            "parameters": dict(self.parameters),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PatternMatchConfig":
        params = d.get("parameters")
        return cls(
            pattern=str(d.get("pattern") or ""),
            rule_template=str(d.get("ruleTemplate") or ""),
            parameters=dict(params) if isinstance(params, dict) else {},
        )


@dataclass
class PrecedenceConfig:
    before_task: str = ""
    after_task: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"beforeTask": self.before_task, "afterTask": self.after_task}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PrecedenceConfig":
        return cls(
            before_task=str(d.get("beforeTask") or ""),
            after_task=str(d.get("afterTask") or ""),
        )


RuleConfig = Union[
    CoRunConfig,
    SlotRestrictionConfig,
    LoadLimitConfig,
    PhaseWindowConfig,
    PatternMatchConfig,
    PrecedenceConfig,
]

CONFIG_TYPES = {
    RuleType.CO_RUN: CoRunConfig,
    RuleType.SLOT_RESTRICTION: SlotRestrictionConfig,
    RuleType.LOAD_LIMIT: LoadLimitConfig,
    RuleType.PHASE_WINDOW: PhaseWindowConfig,
    RuleType.PATTERN_MATCH: PatternMatchConfig,
    RuleType.PRECEDENCE: PrecedenceConfig,
}


def default_config(rule_type: RuleType) -> RuleConfig:
    """Fresh default configuration for a rule type."""
    return CONFIG_TYPES[RuleType(rule_type)]()


def config_from_dict(rule_type: RuleType, d: Any) -> RuleConfig:
    """Build a config from a loose mapping; missing keys take defaults."""
    if not isinstance(d, dict):
        d = {}
    return CONFIG_TYPES[RuleType(rule_type)].from_dict(d)


@dataclass
class BusinessRule:
    """A user-declared constraint descriptor."""

    id: str
    type: RuleType
    name: str
    description: str = ""
    config: RuleConfig = None
    priority: int = 1
    enabled: bool = True

    def __post_init__(self):
        self.type = RuleType(self.type)
        if self.config is None:
            self.config = default_config(self.type)
        elif isinstance(self.config, dict):
            self.config = config_from_dict(self.type, self.config)
        elif not isinstance(self.config, CONFIG_TYPES[self.type]):
            raise TypeError(
                f"{type(self.config).__name__} is not a valid config for {self.type.value} rules"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the exported JSON shape."""
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "config": self.config.to_dict(),
            "priority": self.priority,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BusinessRule":
        """Create from dictionary."""
        return cls(
            id=str(d["id"]),
            type=RuleType(d["type"]),
            name=str(d.get("name", "")),
            description=str(d.get("description", "")),
            config=config_from_dict(d["type"], d.get("config")),
            priority=_int_or(d.get("priority"), 1),
            enabled=bool(d.get("enabled", True)),
        )
