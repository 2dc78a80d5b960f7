"""
Prioritization Weights
======================
Six integer importance sliders (1-10). The weights are exported as
metadata; no scoring algorithm consumes them here.

Validated with Pydantic so out-of-range values are rejected at the
UI/CLI boundary.
"""
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CRITERIA: Dict[str, Tuple[str, str]] = {
    "priorityLevel": ("Priority Level", "How much to prioritize high-priority clients"),
    "taskFulfillment": ("Task Fulfillment", "Maximize the number of requested tasks completed"),
    "fairness": ("Fairness", "Ensure fair distribution across all clients"),
    "workloadBalance": ("Workload Balance", "Balance workload across workers"),
    "skillMatch": ("Skill Match", "Prioritize tasks that match worker skills"),
    "phaseEfficiency": ("Phase Efficiency", "Optimize for efficient phase utilization"),
}

DEFAULT_WEIGHT = 5


class PrioritizationWeights(BaseModel):
    """Importance sliders, serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    priority_level: int = Field(default=DEFAULT_WEIGHT, ge=1, le=10)
    task_fulfillment: int = Field(default=DEFAULT_WEIGHT, ge=1, le=10)
    fairness: int = Field(default=DEFAULT_WEIGHT, ge=1, le=10)
    workload_balance: int = Field(default=DEFAULT_WEIGHT, ge=1, le=10)
    skill_match: int = Field(default=DEFAULT_WEIGHT, ge=1, le=10)
    phase_efficiency: int = Field(default=DEFAULT_WEIGHT, ge=1, le=10)

    def to_dict(self) -> Dict[str, int]:
        """Weights keyed by criterion (camelCase), in criteria order."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_dict(cls, d: Dict[str, int]) -> "PrioritizationWeights":
        return cls.model_validate(d)

    def get(self, key: str) -> int:
        return self.to_dict()[key]

    def with_weight(self, key: str, value: int) -> "PrioritizationWeights":
        """Return a copy with one criterion changed (validated)."""
        data = self.to_dict()
        if key not in data:
            raise KeyError(key)
        data[key] = value
        return PrioritizationWeights.from_dict(data)

    def total(self) -> int:
        return sum(self.to_dict().values())

    def percentage(self, key: str) -> int:
        """Rounded share of the total for one criterion."""
        total = self.total()
        if total <= 0:
            return 0
        # halves round up
        return int(self.get(key) * 100 / total + 0.5)

    def ranking(self) -> List[Tuple[str, int]]:
        """Criteria ordered by weight, highest first (stable on ties)."""
        return sorted(self.to_dict().items(), key=lambda kv: kv[1], reverse=True)

    @classmethod
    def defaults(cls) -> "PrioritizationWeights":
        return cls()

    @classmethod
    def from_profile(cls, name: str) -> "PrioritizationWeights":
        if name not in PRESET_PROFILES:
            raise KeyError(f"Unknown profile: {name}")
        return cls.from_dict(PRESET_PROFILES[name]["weights"])


PRESET_PROFILES = {
    "Maximize Fulfillment": {
        "description": "Focus on completing as many tasks as possible",
        "weights": {
            "priorityLevel": 8, "taskFulfillment": 10, "fairness": 3,
            "workloadBalance": 5, "skillMatch": 7, "phaseEfficiency": 6,
        },
    },
    "Fair Distribution": {
        "description": "Ensure equal treatment for all clients",
        "weights": {
            "priorityLevel": 5, "taskFulfillment": 7, "fairness": 10,
            "workloadBalance": 8, "skillMatch": 6, "phaseEfficiency": 4,
        },
    },
    "Minimize Workload": {
        "description": "Reduce worker stress and burnout",
        "weights": {
            "priorityLevel": 6, "taskFulfillment": 5, "fairness": 7,
            "workloadBalance": 10, "skillMatch": 8, "phaseEfficiency": 6,
        },
    },
    "High Priority Focus": {
        "description": "Prioritize VIP and high-priority clients",
        "weights": {
            "priorityLevel": 10, "taskFulfillment": 8, "fairness": 2,
            "workloadBalance": 4, "skillMatch": 6, "phaseEfficiency": 5,
        },
    },
}
