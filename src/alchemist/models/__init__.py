# alchemist/models - Data models for the editor
from .dataset import Dataset
from .entities import ENTITY_TYPES, Client, Task, Worker, apply_cell_edit
from .rules import BusinessRule, RuleType, default_config
from .weights import PRESET_PROFILES, PrioritizationWeights

__all__ = [
    "Client", "Worker", "Task", "ENTITY_TYPES", "apply_cell_edit",
    "Dataset",
    "BusinessRule", "RuleType", "default_config",
    "PrioritizationWeights", "PRESET_PROFILES",
]
