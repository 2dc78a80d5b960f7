"""Client, Worker and Task records."""
import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from alchemist.config import CLIENT_COLUMNS, TASK_COLUMNS, WORKER_COLUMNS
from alchemist.parsing import parse_comma_separated, parse_int_or_zero, parse_slots, safe_int


def _text(value: Any) -> str:
    """Normalize a cell to a string (None/NaN become empty), keeping it as typed."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


class EntityMixin:
    """Column mapping shared by the three entity tables.

    Subclasses declare ``COLUMNS`` (export order), ``FIELDS`` (column ->
    attribute), ``INT_COLUMNS`` and ``KEY_COLUMN``.
    """

    TABLE: ClassVar[str] = ""
    COLUMNS: ClassVar[List[str]] = []
    FIELDS: ClassVar[Dict[str, str]] = {}
    INT_COLUMNS: ClassVar[Tuple[str, ...]] = ()
    KEY_COLUMN: ClassVar[str] = ""
    NAME_COLUMN: ClassVar[str] = ""

    @property
    def key(self) -> str:
        return getattr(self, self.FIELDS[self.KEY_COLUMN])

    @property
    def display_name(self) -> str:
        return getattr(self, self.FIELDS[self.NAME_COLUMN])

    @classmethod
    def editable_columns(cls) -> List[str]:
        return [c for c in cls.COLUMNS if c != cls.KEY_COLUMN]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a column-named dict in export order."""
        return {col: getattr(self, attr) for col, attr in self.FIELDS.items()}

    @classmethod
    def from_dict(cls, row: Dict[str, Any]):
        """Create from a row mapping; column names are matched case-insensitively."""
        lookup = {str(k).strip().lower(): v for k, v in row.items()}
        kwargs = {}
        for col, attr in cls.FIELDS.items():
            value = lookup.get(col.lower())
            if col in cls.INT_COLUMNS:
                kwargs[attr] = safe_int(value)
            else:
                kwargs[attr] = _text(value)
        return cls(**kwargs)


def apply_cell_edit(entity, column: str, value: Any):
    """
    Return a copy of ``entity`` with one cell changed.

    Integer columns use "parse or 0" semantics. The ID column is read-only.
    """
    if column not in entity.FIELDS:
        raise ValueError(f"Unknown column for {entity.TABLE}: {column}")
    if column == entity.KEY_COLUMN:
        raise ValueError(f"{column} is read-only")

    if column in entity.INT_COLUMNS:
        converted = parse_int_or_zero(value)
    else:
        converted = _text(value)
    return dataclasses.replace(entity, **{entity.FIELDS[column]: converted})


@dataclass
class Client(EntityMixin):
    """A customer requesting tasks."""

    TABLE: ClassVar[str] = "clients"
    COLUMNS: ClassVar[List[str]] = CLIENT_COLUMNS
    FIELDS: ClassVar[Dict[str, str]] = {
        "ClientID": "client_id",
        "ClientName": "client_name",
        "PriorityLevel": "priority_level",
        "RequestedTaskIDs": "requested_task_ids",
        "GroupTag": "group_tag",
        "AttributesJSON": "attributes_json",
    }
    INT_COLUMNS: ClassVar[Tuple[str, ...]] = ("PriorityLevel",)
    KEY_COLUMN: ClassVar[str] = "ClientID"
    NAME_COLUMN: ClassVar[str] = "ClientName"

    client_id: str
    client_name: str = ""
    priority_level: Optional[int] = None
    requested_task_ids: str = ""
    group_tag: str = ""
    attributes_json: str = ""

    # Parsed once per instance
    requested_task_list: List[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.requested_task_list = parse_comma_separated(self.requested_task_ids)


@dataclass
class Worker(EntityMixin):
    """A person who can execute tasks."""

    TABLE: ClassVar[str] = "workers"
    COLUMNS: ClassVar[List[str]] = WORKER_COLUMNS
    FIELDS: ClassVar[Dict[str, str]] = {
        "WorkerID": "worker_id",
        "WorkerName": "worker_name",
        "Skills": "skills",
        "AvailableSlots": "available_slots",
        "MaxLoadPerPhase": "max_load_per_phase",
        "WorkerGroup": "worker_group",
        "QualificationLevel": "qualification_level",
    }
    INT_COLUMNS: ClassVar[Tuple[str, ...]] = ("MaxLoadPerPhase", "QualificationLevel")
    KEY_COLUMN: ClassVar[str] = "WorkerID"
    NAME_COLUMN: ClassVar[str] = "WorkerName"

    worker_id: str
    worker_name: str = ""
    skills: str = ""
    available_slots: str = ""
    max_load_per_phase: Optional[int] = None
    worker_group: str = ""
    qualification_level: Optional[int] = None

    skill_list: List[str] = field(init=False, repr=False, compare=False)
    slots: List[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.skill_list = parse_comma_separated(self.skills)
        self.slots = parse_slots(self.available_slots)


@dataclass
class Task(EntityMixin):
    """A unit of work requested by clients."""

    TABLE: ClassVar[str] = "tasks"
    COLUMNS: ClassVar[List[str]] = TASK_COLUMNS
    FIELDS: ClassVar[Dict[str, str]] = {
        "TaskID": "task_id",
        "TaskName": "task_name",
        "Category": "category",
        "Duration": "duration",
        "RequiredSkills": "required_skills",
        "PreferredPhases": "preferred_phases",
        "MaxConcurrent": "max_concurrent",
    }
    INT_COLUMNS: ClassVar[Tuple[str, ...]] = ("Duration", "MaxConcurrent")
    KEY_COLUMN: ClassVar[str] = "TaskID"
    NAME_COLUMN: ClassVar[str] = "TaskName"

    task_id: str
    task_name: str = ""
    category: str = ""
    duration: Optional[int] = None
    required_skills: str = ""
    preferred_phases: str = ""
    max_concurrent: Optional[int] = None

    required_skill_list: List[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.required_skill_list = parse_comma_separated(self.required_skills)


ENTITY_TYPES = {
    "clients": Client,
    "workers": Worker,
    "tasks": Task,
}
