"""
Application Settings
====================
Central source of truth for table keys, column layouts, search thresholds
and export defaults.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

# Fixed column order per table (also the CSV export order)
CLIENT_COLUMNS = [
    "ClientID", "ClientName", "PriorityLevel", "RequestedTaskIDs", "GroupTag", "AttributesJSON",
]
WORKER_COLUMNS = [
    "WorkerID", "WorkerName", "Skills", "AvailableSlots", "MaxLoadPerPhase",
    "WorkerGroup", "QualificationLevel",
]
TASK_COLUMNS = [
    "TaskID", "TaskName", "Category", "Duration", "RequiredSkills", "PreferredPhases",
    "MaxConcurrent",
]

TABLES = ("clients", "workers", "tasks")


@dataclass
class Settings:
    """Tunable constants shared by the library, the UI and the CLI."""

    # Upload payload keys, in lookup order
    table_keys: Dict[str, Tuple[str, ...]] = field(default_factory=lambda: {
        "clients": ("Clients 1", "clients"),
        "workers": ("Worker 1", "workers"),
        "tasks": ("Tasks 1", "tasks"),
    })

    # Validation
    priority_range: Tuple[int, int] = (1, 5)

    # Search
    high_priority_min: int = 4
    low_priority_max: int = 2
    expert_qualification_min: int = 4
    long_duration_min: int = 3
    short_duration_max: int = 2
    skill_keywords: List[str] = field(default_factory=lambda: [
        "coding", "ml", "testing", "design", "analysis", "reporting", "devops", "ui/ux", "data",
    ])
    group_letters: str = "abc"

    # Rules
    phase_choices: List[int] = field(default_factory=lambda: [1, 2, 3, 4, 5])
    group_choices: List[str] = field(default_factory=lambda: ["GroupA", "GroupB", "GroupC"])

    # Export
    export_prefix: str = "data-alchemist-export"
    export_version: str = "1.0"

    # Logging
    log_file: str = "logs/alchemist.log"
    log_level: str = "INFO"

    # UI
    max_errors_shown: int = 5
    max_warnings_shown: int = 3


SETTINGS = Settings()
