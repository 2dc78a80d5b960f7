"""The three entity collections loaded from one file."""
from dataclasses import dataclass, field
from typing import Dict, List, Set

from alchemist.config import TABLES
from alchemist.models.entities import Client, Task, Worker


@dataclass
class Dataset:
    """Clients, workers and tasks as typed lists."""

    clients: List[Client] = field(default_factory=list)
    workers: List[Worker] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)

    def table(self, name: str) -> list:
        if name not in TABLES:
            raise ValueError(f"Unknown table: {name}")
        return getattr(self, name)

    def replace_table(self, name: str, rows: list) -> "Dataset":
        """Return a new dataset with one collection swapped."""
        if name not in TABLES:
            raise ValueError(f"Unknown table: {name}")
        values = {t: list(getattr(self, t)) for t in TABLES}
        values[name] = list(rows)
        return Dataset(**values)

    def merge(self, other: "Dataset") -> "Dataset":
        """Take every non-empty collection of ``other``, keep the rest."""
        values = {}
        for t in TABLES:
            incoming = getattr(other, t)
            values[t] = list(incoming) if incoming else list(getattr(self, t))
        return Dataset(**values)

    def counts(self) -> Dict[str, int]:
        return {t: len(getattr(self, t)) for t in TABLES}

    def task_ids(self) -> Set[str]:
        return {t.task_id for t in self.tasks}

    def worker_skills(self) -> Set[str]:
        """Union of every worker's skills."""
        skills: Set[str] = set()
        for w in self.workers:
            skills.update(w.skill_list)
        return skills

    @property
    def is_empty(self) -> bool:
        return not (self.clients or self.workers or self.tasks)
