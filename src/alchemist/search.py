"""
Keyword Search
==============
Free-text filtering over the three tables: lower-case substring matching
plus a fixed set of keyword triggers ("high priority", "expert",
"long duration", skill names, "group a"...).

Triggers that fire for the same table are combined with AND by default.
``KeywordMode.LAST`` keeps the older behavior where the last trigger in
evaluation order replaces the earlier ones.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from alchemist.config import SETTINGS, Settings
from alchemist.models.dataset import Dataset
from alchemist.models.entities import Client, Task, Worker
from alchemist.utils.logging_setup import get_logger

logger = get_logger("alchemist.search")

Predicate = Callable[[object], bool]


class KeywordMode(str, Enum):
    """How keyword triggers on the same table combine."""
    ALL = "all"    # every trigger must hold
    LAST = "last"  # last trigger replaces earlier ones


@dataclass
class SearchResult:
    """Filtered copies of the three tables."""
    clients: List[Client] = field(default_factory=list)
    workers: List[Worker] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    triggers: List[str] = field(default_factory=list)

    @classmethod
    def unfiltered(cls, dataset: Dataset) -> "SearchResult":
        return cls(list(dataset.clients), list(dataset.workers), list(dataset.tasks))

    def counts(self) -> Dict[str, int]:
        return {"clients": len(self.clients), "workers": len(self.workers), "tasks": len(self.tasks)}


def _has_number(query: str, value: Optional[int]) -> bool:
    return value is not None and str(value) in query


def _at_least(value: Optional[int], threshold: int) -> bool:
    return value is not None and value >= threshold


def _at_most(value: Optional[int], threshold: int) -> bool:
    return value is not None and value <= threshold


def _client_matches(c: Client, q: str, cfg: Settings) -> bool:
    if q in c.client_name.lower() or q in c.group_tag.lower():
        return True
    if "priority" not in q:
        return False
    return (
        _has_number(q, c.priority_level)
        or ("high" in q and _at_least(c.priority_level, cfg.high_priority_min))
        or ("low" in q and _at_most(c.priority_level, cfg.low_priority_max))
    )


def _worker_matches(w: Worker, q: str) -> bool:
    if q in w.worker_name.lower() or q in w.skills.lower() or q in w.worker_group.lower():
        return True
    return "qualification" in q and _has_number(q, w.qualification_level)


def _task_matches(t: Task, q: str) -> bool:
    if q in t.task_name.lower() or q in t.category.lower() or q in t.required_skills.lower():
        return True
    return "duration" in q and _has_number(q, t.duration)


def _keyword_triggers(q: str, cfg: Settings) -> List[tuple]:
    """
    Return ``(label, table, predicate)`` for every trigger in the query,
    in evaluation order.
    """
    triggers = []

    if "high priority" in q or "priority high" in q:
        triggers.append(("high priority", "clients",
                         lambda c: _at_least(c.priority_level, cfg.high_priority_min)))

    if "skilled" in q or "expert" in q:
        triggers.append(("expert", "workers",
                         lambda w: _at_least(w.qualification_level, cfg.expert_qualification_min)))

    if "long duration" in q or "duration long" in q:
        triggers.append(("long duration", "tasks",
                         lambda t: _at_least(t.duration, cfg.long_duration_min)))

    if "short duration" in q or "duration short" in q:
        triggers.append(("short duration", "tasks",
                         lambda t: _at_most(t.duration, cfg.short_duration_max)))

    skill = next((s for s in cfg.skill_keywords if s in q), None)
    if skill:
        triggers.append((f"skill:{skill}", "workers", lambda w: skill in w.skills.lower()))
        triggers.append((f"skill:{skill}", "tasks", lambda t: skill in t.required_skills.lower()))

    match = re.search(rf"group\s*([{cfg.group_letters}])\b", q)
    if match:
        tag = f"Group{match.group(1).upper()}"
        triggers.append((f"group:{tag}", "clients", lambda c: tag in c.group_tag))
        triggers.append((f"group:{tag}", "workers", lambda w: tag in w.worker_group))

    return triggers


def search(
    query: str,
    dataset: Dataset,
    mode: KeywordMode = KeywordMode.ALL,
    settings: Settings = SETTINGS,
) -> SearchResult:
    """
    Filter the three tables with a free-text query.

    Args:
        query: User query ("high priority clients", "group a workers"...)
        dataset: Full tables
        mode: How keyword triggers on one table combine

    Returns:
        SearchResult with filtered copies; a blank query returns everything
    """
    if not query or not query.strip():
        return SearchResult.unfiltered(dataset)

    q = query.lower()
    result = SearchResult(
        clients=[c for c in dataset.clients if _client_matches(c, q, settings)],
        workers=[w for w in dataset.workers if _worker_matches(w, q)],
        tasks=[t for t in dataset.tasks if _task_matches(t, q)],
    )

    per_table: Dict[str, List[Predicate]] = {}
    for label, table, predicate in _keyword_triggers(q, settings):
        if label not in result.triggers:
            result.triggers.append(label)
        if mode == KeywordMode.LAST:
            per_table[table] = [predicate]
        else:
            per_table.setdefault(table, []).append(predicate)

    for table, predicates in per_table.items():
        rows = dataset.table(table)
        setattr(result, table, [r for r in rows if all(p(r) for p in predicates)])

    logger.debug("search %r (%s) -> %s, triggers=%s", query, mode.value, result.counts(), result.triggers)
    return result
