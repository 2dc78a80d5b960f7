"""
Data Validation
===============
Cross-check the three tables for range and referential-integrity problems.

Two severities only: errors (data-quality issues highlighted in the grid)
and warnings (informational). Validation is advisory; nothing is blocked
by its findings. Messages embed the entity ID and are rebuilt from scratch
on every call.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from alchemist.config import SETTINGS, TABLES
from alchemist.models.dataset import Dataset
from alchemist.models.rules import BusinessRule
from alchemist.utils.logging_setup import get_logger, log_function_call

logger = get_logger("alchemist.validation")


@dataclass
class ValidationReport:
    """Errors and warnings for one dataset snapshot."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    # {table: {entity id}} for rows carrying at least one error
    flagged: Dict[str, Set[str]] = field(
        default_factory=lambda: {t: set() for t in TABLES}, repr=False, compare=False
    )

    def add_error(self, table: str, key: str, message: str):
        self.errors.append(message)
        self.flagged[table].add(key)

    def add_warning(self, message: str):
        self.warnings.append(message)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_error(self, table: str, key: str) -> bool:
        """True if the row with this ID produced an error."""
        return key in self.flagged.get(table, set())

    def rows_with_errors(self, table: str) -> Set[str]:
        return set(self.flagged.get(table, set()))

    def error_counts(self) -> Dict[str, int]:
        """Number of entities with at least one error, per table."""
        return {t: len(self.flagged.get(t, set())) for t in TABLES}


def _fmt(value: Optional[int]) -> str:
    return "(not a number)" if value is None else str(value)


def _below_one(value: Optional[int]) -> bool:
    return value is None or value < 1


@log_function_call
def validate_dataset(dataset: Dataset) -> ValidationReport:
    """
    Validate every client, worker and task.

    Args:
        dataset: The loaded tables

    Returns:
        ValidationReport with errors and warnings in table order
    """
    report = ValidationReport()
    low, high = SETTINGS.priority_range
    task_ids = dataset.task_ids()

    for client in dataset.clients:
        cid = client.client_id
        p = client.priority_level
        if p is None or p < low or p > high:
            report.add_error("clients", cid, f"Client {cid}: Invalid PriorityLevel {_fmt(p)}")

        invalid = [t for t in client.requested_task_list if t not in task_ids]
        if invalid:
            report.add_error("clients", cid, f"Client {cid}: Invalid TaskIDs: {', '.join(invalid)}")

    for worker in dataset.workers:
        wid = worker.worker_id
        if not worker.slots:
            report.add_error("workers", wid, f"Worker {wid}: Invalid AvailableSlots format")
        if _below_one(worker.max_load_per_phase):
            report.add_error(
                "workers", wid,
                f"Worker {wid}: Invalid MaxLoadPerPhase {_fmt(worker.max_load_per_phase)}",
            )

    covered = dataset.worker_skills()
    for task in dataset.tasks:
        tid = task.task_id
        if _below_one(task.duration):
            report.add_error("tasks", tid, f"Task {tid}: Invalid Duration {_fmt(task.duration)}")
        if _below_one(task.max_concurrent):
            report.add_error(
                "tasks", tid, f"Task {tid}: Invalid MaxConcurrent {_fmt(task.max_concurrent)}"
            )

        missing = [s for s in task.required_skill_list if s not in covered]
        if missing:
            report.add_warning(f"Task {tid}: Skills not covered by any worker: {', '.join(missing)}")

    logger.info(
        "Validated %d clients, %d workers, %d tasks: %d errors, %d warnings",
        len(dataset.clients), len(dataset.workers), len(dataset.tasks),
        len(report.errors), len(report.warnings),
    )
    for msg in report.errors:
        logger.debug("error: %s", msg)
    return report


def validate_export(dataset: Dataset, rules: List[BusinessRule]) -> Tuple[bool, List[str]]:
    """
    Pre-export completeness check.

    Reports empty tables, rows missing their ID or name (1-based row
    numbers) and rules missing a name. Advisory only.
    """
    errors: List[str] = []

    if not dataset.clients:
        errors.append("No clients data to export")
    if not dataset.workers:
        errors.append("No workers data to export")
    if not dataset.tasks:
        errors.append("No tasks data to export")

    for label, rows in (("Client", dataset.clients), ("Worker", dataset.workers), ("Task", dataset.tasks)):
        for i, row in enumerate(rows, start=1):
            if not row.key.strip():
                errors.append(f"{label} {i}: Missing {row.KEY_COLUMN}")
            if not row.display_name.strip():
                errors.append(f"{label} {i}: Missing {row.NAME_COLUMN}")

    for i, rule in enumerate(rules, start=1):
        if not rule.name.strip():
            errors.append(f"Rule {i}: Missing name")

    return not errors, errors
