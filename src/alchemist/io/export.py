"""
Export Formatter
================
Serialize the current state to three CSV files and two JSON documents:

    <base>-clients.csv, <base>-workers.csv, <base>-tasks.csv,
    <base>-rules.json (rules + weights + metadata),
    <base>-summary.json (record counts, rule counts, weight totals).

Export proceeds regardless of validation state.
"""
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from alchemist.config import CLIENT_COLUMNS, SETTINGS, TASK_COLUMNS, WORKER_COLUMNS
from alchemist.models.dataset import Dataset
from alchemist.models.entities import Client, Task, Worker
from alchemist.models.rules import BusinessRule
from alchemist.models.weights import CRITERIA, PrioritizationWeights
from alchemist.utils.logging_setup import get_logger
from alchemist.utils.structured_logging import get_structured_logger
from alchemist.validation import ValidationReport, validate_dataset

logger = get_logger("alchemist.io.export")
events = get_structured_logger("alchemist.io.export")

CSV_MIME = "text/csv"
JSON_MIME = "application/json"


@dataclass
class ExportFile:
    """One downloadable blob."""
    filename: str
    content: str
    mime: str


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def default_base_name(now: Optional[datetime] = None) -> str:
    """``data-alchemist-export-YYYY-MM-DDTHH-MM-SS``"""
    now = now or datetime.now(timezone.utc)
    return f"{SETTINGS.export_prefix}-{now.strftime('%Y-%m-%dT%H-%M-%S')}"


def to_csv(rows: Iterable[Dict[str, Any]], headers: List[str]) -> str:
    """
    Header row plus one line per row, columns in ``headers`` order.

    Values containing a comma, quote or line break are quoted and internal
    quotes doubled. Missing values are written as empty cells.
    """
    records = [
        {h: ("" if row.get(h) is None else row.get(h)) for h in headers}
        for row in rows
    ]
    df = pd.DataFrame(records, columns=headers, dtype=object)
    return df.to_csv(index=False, lineterminator="\n")


def export_clients_csv(clients: List[Client]) -> str:
    return to_csv((c.to_dict() for c in clients), CLIENT_COLUMNS)


def export_workers_csv(workers: List[Worker]) -> str:
    return to_csv((w.to_dict() for w in workers), WORKER_COLUMNS)


def export_tasks_csv(tasks: List[Task]) -> str:
    return to_csv((t.to_dict() for t in tasks), TASK_COLUMNS)


def build_rules_document(rules: List[BusinessRule], weights: PrioritizationWeights) -> Dict[str, Any]:
    """Rules, weights and metadata in the exported JSON shape."""
    rule_types: List[str] = []
    for r in rules:
        if r.type.value not in rule_types:
            rule_types.append(r.type.value)

    return {
        "metadata": {
            "generatedAt": _iso_now(),
            "version": SETTINGS.export_version,
            "description": "Business rules and prioritization weights for resource allocation",
        },
        "prioritization": {
            "weights": weights.to_dict(),
            "totalWeight": weights.total(),
            "criteria": {key: desc for key, (_, desc) in CRITERIA.items()},
        },
        "rules": [r.to_dict() for r in rules],
        "validation": {
            "ruleCount": len(rules),
            "activeRules": sum(1 for r in rules if r.enabled),
            "ruleTypes": rule_types,
        },
    }


def build_summary_document(
    dataset: Dataset,
    rules: List[BusinessRule],
    weights: PrioritizationWeights,
    report: Optional[ValidationReport] = None,
) -> Dict[str, Any]:
    """Record counts, rule counts, weight totals and per-table error counts."""
    report = report or validate_dataset(dataset)
    with_errors = report.error_counts()
    return {
        "exportInfo": {
            "timestamp": _iso_now(),
            "totalRecords": dataset.counts(),
            "rules": {
                "total": len(rules),
                "active": sum(1 for r in rules if r.enabled),
            },
            "prioritization": {
                "totalWeight": weights.total(),
                "criteria": len(weights.to_dict()),
            },
        },
        "dataQuality": {
            "clientsWithErrors": with_errors["clients"],
            "workersWithErrors": with_errors["workers"],
            "tasksWithErrors": with_errors["tasks"],
        },
    }


def build_export_bundle(
    dataset: Dataset,
    rules: List[BusinessRule],
    weights: PrioritizationWeights,
    base_name: Optional[str] = None,
    report: Optional[ValidationReport] = None,
) -> Dict[str, ExportFile]:
    """
    Build the five export blobs, keyed by filename.

    Args:
        dataset: Current tables (exported as-is, errors included)
        rules: Rules in display order
        weights: Prioritization weights
        base_name: File name prefix (defaults to a timestamped name)
        report: Validation report for the summary (computed if omitted)
    """
    base = base_name or default_base_name()
    files = [
        ExportFile(f"{base}-clients.csv", export_clients_csv(dataset.clients), CSV_MIME),
        ExportFile(f"{base}-workers.csv", export_workers_csv(dataset.workers), CSV_MIME),
        ExportFile(f"{base}-tasks.csv", export_tasks_csv(dataset.tasks), CSV_MIME),
        ExportFile(
            f"{base}-rules.json",
            json.dumps(build_rules_document(rules, weights), indent=2, ensure_ascii=False),
            JSON_MIME,
        ),
        ExportFile(
            f"{base}-summary.json",
            json.dumps(build_summary_document(dataset, rules, weights, report), indent=2, ensure_ascii=False),
            JSON_MIME,
        ),
    ]
    events.info("export_built", base=base, files=len(files), rules=len(rules), **dataset.counts())
    return {f.filename: f for f in files}


def write_export(bundle: Dict[str, ExportFile], directory: Union[str, Path]) -> List[Path]:
    """Write every blob of a bundle into ``directory``."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for export_file in bundle.values():
        path = out_dir / export_file.filename
        path.write_text(export_file.content, encoding="utf-8")
        written.append(path)
        logger.info("Wrote %s", path)
    return written
