from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from alchemist.errors import LoadError
from alchemist.io.export import write_export
from alchemist.io.loader import load_file
from alchemist.models.weights import PrioritizationWeights
from alchemist.rules import RuleRegistry
from alchemist.utils.logging_setup import get_logger, setup_logging
from alchemist.utils.structured_logging import bind_context, clear_context
from alchemist.workspace import Workspace

LEVELS = ["WARNING", "INFO", "DEBUG", "TRACE"]

logger = get_logger("alchemist.cli")


def _load_rules(path: Optional[str]) -> RuleRegistry:
    if not path:
        return RuleRegistry()
    try:
        doc = json.loads(Path(path).read_text(encoding="utf-8-sig"))
        # Accept a previously exported rules document or a bare list
        items = doc.get("rules", []) if isinstance(doc, dict) else doc
        return RuleRegistry.from_dicts(items)
    except Exception as exc:
        logger.error("Cannot load rules from %s: %s: %s", path, type(exc).__name__, exc)
        raise LoadError(Path(path).name) from exc


def _load_weights(path: Optional[str]) -> PrioritizationWeights:
    if not path:
        return PrioritizationWeights()
    try:
        doc = json.loads(Path(path).read_text(encoding="utf-8-sig"))
        if isinstance(doc, dict) and "prioritization" in doc:
            doc = doc["prioritization"].get("weights", {})
        return PrioritizationWeights.from_dict(doc)
    except Exception as exc:
        logger.error("Cannot load weights from %s: %s: %s", path, type(exc).__name__, exc)
        raise LoadError(Path(path).name) from exc


def _cmd_validate(args: argparse.Namespace) -> int:
    ws = Workspace()
    ws.load(load_file(args.file))
    report = ws.report

    if args.json_out:
        print(json.dumps({"errors": report.errors, "warnings": report.warnings}, indent=2))
    else:
        print(f"Records: {ws.dataset.counts()}")
        print(f"Errors ({len(report.errors)}):")
        for e in report.errors:
            print(f" - {e}")
        print(f"Warnings ({len(report.warnings)}):")
        for w in report.warnings:
            print(f" - {w}")
    return 1 if report.has_errors else 0


def _cmd_export(args: argparse.Namespace) -> int:
    ws = Workspace(rules=_load_rules(args.rules), weights=_load_weights(args.weights))
    ws.load(load_file(args.file))
    written = write_export(ws.export_bundle(base_name=args.name), args.out)
    for path in written:
        print(path)
    if ws.report.has_errors:
        print(f"Exported with {len(ws.report.errors)} validation errors", file=sys.stderr)
    return 0


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="alchemist", description="Data Alchemist (headless)")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--log-json", action="store_true", help="Render load/export events as JSON")
    sub = p.add_subparsers(dest="command", required=True)

    pv = sub.add_parser("validate", help="Validate a JSON/CSV/XLSX data file")
    pv.add_argument("file")
    pv.add_argument("--json", dest="json_out", action="store_true", help="JSON output")
    pv.set_defaults(func=_cmd_validate)

    pe = sub.add_parser("export", help="Write the CSV/JSON export files")
    pe.add_argument("file")
    pe.add_argument("--out", required=True, help="Output directory")
    pe.add_argument("--name", default=None, help="Base file name")
    pe.add_argument("--rules", default=None, help="Rules JSON (exported document or list)")
    pe.add_argument("--weights", default=None, help="Weights JSON")
    pe.set_defaults(func=_cmd_export)

    args = p.parse_args(argv)
    setup_logging(
        level=LEVELS[min(args.verbose, len(LEVELS) - 1)], log_file=None, json_events=args.log_json,
    )

    bind_context(command=args.command)
    try:
        return args.func(args)
    except LoadError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    finally:
        clear_context()


if __name__ == "__main__":
    raise SystemExit(main())
