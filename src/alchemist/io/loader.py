"""Decode uploaded files and map their rows into typed collections."""
import io
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from alchemist.config import SETTINGS, TABLES
from alchemist.errors import LoadError
from alchemist.models.dataset import Dataset
from alchemist.models.entities import ENTITY_TYPES
from alchemist.utils.logging_setup import get_logger, log_function_call
from alchemist.utils.structured_logging import get_structured_logger

logger = get_logger("alchemist.io.loader")
events = get_structured_logger("alchemist.io.loader")

SUPPORTED_EXTENSIONS = (".json", ".csv", ".xlsx")


def detect_table(rows: List[Dict[str, Any]]) -> Optional[str]:
    """Guess which table a flat list of rows belongs to from its ID column."""
    if not rows or not isinstance(rows[0], dict):
        return None
    header = {str(k).strip().lower() for k in rows[0]}
    for table in TABLES:
        if ENTITY_TYPES[table].KEY_COLUMN.lower() in header:
            return table
    return None


def _rows(raw: Any, table: str) -> List[Dict[str, Any]]:
    """Pick the rows for one table out of a decoded payload."""
    if isinstance(raw, list):
        if detect_table(raw) != table:
            return []
        return [r for r in raw if isinstance(r, dict)]
    if not isinstance(raw, dict):
        return []
    for key in SETTINGS.table_keys[table]:
        value = raw.get(key)
        if isinstance(value, list):
            return [r for r in value if isinstance(r, dict)]
    return []


@log_function_call
def parse_payload(raw: Any) -> Dataset:
    """
    Map decoded file content into a Dataset.

    Args:
        raw: Either an object with the named table keys or a list of
            row objects (CSV/XLSX), which fills the one table whose ID
            column appears in the header. Unknown shapes give empty
            collections.

    Returns:
        Dataset with whatever collections were found
    """
    values = {}
    for table in TABLES:
        entity_cls = ENTITY_TYPES[table]
        values[table] = [entity_cls.from_dict(row) for row in _rows(raw, table)]

    dataset = Dataset(**values)
    logger.debug("Parsed payload: %s", dataset.counts())
    return dataset


def _frame_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    return df.to_dict(orient="records")


def decode_upload(name: str, content: Union[bytes, str]) -> Any:
    """
    Decode raw file bytes by extension.

    JSON gives the decoded object; CSV and XLSX give a list of row dicts
    (first row is the header, first sheet only).
    """
    suffix = Path(name).suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported file type: {suffix or name}")

    if suffix == ".json":
        text = content.decode("utf-8-sig") if isinstance(content, bytes) else content
        return json.loads(text)

    if isinstance(content, str):
        content = content.encode("utf-8")
    buffer = io.BytesIO(content)

    if suffix == ".csv":
        df = pd.read_csv(buffer, dtype=str, keep_default_na=False)
    else:
        df = pd.read_excel(buffer, sheet_name=0, dtype=str, engine="openpyxl")
    return _frame_to_records(df)


def read_upload(name: str, content: Union[bytes, str]) -> Dataset:
    """
    Decode an uploaded file and parse it into a Dataset.

    Raises:
        LoadError: when the file cannot be decoded (generic message,
            original exception chained)
    """
    try:
        raw = decode_upload(name, content)
    except Exception as exc:
        logger.error("Failed to decode %s: %s: %s", name, type(exc).__name__, exc)
        raise LoadError(name) from exc

    dataset = parse_payload(raw)
    events.info("file_loaded", file=name, **dataset.counts())
    return dataset


def load_file(path: Union[str, Path]) -> Dataset:
    """Read a JSON/CSV/XLSX file from disk."""
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        logger.error("Cannot read %s: %s", path, exc)
        raise LoadError(path.name) from exc
    return read_upload(path.name, content)
