"""Parsers for the string-encoded lists and numbers found in uploaded rows."""
import json
import math
from typing import Any, List, Optional


def safe_int(value: Any) -> Optional[int]:
    """Convert a cell value to int, or None when it is not an integer."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or not value.is_integer():
            return None
        return int(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    if math.isnan(number) or not number.is_integer():
        return None
    return int(number)


def parse_int_or_zero(value: Any) -> int:
    """Grid edit conversion: anything unparseable becomes 0."""
    parsed = safe_int(value)
    return 0 if parsed is None else parsed


def parse_comma_separated(text: Any) -> List[str]:
    """Split ``"a, b,,c"`` into ``["a", "b", "c"]``."""
    if text is None:
        return []
    if isinstance(text, (list, tuple)):
        return [str(item).strip() for item in text if str(item).strip()]
    return [part.strip() for part in str(text).split(",") if part.strip()]


def parse_slots(text: Any) -> List[int]:
    """
    Parse an AvailableSlots cell.

    ``"1-3"`` is an inclusive range (only the first two parts count);
    anything else must be a JSON array of integers such as ``"[1,2,3]"``.
    Every failure yields an empty list.
    """
    if isinstance(text, (list, tuple)):
        values = [safe_int(v) for v in text]
        return [] if None in values else values
    if text is None:
        return []
    text = str(text)

    if "-" in text:
        parts = text.split("-")
        start, end = safe_int(parts[0]), safe_int(parts[1])
        if start is None or end is None:
            return []
        return list(range(start, end + 1))

    try:
        decoded = json.loads(text)
    except ValueError:
        return []
    if not isinstance(decoded, list):
        return []
    values = [safe_int(v) for v in decoded]
    if None in values:
        return []
    return values
