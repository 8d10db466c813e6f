"""Lenient parsing helpers for source data and filter input.

Nothing in here raises on malformed values: bad timestamps become ``None``
and out-of-vocabulary strings become ``"unknown"`` so that downstream
predicates simply fail to match them.
"""

from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional

UNKNOWN = "unknown"
UNSET_VALUES = (None, "", "all")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse ISO dates/datetimes into aware UTC datetimes; ``None`` when unparsable."""
    if value is None or value == "" or value == "-":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_choice(value: Any, allowed: Iterable[str]) -> Optional[str]:
    """Return value when it belongs to the vocabulary, ``"unknown"`` otherwise."""
    if value is None or value == "":
        return None
    text = str(value).strip().lower()
    if text in set(allowed):
        return text
    return UNKNOWN


def is_unset(value: Any) -> bool:
    """Filter widgets send None, "" or "all" to mean "no constraint"."""
    if isinstance(value, str):
        return value.strip().lower() in ("", "all")
    return value in UNSET_VALUES


def coerce_number(value: Any) -> Optional[float]:
    """Best-effort numeric conversion used by the stats reducer."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
