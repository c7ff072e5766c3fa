# /classroom/services/coercion.py

"""
Small, pure conversion helpers shared by the field mapper, the repositories
and the aggregation functions.
"""

import math
from datetime import date, datetime
from typing import Any, Mapping, Optional

from .exceptions import InvalidArgumentError


def unwrap_reference(value: Any) -> Optional[int]:
    """
    Extracts an integer id from a reference value.

    The backend may hand back a relation either as a bare id or lazily
    resolved into an object such as {"Id": 4, "Name": "Emma Johnson"}.
    Anything that does not resolve to a whole number yields None.
    """
    if isinstance(value, Mapping):
        value = value.get("Id", value.get("id"))
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not number.is_integer():
        return None
    return int(number)


def coerce_id(value: Any, label: str = "id") -> int:
    """Coerces a record id to a positive integer or raises InvalidArgumentError."""
    record_id = None if isinstance(value, str) and not value.strip() else unwrap_reference(value)
    if record_id is None or record_id <= 0:
        raise InvalidArgumentError(f"Invalid {label}: {value!r}")
    return record_id


def parse_day(value: Any) -> Optional[date]:
    """
    Returns the calendar day of a date-like value, ignoring time-of-day.

    Accepts date and datetime objects and ISO-8601 strings with or without a
    time component. Unparseable values yield None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def require_day(value: Any) -> date:
    day = parse_day(value)
    if day is None:
        raise InvalidArgumentError(f"Invalid date: {value!r}")
    return day


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))
