"""Lenient coercion helpers shared by the roster and settings models.

Roster data arrives from spreadsheets and hand-edited forms, so these helpers
never raise: anything that cannot be interpreted comes back as ``None`` (or
``0`` for counts) and the caller decides which default applies.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any, Optional

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])(?::[0-5][0-9](?:\.\d+)?)?$")


def parse_time(value: Any) -> Optional[time]:
    """Parse ``H:MM``/``HH:MM`` (seconds tolerated and dropped)."""

    if isinstance(value, datetime):
        return value.time().replace(second=0, microsecond=0)
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        return None
    match = TIME_PATTERN.match(value.strip())
    if not match:
        return None
    return time(int(match.group(1)), int(match.group(2)))


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


def parse_date(value: Any) -> Optional[date]:
    """Parse a calendar date from a date, datetime or ISO-8601 string."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    candidate = value.strip()[:10]
    try:
        return date.fromisoformat(candidate)
    except ValueError:
        return None


def coerce_count(value: Any) -> int:
    """Return a non-negative integer head count, or 0 when unusable."""

    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0)
    if isinstance(value, str):
        try:
            return max(int(float(value.strip())), 0)
        except ValueError:
            return 0
    return 0


def coerce_flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if not normalized:
            return default
        return normalized not in {"false", "0", "no", "off", "n"}
    return bool(value)
