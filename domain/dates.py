"""
Calendar date helpers.

Menus are keyed by a canonical "YYYY-MM-DD" string. The backend may send full
timestamps; only the calendar-date part as written is kept.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime, str]

_DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")


def parse_calendar_date(value: DateLike) -> date:
    """Reduce a date, datetime or ISO string to its calendar date.

    Raises:
        ValueError: if the value is not a date or does not start with a valid
            YYYY-MM-DD date
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _DATE_PREFIX.match(value.strip())
        if match:
            try:
                return date.fromisoformat(match.group(1))
            except ValueError:
                pass
    raise ValueError(f"Malformed date: {value!r}")


def canonical_date(value: DateLike) -> str:
    """Canonical "YYYY-MM-DD" form of a date-like value."""
    return parse_calendar_date(value).isoformat()
