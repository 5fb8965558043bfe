"""
Date lookups over a menu collection.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Sequence

from domain.dates import DateLike, canonical_date, parse_calendar_date
from domain.models.menu import Menu


def index_by_date(menus: Sequence[Menu], target: DateLike) -> Optional[Menu]:
    """First menu whose canonical date equals the target's, or None."""
    key = canonical_date(target)
    for menu in menus:
        if menu.date == key:
            return menu
    return None


def week_start(reference: DateLike) -> date:
    """Monday of the week containing the reference date."""
    day = parse_calendar_date(reference)
    return day - timedelta(days=day.weekday())


def week_of(reference: DateLike) -> List[date]:
    """The seven dates, Monday to Sunday, of the reference date's week."""
    monday = week_start(reference)
    return [monday + timedelta(days=offset) for offset in range(7)]
