"""
Folds server-confirmed menus into the client's ordered menu collection.

Merging is by menu id and at menu granularity only: a confirmed menu replaces
the held one entirely, meals and dishes included. Functions return a new list
and never mutate their input.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from domain.models.menu import Menu

logger = logging.getLogger("menuhub.reconciler")


def reconcile(menus: Sequence[Menu], incoming: Menu) -> List[Menu]:
    """
    Merge one confirmed menu.

    - An entry with the same id is replaced in place.
    - Otherwise the menu is appended, unless a stale entry with a different
      id holds the same date; the incoming menu then takes that position.
    Any other entry for the same date is dropped, so a date maps to at most
    one menu.
    """
    position = next((i for i, menu in enumerate(menus) if menu.id == incoming.id), None)
    if position is None:
        position = next((i for i, menu in enumerate(menus) if menu.date == incoming.date), None)
        if position is not None:
            logger.info(
                "Menu %d supersedes menu %d for %s",
                incoming.id,
                menus[position].id,
                incoming.date,
            )

    merged: List[Menu] = []
    for index, menu in enumerate(menus):
        if index == position:
            merged.append(incoming)
        elif menu.date != incoming.date:
            merged.append(menu)
    if position is None:
        merged.append(incoming)
    return merged


def reconcile_all(menus: Sequence[Menu], incoming: Iterable[Menu]) -> List[Menu]:
    merged = list(menus)
    for menu in incoming:
        merged = reconcile(merged, menu)
    return merged


def discard(menus: Sequence[Menu], menu_id: int) -> List[Menu]:
    """Remove a deleted menu; unknown ids leave the collection unchanged."""
    return [menu for menu in menus if menu.id != menu_id]
