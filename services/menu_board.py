from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from domain.dates import DateLike, canonical_date
from domain.models.menu import Menu
from domain.models.sync import Confirmed, MenuDraft, Pending
from services.date_index import index_by_date, week_of
from services.reconciler import discard, reconcile, reconcile_all

logger = logging.getLogger("menuhub.board")


class MenuBoard:
    """
    The client's menu collection, source of truth for every screen.

    ``menus`` only ever holds backend-confirmed menus. Menus being created are
    tracked apart in ``pending``, keyed by correlation token, so no
    client-made id can leak into the confirmed collection.
    """

    def __init__(self, menus: Iterable[Menu] = ()):
        self.menus: List[Menu] = reconcile_all([], menus)
        self.pending: Dict[str, Pending[MenuDraft]] = {}

    def menu_for(self, day: DateLike) -> Optional[Menu]:
        return index_by_date(self.menus, day)

    def pending_for(self, day: DateLike) -> Optional[Pending[MenuDraft]]:
        key = canonical_date(day)
        return next((p for p in self.pending.values() if p.value.date == key), None)

    def week(self, reference: DateLike) -> List[Tuple[date, Optional[Menu]]]:
        """Monday..Sunday of the reference week, each with its menu if any."""
        return [(day, self.menu_for(day)) for day in week_of(reference)]

    # ---------- pending lifecycle ----------

    def begin(self, draft: MenuDraft) -> Pending[MenuDraft]:
        pending = Pending(draft)
        self.pending[pending.token] = pending
        logger.debug("Pending menu %s for %s", pending.token, draft.date)
        return pending

    def confirm(self, pending: Pending[MenuDraft], menu: Menu) -> Confirmed[Menu]:
        self.pending.pop(pending.token, None)
        self.merge(menu)
        return Confirmed(menu)

    def abandon(self, pending: Pending[MenuDraft]) -> None:
        if self.pending.pop(pending.token, None) is not None:
            logger.debug("Abandoned pending menu for %s", pending.value.date)

    # ---------- confirmed state ----------

    def merge(self, menu: Menu) -> Menu:
        self.menus = reconcile(self.menus, menu)
        return menu

    def merge_all(self, menus: Iterable[Menu]) -> None:
        self.menus = reconcile_all(self.menus, menus)

    def discard(self, menu_id: int) -> None:
        self.menus = discard(self.menus, menu_id)
