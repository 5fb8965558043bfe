"""
Tests for folding confirmed menus into the local collection and for the board
that holds it.
"""

from datetime import date

from domain.enums import MealType
from domain.models.sync import Confirmed, MenuDraft
from services.menu_board import MenuBoard
from services.reconciler import discard, reconcile, reconcile_all
from test_fixtures import make_item, make_meal, make_menu


class TestReconcile:
    def test_same_id_replaces_in_place(self):
        menus = [make_menu(1, "2024-06-10"), make_menu(2, "2024-06-11")]
        updated = make_menu(2, "2024-06-11", [make_meal(1, MealType.LUNCH)])

        merged = reconcile(menus, updated)

        assert len(merged) == 2
        assert merged[1] is updated
        assert merged[0] is menus[0]

    def test_new_id_appends(self):
        menus = [make_menu(1, "2024-06-10"), make_menu(2, "2024-06-11")]
        merged = reconcile(menus, make_menu(3, "2024-06-12"))
        assert [m.id for m in merged] == [1, 2, 3]

    def test_merge_is_idempotent(self):
        menus = [make_menu(1, "2024-06-10")]
        incoming = make_menu(2, "2024-06-11")
        once = reconcile(menus, incoming)
        assert reconcile(once, incoming) == once

    def test_input_is_not_mutated(self):
        menus = [make_menu(1, "2024-06-10")]
        reconcile(menus, make_menu(2, "2024-06-11"))
        assert len(menus) == 1

    def test_whole_menu_is_replaced(self):
        old = make_menu(1, "2024-06-10", [make_meal(1, MealType.LUNCH, [make_item(1)])])
        new = make_menu(1, "2024-06-10", [make_meal(2, MealType.DINNER)])
        merged = reconcile([old], new)
        assert merged[0].meal_of(MealType.LUNCH) is None

    def test_stale_menu_for_same_date_is_superseded(self):
        menus = [make_menu(1, "2024-06-10"), make_menu(4, "2024-06-11"), make_menu(2, "2024-06-12")]
        incoming = make_menu(9, "2024-06-11")

        merged = reconcile(menus, incoming)

        assert len(merged) == len(menus) == 3
        assert merged[1] is incoming
        assert [m.id for m in merged] == [1, 9, 2]
        assert [m.date for m in merged] == ["2024-06-10", "2024-06-11", "2024-06-12"]

    def test_reconcile_all_and_discard(self):
        merged = reconcile_all([], [make_menu(1, "2024-06-10"), make_menu(2, "2024-06-11"), make_menu(1, "2024-06-10")])
        assert [m.id for m in merged] == [1, 2]
        assert [m.id for m in discard(merged, 1)] == [2]
        assert discard(merged, 42) == merged


class TestMenuBoard:
    def test_pending_menu_never_reaches_confirmed_collection(self):
        board = MenuBoard()
        pending = board.begin(MenuDraft(date="2024-06-10"))

        assert board.menus == []
        assert board.menu_for("2024-06-10") is None
        assert board.pending_for("2024-06-10") is pending

    def test_confirm_swaps_pending_for_server_menu(self):
        board = MenuBoard()
        pending = board.begin(MenuDraft(date="2024-06-10"))

        confirmed = board.confirm(pending, make_menu(17, "2024-06-10"))

        assert isinstance(confirmed, Confirmed)
        assert board.pending == {}
        assert board.menu_for("2024-06-10").id == 17

    def test_abandon_forgets_pending(self):
        board = MenuBoard()
        board.abandon(board.begin(MenuDraft(date="2024-06-10")))
        assert board.pending_for("2024-06-10") is None

    def test_week_pairs_days_with_menus(self):
        board = MenuBoard([make_menu(1, "2024-01-03")])
        week = dict(board.week("2024-01-05"))
        assert len(week) == 7
        assert week[date(2024, 1, 3)].id == 1
        assert sum(menu is not None for menu in week.values()) == 1
