"""
Tests for the menu aggregate and date helpers.
"""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from domain.dates import canonical_date, parse_calendar_date
from domain.enums import MealType
from domain.models.sync import MenuDraft, Pending
from test_fixtures import make_item, make_meal, make_menu


class TestCalendarDates:
    @pytest.mark.parametrize(
        "value",
        [
            "2024-06-10",
            "2024-06-10T00:00:00.000Z",
            "2024-06-10T23:59:59+02:00",
            "2024-06-10 08:30:00",
            date(2024, 6, 10),
            datetime(2024, 6, 10, 22, 15),
        ],
    )
    def test_reduces_to_calendar_date(self, value):
        assert parse_calendar_date(value) == date(2024, 6, 10)
        assert canonical_date(value) == "2024-06-10"

    @pytest.mark.parametrize("value", ["", "10/06/2024", "2024-13-01", "2024-02-30", "today", 20240610, None])
    def test_malformed_dates_raise(self, value):
        with pytest.raises(ValueError):
            parse_calendar_date(value)


class TestMealItem:
    def test_name_is_trimmed(self):
        assert make_item(name="  Arroz blanco ").name == "Arroz blanco"

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError):
            make_item(name="   ")

    def test_allergens_keep_order_without_duplicates(self):
        item = make_item(allergens=["Gluten", "Lácteos", "Gluten", " "])
        assert item.allergens == ["Gluten", "Lácteos"]

    def test_unknown_allergen_is_kept(self):
        assert make_item(allergens=["Kiwi"]).allergens == ["Kiwi"]

    def test_items_are_immutable(self):
        item = make_item()
        with pytest.raises(ValidationError):
            item.name = "Otro"


class TestMeal:
    def test_duplicate_item_ids_rejected(self):
        with pytest.raises(ValidationError):
            make_meal(items=[make_item(1), make_item(1, "Sopa")])

    def test_find_item(self):
        meal = make_meal(items=[make_item(1), make_item(2, "Sopa")])
        assert meal.find_item(2).name == "Sopa"
        assert meal.find_item(3) is None

    def test_empty_meal_is_valid(self):
        assert make_meal().items == []


class TestMenu:
    def test_date_is_canonicalized(self):
        menu = make_menu(day="2024-06-10T00:00:00.000Z")
        assert menu.date == "2024-06-10"

    def test_malformed_date_rejected(self):
        with pytest.raises(ValidationError):
            make_menu(day="not a date")

    def test_one_meal_per_type(self):
        with pytest.raises(ValidationError):
            make_menu(meals=[make_meal(1, MealType.LUNCH), make_meal(2, MealType.LUNCH)])

    def test_meal_ids_unique(self):
        with pytest.raises(ValidationError):
            make_menu(meals=[make_meal(1, MealType.LUNCH), make_meal(1, MealType.DINNER)])

    def test_meal_of(self):
        menu = make_menu(meals=[make_meal(3, MealType.DINNER)])
        assert menu.meal_of(MealType.DINNER).id == 3
        assert menu.meal_of(MealType.BREAKFAST) is None


class TestPending:
    def test_pending_draft_has_token_and_no_id(self):
        pending = Pending(MenuDraft(date="2024-06-10T00:00:00Z"))
        assert pending.value.date == "2024-06-10"
        assert pending.token
        assert not hasattr(pending.value, "id")

    def test_tokens_are_unique(self):
        draft = MenuDraft(date="2024-06-10")
        assert Pending(draft).token != Pending(draft).token
