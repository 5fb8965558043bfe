from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

from app.exceptions import ValidationError
from domain.dates import DateLike
from domain.enums import MealType
from domain.mappers.menu_mapper import MenuMapper
from domain.models.menu import Meal, MealItem, Menu
from domain.models.sync import MenuDraft
from domain.schemas.menu_schemas import MealItemPayload, MealPayload
from repositories.menu_repository import MenuRepository, build_payload, checked_date
from services.date_index import week_of
from services.menu_board import MenuBoard

logger = logging.getLogger("menuhub.menus")


class MenuService:
    """
    Editor flows over the menu board.

    Every change is built locally as a new value, sent through the repository,
    and the backend's answer (never the local value) is merged into the board.
    """

    def __init__(self, repository: MenuRepository, board: Optional[MenuBoard] = None):
        self.repository = repository
        self.board = board if board is not None else MenuBoard()

    # ---------- reads ----------

    async def load_week(self, reference: DateLike) -> List[Tuple[date, Optional[Menu]]]:
        """Load Monday..Sunday around the reference date into the board."""
        days = week_of(checked_date(reference))
        menus = await self.repository.get_range(days[0], days[-1])
        self.board.merge_all(menus)
        return self.board.week(days[0])

    async def open_day(self, day: DateLike) -> Optional[Menu]:
        """Fetch one day's menu; None means the day has no menu yet."""
        menu = await self.repository.get_by_date(day)
        if menu is not None:
            self.board.merge(menu)
        return menu

    # ---------- menu lifecycle ----------

    async def create_menu(self, day: DateLike, meals: Sequence[Union[Meal, MealPayload]] = ()) -> Menu:
        """
        Create the menu of a day that has none.

        Raises:
            ValidationError: malformed date, invalid meals, or the day already has
                a menu (confirmed or still being created)
        """
        key = checked_date(day)
        if self.board.menu_for(key) is not None:
            raise ValidationError(f"A menu already exists for {key}", details={"date": key})
        if self.board.pending_for(key) is not None:
            raise ValidationError(f"A menu is already being created for {key}", details={"date": key})

        draft = build_payload(MenuDraft, date=key, meals=MenuMapper.meals_to_payload(meals))
        pending = self.board.begin(draft)
        try:
            menu = await self.repository.create(key, draft.meals)
        except Exception:
            logger.warning("Creating the menu for %s failed, dropping the pending draft", key)
            self.board.abandon(pending)
            raise
        return self.board.confirm(pending, menu).value

    async def delete_menu(self, day: DateLike) -> None:
        menu = self._require_menu(day)
        await self.repository.delete_menu(menu.id)
        self.board.discard(menu.id)
        logger.info("Menu %d for %s removed from the board", menu.id, menu.date)

    # ---------- dishes ----------

    async def add_item(
        self,
        day: DateLike,
        meal_type: Union[MealType, str],
        name: str,
        allergens: Sequence[str] = (),
    ) -> Menu:
        """
        Add a dish to a meal. A missing meal is created on the fly, and so is
        the whole menu when the day has none.
        """
        item = build_payload(MealItemPayload, name=name, allergens=list(allergens))
        meal_type = build_payload(MealPayload, type=meal_type).type

        menu = self.board.menu_for(checked_date(day))
        if menu is None:
            return await self.create_menu(day, [MealPayload(type=meal_type, items=[item])])

        meals = MenuMapper.meals_to_payload(menu.meals)
        target = next((meal for meal in meals if meal.type == meal_type), None)
        if target is None:
            meals.append(MealPayload(type=meal_type, items=[item]))
        else:
            meals = [
                meal.model_copy(update={"items": [*meal.items, item]}) if meal is target else meal
                for meal in meals
            ]
        return await self._replace_meals(menu, meals)

    async def remove_item(self, day: DateLike, meal_type: Union[MealType, str], item_id: int) -> Menu:
        """Remove a dish. The meal stays on the menu even when it becomes empty."""
        menu = self._require_menu(day)
        meal = self._require_meal(menu, meal_type)
        if meal.find_item(item_id) is None:
            raise ValidationError(f"Dish {item_id} is not part of the {meal.type.value} meal")

        meals = [
            m.model_copy(update={"items": [i for i in m.items if i.id != item_id]}) if m.id == meal.id else m
            for m in menu.meals
        ]
        return await self._replace_meals(menu, meals)

    async def edit_item(
        self,
        day: DateLike,
        meal_type: Union[MealType, str],
        item_id: int,
        name: Optional[str] = None,
        allergens: Optional[Sequence[str]] = None,
    ) -> MealItem:
        """
        Rename a dish and/or change its allergens with a targeted update, then
        reload the day so the board holds the backend's menu.
        """
        menu = self._require_menu(day)
        meal = self._require_meal(menu, meal_type)
        current = meal.find_item(item_id)
        if current is None:
            raise ValidationError(f"Dish {item_id} is not part of the {meal.type.value} meal")

        confirmed = await self.repository.update_meal_item(
            menu.id,
            meal.id,
            item_id,
            name if name is not None else current.name,
            allergens if allergens is not None else current.allergens,
        )
        # the held menu may be stale by now; only the backend's menu is merged
        canonical = await self.repository.get_by_date(menu.date)
        if canonical is None:
            logger.info("Menu %d for %s vanished after editing dish %d", menu.id, menu.date, item_id)
            self.board.discard(menu.id)
        else:
            self.board.merge(canonical)
        return confirmed

    # ---------- helpers ----------

    async def _replace_meals(self, menu: Menu, meals: Sequence[Union[Meal, MealPayload]]) -> Menu:
        confirmed = await self.repository.update(menu.id, meals)
        return self.board.merge(confirmed)

    def _require_menu(self, day: DateLike) -> Menu:
        key = checked_date(day)
        menu = self.board.menu_for(key)
        if menu is None:
            raise ValidationError(f"No menu loaded for {key}", details={"date": key})
        return menu

    @staticmethod
    def _require_meal(menu: Menu, meal_type: Union[MealType, str]) -> Meal:
        meal_type = build_payload(MealPayload, type=meal_type).type
        meal = menu.meal_of(meal_type)
        if meal is None:
            raise ValidationError(f"Menu {menu.date} has no {meal_type.value} meal")
        return meal
