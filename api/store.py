from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from api.models import (
    AllergenRecord,
    MealItemAllergenRecord,
    MealItemRecord,
    MealRecord,
    MenuRecord,
)
from app.exceptions import ConflictError, NotFoundError
from domain.schemas.menu_schemas import MealItemPayload, MealPayload

logger = logging.getLogger("menuhub.api.store")


# ---------- serialization (read-side wire shape) ----------


def serialize_item(item: MealItemRecord) -> Dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "allergens": [{"allergen": {"name": link.allergen.name}} for link in item.allergens],
    }


def serialize_meal(meal: MealRecord) -> Dict[str, Any]:
    return {
        "id": meal.id,
        "type": meal.type,
        "items": [serialize_item(item) for item in meal.items],
    }


def serialize_menu(menu: MenuRecord) -> Dict[str, Any]:
    # dates go out as midnight-UTC timestamps, like a DateTime column would
    return {
        "id": menu.id,
        "date": f"{menu.date.isoformat()}T00:00:00.000Z",
        "meals": [serialize_meal(meal) for meal in menu.meals],
    }


class MenuStore:
    """
    Repository layer for the demo backend.
    Handles all database interactions for menus, meals, dishes and allergens.
    """

    def __init__(self, db: Session):
        self.db: Session = db

    # ---------- reads ----------

    def get_by_date(self, day: date) -> Optional[MenuRecord]:
        return self.db.query(MenuRecord).filter(MenuRecord.date == day).first()

    def list_range(self, start: Optional[date] = None, end: Optional[date] = None) -> List[MenuRecord]:
        query = self.db.query(MenuRecord)
        if start is not None:
            query = query.filter(MenuRecord.date >= start)
        if end is not None:
            query = query.filter(MenuRecord.date <= end)
        return query.order_by(MenuRecord.date).all()

    def get(self, menu_id: int) -> MenuRecord:
        menu = self.db.get(MenuRecord, menu_id)
        if menu is None:
            raise NotFoundError(f"Menu {menu_id} not found")
        return menu

    # ---------- menus ----------

    def create(self, day: date, meals: List[MealPayload]) -> MenuRecord:
        if self.get_by_date(day) is not None:
            raise ConflictError(f"A menu already exists for {day.isoformat()}")
        menu = MenuRecord(date=day)
        self.db.add(menu)
        menu.meals.extend(self._build_meal(payload) for payload in meals)
        self.db.commit()
        logger.info("Created menu %d for %s", menu.id, day)
        return menu

    def replace_meals(self, menu_id: int, meals: List[MealPayload]) -> MenuRecord:
        menu = self.get(menu_id)
        menu.meals.clear()
        # old rows must be gone before the (menu_id, type) constraint sees new ones
        self.db.flush()
        menu.meals.extend(self._build_meal(payload) for payload in meals)
        self.db.commit()
        logger.info("Replaced meals of menu %d (%d meals)", menu_id, len(meals))
        return menu

    def delete_menu(self, menu_id: int) -> None:
        menu = self.get(menu_id)
        self.db.delete(menu)
        self.db.commit()
        logger.info("Deleted menu %d", menu_id)

    # ---------- meals and dishes ----------

    def add_meal(self, menu_id: int, payload: MealPayload) -> MealRecord:
        menu = self.get(menu_id)
        if any(meal.type == payload.type.value for meal in menu.meals):
            raise ConflictError(f"Menu {menu_id} already has a {payload.type.value} meal")
        meal = self._build_meal(payload)
        menu.meals.append(meal)
        self.db.commit()
        return meal

    def add_item(self, menu_id: int, meal_id: int, payload: MealItemPayload) -> MealItemRecord:
        meal = self._meal(menu_id, meal_id)
        item = self._build_item(payload)
        meal.items.append(item)
        self.db.commit()
        return item

    def update_item(
        self, menu_id: int, meal_id: int, item_id: int, payload: MealItemPayload
    ) -> MealItemRecord:
        item = self._item(menu_id, meal_id, item_id)
        item.name = payload.name
        item.allergens.clear()
        self.db.flush()
        item.allergens.extend(self._links(payload.allergens))
        self.db.commit()
        return item

    def delete_item(self, menu_id: int, meal_id: int, item_id: int) -> None:
        item = self._item(menu_id, meal_id, item_id)
        self.db.delete(item)
        self.db.commit()

    # ---------- helpers ----------

    def _meal(self, menu_id: int, meal_id: int) -> MealRecord:
        meal = self.db.get(MealRecord, meal_id)
        if meal is None or meal.menu_id != menu_id:
            raise NotFoundError(f"Meal {meal_id} not found in menu {menu_id}")
        return meal

    def _item(self, menu_id: int, meal_id: int, item_id: int) -> MealItemRecord:
        meal = self._meal(menu_id, meal_id)
        item = self.db.get(MealItemRecord, item_id)
        if item is None or item.meal_id != meal.id:
            raise NotFoundError(f"Dish {item_id} not found in meal {meal_id}")
        return item

    def _allergen(self, name: str) -> AllergenRecord:
        allergen = self.db.query(AllergenRecord).filter(AllergenRecord.name == name).first()
        if allergen is None:
            allergen = AllergenRecord(name=name)
            self.db.add(allergen)
            self.db.flush()
        return allergen

    def _links(self, names: List[str]) -> List[MealItemAllergenRecord]:
        return [MealItemAllergenRecord(allergen=self._allergen(name)) for name in names]

    def _build_item(self, payload: MealItemPayload) -> MealItemRecord:
        return MealItemRecord(name=payload.name, allergens=self._links(payload.allergens))

    def _build_meal(self, payload: MealPayload) -> MealRecord:
        return MealRecord(
            type=payload.type.value,
            items=[self._build_item(item) for item in payload.items],
        )
