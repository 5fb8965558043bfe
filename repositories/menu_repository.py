from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence, TypeVar, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from adapters.http_adapter import ApiClient, ensure_success
from app.exceptions import ServiceError, ValidationError
from domain.dates import DateLike, canonical_date
from domain.enums import MealType
from domain.mappers.menu_mapper import MenuMapper
from domain.models.menu import Meal, MealItem, Menu
from domain.schemas.menu_schemas import (
    MealItemPayload,
    MealPayload,
    MenuCreateRequest,
    MenuUpdateRequest,
)

logger = logging.getLogger("menuhub.repository")

T = TypeVar("T")
MealsInput = Sequence[Union[Meal, MealPayload]]


def checked_date(value: DateLike) -> str:
    try:
        return canonical_date(value)
    except ValueError as e:
        raise ValidationError(str(e), details={"date": str(value)}) from e


def build_payload(factory: Callable[..., T], **data: Any) -> T:
    """Build an outbound payload, turning pydantic failures into ValidationError."""
    try:
        return factory(**data)
    except PydanticValidationError as e:
        messages = [err["msg"] for err in e.errors()]
        raise ValidationError("; ".join(messages), details={"errors": messages}) from e


def _decode(response: httpx.Response, convert: Callable[[Any], T], what: str) -> T:
    """Decode a success body through the wire transform."""
    try:
        return convert(response.json())
    except (PydanticValidationError, ValueError, TypeError) as e:
        logger.error("Malformed %s payload from %s: %s", what, response.request.url.path, e)
        raise ServiceError(
            f"Backend returned a malformed {what}",
            status_code=response.status_code,
            details={"path": response.request.url.path},
        ) from e


class MenuRepository:
    """
    Menu API access. Every operation is one round-trip; results come back
    already converted to the in-memory menu aggregate.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    # ---------- reads ----------

    async def get_by_date(self, menu_date: DateLike) -> Optional[Menu]:
        """
        Fetch the menu of one day.

        Returns:
            The Menu, or None when the backend has no menu for that date (404)

        Raises:
            ValidationError: malformed date
            ServiceError: any other non-success status
        """
        day = checked_date(menu_date)
        response = await self.client.get(f"/menus/{day}")
        if response.status_code == 404:
            logger.info("No menu for %s", day)
            return None
        ensure_success(response, f"load the menu for {day}")
        return _decode(response, MenuMapper.menu_to_model, "menu")

    async def get_range(self, start_date: DateLike, end_date: DateLike) -> List[Menu]:
        """Fetch every menu between two dates (inclusive), in backend order."""
        params = {"startDate": checked_date(start_date), "endDate": checked_date(end_date)}
        response = await self.client.get("/menus", params=params)
        ensure_success(response, "load menus")
        menus = _decode(
            response,
            lambda body: [MenuMapper.menu_to_model(menu) for menu in body],
            "menu list",
        )
        logger.info("Loaded %d menus between %s and %s", len(menus), params["startDate"], params["endDate"])
        return menus

    # ---------- menu mutations ----------

    async def create(self, menu_date: DateLike, meals: MealsInput = ()) -> Menu:
        """
        Create the menu of a date.

        Raises:
            ValidationError: malformed date or meals, raised before any request
            ServiceError: backend rejected the menu
        """
        day = checked_date(menu_date)
        body = build_payload(MenuCreateRequest, date=day, meals=MenuMapper.meals_to_payload(meals))
        response = await self.client.post("/menus", json=body.model_dump(mode="json"))
        ensure_success(response, f"create the menu for {day}")
        menu = _decode(response, MenuMapper.menu_to_model, "menu")
        logger.info("Created menu %d for %s", menu.id, menu.date)
        return menu

    async def update(self, menu_id: int, meals: MealsInput) -> Menu:
        """
        Replace all meals of a menu. The returned Menu is the backend's
        canonical state and supersedes any local edit.
        """
        body = build_payload(MenuUpdateRequest, meals=MenuMapper.meals_to_payload(meals))
        response = await self.client.put(f"/menus/{menu_id}", json=body.model_dump(mode="json"))
        ensure_success(response, f"update menu {menu_id}")
        return _decode(response, MenuMapper.menu_to_model, "menu")

    async def delete_menu(self, menu_id: int) -> None:
        """Delete a menu. Deleting a menu that is already gone succeeds."""
        response = await self.client.delete(f"/menus/{menu_id}")
        if response.status_code == 404:
            logger.debug("Menu %d already absent", menu_id)
            return
        ensure_success(response, f"delete menu {menu_id}")
        logger.info("Deleted menu %d", menu_id)

    # ---------- meal and dish mutations ----------

    async def add_meal(
        self,
        menu_id: int,
        meal_type: Union[MealType, str],
        items: Sequence[Union[MealItem, MealItemPayload]] = (),
    ) -> Meal:
        body = build_payload(
            MealPayload,
            type=meal_type,
            items=[MenuMapper.item_to_payload(item) for item in items],
        )
        response = await self.client.post(f"/menus/{menu_id}/meals", json=body.model_dump(mode="json"))
        ensure_success(response, f"add a {body.type.value} meal to menu {menu_id}")
        return _decode(response, MenuMapper.meal_to_model, "meal")

    async def add_meal_item(
        self, menu_id: int, meal_id: int, name: str, allergens: Sequence[str] = ()
    ) -> MealItem:
        body = build_payload(MealItemPayload, name=name, allergens=list(allergens))
        response = await self.client.post(
            f"/menus/{menu_id}/meals/{meal_id}/items", json=body.model_dump(mode="json")
        )
        ensure_success(response, f"add a dish to meal {meal_id}")
        return _decode(response, MenuMapper.item_to_model, "dish")

    async def update_meal_item(
        self, menu_id: int, meal_id: int, item_id: int, name: str, allergens: Sequence[str] = ()
    ) -> MealItem:
        """Targeted update of one dish, without resending the whole menu."""
        body = build_payload(MealItemPayload, name=name, allergens=list(allergens))
        response = await self.client.put(
            f"/menus/{menu_id}/meals/{meal_id}/items/{item_id}", json=body.model_dump(mode="json")
        )
        ensure_success(response, f"update dish {item_id}")
        return _decode(response, MenuMapper.item_to_model, "dish")

    async def delete_meal_item(self, menu_id: int, meal_id: int, item_id: int) -> None:
        """Delete a dish. Deleting a dish that is already gone succeeds."""
        response = await self.client.delete(f"/menus/{menu_id}/meals/{meal_id}/items/{item_id}")
        if response.status_code == 404:
            logger.debug("Dish %d already absent from meal %d", item_id, meal_id)
            return
        ensure_success(response, f"delete dish {item_id}")
