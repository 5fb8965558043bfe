from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_store, require_token
from api.store import MenuStore, serialize_item, serialize_meal, serialize_menu
from app.exceptions import NotFoundError, ValidationError
from domain.dates import parse_calendar_date
from domain.schemas.menu_schemas import (
    MealItemPayload,
    MealPayload,
    MenuCreateRequest,
    MenuUpdateRequest,
)

router = APIRouter(prefix="/menus", tags=["Menus"], dependencies=[Depends(require_token)])
logger = logging.getLogger("menuhub.api.menus")


def _parse_date(value: Optional[str], field: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return parse_calendar_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field}: {value!r}") from e


@router.get("")
def list_menus(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    store: MenuStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """
    List menus, optionally limited to a date range (inclusive).
    Menus are ordered by date.
    """
    menus = store.list_range(_parse_date(start_date, "startDate"), _parse_date(end_date, "endDate"))
    logger.info("Found %d menus between %s and %s", len(menus), start_date, end_date)
    return [serialize_menu(menu) for menu in menus]


@router.get("/{menu_date}")
def get_menu_by_date(menu_date: str, store: MenuStore = Depends(get_store)) -> Dict[str, Any]:
    """Menu of one calendar date; 404 when the date has no menu."""
    day = _parse_date(menu_date, "date")
    menu = store.get_by_date(day)
    if menu is None:
        raise NotFoundError(f"No menu for {day.isoformat()}")
    return serialize_menu(menu)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_menu(body: MenuCreateRequest, store: MenuStore = Depends(get_store)) -> Dict[str, Any]:
    menu = store.create(parse_calendar_date(body.date), body.meals)
    return serialize_menu(menu)


@router.put("/{menu_id}")
def update_menu(
    menu_id: int, body: MenuUpdateRequest, store: MenuStore = Depends(get_store)
) -> Dict[str, Any]:
    """Replace all meals of a menu and return the resulting menu."""
    return serialize_menu(store.replace_meals(menu_id, body.meals))


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu(menu_id: int, store: MenuStore = Depends(get_store)) -> Response:
    store.delete_menu(menu_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{menu_id}/meals", status_code=status.HTTP_201_CREATED)
def add_meal(menu_id: int, body: MealPayload, store: MenuStore = Depends(get_store)) -> Dict[str, Any]:
    return serialize_meal(store.add_meal(menu_id, body))


@router.post("/{menu_id}/meals/{meal_id}/items", status_code=status.HTTP_201_CREATED)
def add_meal_item(
    menu_id: int, meal_id: int, body: MealItemPayload, store: MenuStore = Depends(get_store)
) -> Dict[str, Any]:
    return serialize_item(store.add_item(menu_id, meal_id, body))


@router.put("/{menu_id}/meals/{meal_id}/items/{item_id}")
def update_meal_item(
    menu_id: int,
    meal_id: int,
    item_id: int,
    body: MealItemPayload,
    store: MenuStore = Depends(get_store),
) -> Dict[str, Any]:
    return serialize_item(store.update_item(menu_id, meal_id, item_id, body))


@router.delete("/{menu_id}/meals/{meal_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_item(
    menu_id: int, meal_id: int, item_id: int, store: MenuStore = Depends(get_store)
) -> Response:
    store.delete_item(menu_id, meal_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
