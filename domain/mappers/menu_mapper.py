"""
Menu domain mappers.
Handles transformation between the menu API wire format and the in-memory
menu aggregate.
"""

from typing import Any, Dict, List, Mapping, Sequence, Union

from domain.models.menu import Menu, Meal, MealItem
from domain.schemas.menu_schemas import (
    MealItemPayload,
    MealItemWire,
    MealPayload,
    MealWire,
    MenuWire,
)

WirePayload = Union[Mapping[str, Any], MenuWire, MealWire, MealItemWire]


class MenuMapper:
    """Mapper for menu-related transformations."""

    # ---------- inbound: wire -> model ----------

    @staticmethod
    def item_to_model(payload: Union[Mapping[str, Any], MealItemWire]) -> MealItem:
        """
        Convert a wire dish to a MealItem, flattening the allergen join
        records into plain names.

        Raises:
            pydantic.ValidationError: if the payload does not match the wire shape
        """
        wire = payload if isinstance(payload, MealItemWire) else MealItemWire.model_validate(payload)
        return MealItem(
            id=wire.id,
            name=wire.name,
            allergens=[link.allergen.name for link in wire.allergens],
        )

    @staticmethod
    def meal_to_model(payload: Union[Mapping[str, Any], MealWire]) -> Meal:
        wire = payload if isinstance(payload, MealWire) else MealWire.model_validate(payload)
        return Meal(
            id=wire.id,
            type=wire.type,
            items=[MenuMapper.item_to_model(item) for item in wire.items],
        )

    @staticmethod
    def menu_to_model(payload: Union[Mapping[str, Any], MenuWire]) -> Menu:
        """
        Convert a wire menu to a Menu. The date is reduced to its
        "YYYY-MM-DD" component.

        Args:
            payload: decoded JSON object or validated MenuWire

        Returns:
            Menu with flat allergen lists
        """
        wire = payload if isinstance(payload, MenuWire) else MenuWire.model_validate(payload)
        return Menu(
            id=wire.id,
            date=wire.date,
            meals=[MenuMapper.meal_to_model(meal) for meal in wire.meals],
        )

    # ---------- outbound: model -> write payload ----------

    @staticmethod
    def item_to_payload(item: Union[MealItem, MealItemPayload]) -> MealItemPayload:
        if isinstance(item, MealItemPayload):
            return item
        return MealItemPayload(name=item.name, allergens=list(item.allergens))

    @staticmethod
    def meal_to_payload(meal: Union[Meal, MealPayload]) -> MealPayload:
        """Strip ids; allergens stay flat strings as the write endpoints expect."""
        if isinstance(meal, MealPayload):
            return meal
        return MealPayload(
            type=meal.type,
            items=[MenuMapper.item_to_payload(item) for item in meal.items],
        )

    @staticmethod
    def meals_to_payload(meals: Sequence[Union[Meal, MealPayload]]) -> List[MealPayload]:
        return [MenuMapper.meal_to_payload(meal) for meal in meals]

    # ---------- model -> read-side wire ----------

    @staticmethod
    def item_to_wire(item: MealItem) -> Dict[str, Any]:
        return {
            "id": item.id,
            "name": item.name,
            "allergens": [{"allergen": {"name": name}} for name in item.allergens],
        }

    @staticmethod
    def menu_to_wire(menu: Menu) -> Dict[str, Any]:
        """Render a Menu in the read-side join shape the backend responds with."""
        return {
            "id": menu.id,
            "date": menu.date,
            "meals": [
                {
                    "id": meal.id,
                    "type": meal.type.value,
                    "items": [MenuMapper.item_to_wire(item) for item in meal.items],
                }
                for meal in menu.meals
            ],
        }
