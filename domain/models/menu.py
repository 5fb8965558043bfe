"""
Menu aggregate: Menu -> Meal -> MealItem.

Entities are immutable; editors build a modified copy with ``model_copy`` and
send it through the repository. Construction enforces the structural
invariants of the aggregate.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.dates import canonical_date
from domain.enums import MealType


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Dish name must not be blank")
    return value


def _dedupe_allergens(values: List[str]) -> List[str]:
    unique: List[str] = []
    for name in values:
        name = name.strip()
        if name and name not in unique:
            unique.append(name)
    return unique


class MealItem(BaseModel):
    """A single dish"""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    allergens: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("allergens")
    @classmethod
    def validate_allergens(cls, v: List[str]) -> List[str]:
        return _dedupe_allergens(v)


class Meal(BaseModel):
    """Breakfast, lunch or dinner; items keep their display order"""

    model_config = ConfigDict(frozen=True)

    id: int
    type: MealType
    items: List[MealItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_items(self) -> "Meal":
        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate item id in {self.type.value} meal")
        return self

    def find_item(self, item_id: int):
        return next((item for item in self.items if item.id == item_id), None)


class Menu(BaseModel):
    """All meals planned for one calendar date"""

    model_config = ConfigDict(frozen=True)

    id: int
    date: str
    meals: List[Meal] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return canonical_date(v)

    @model_validator(mode="after")
    def check_unique_meals(self) -> "Menu":
        types = [meal.type for meal in self.meals]
        if len(types) != len(set(types)):
            raise ValueError(f"Menu {self.date} has more than one meal of the same type")
        ids = [meal.id for meal in self.meals]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Menu {self.date} has duplicate meal ids")
        return self

    def meal_of(self, meal_type: MealType):
        """The meal of the given type, or None if it was never created."""
        return next((meal for meal in self.meals if meal.type == meal_type), None)
