"""
Wire shapes of the menu API.

Read side (responses): each dish lists its allergens as join records,
``{"allergen": {"name": "Gluten"}}``.
Write side (create/update bodies): allergens are plain name strings.
The two contracts differ on purpose and are kept apart here.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.dates import canonical_date
from domain.enums import MealType


# ---------- read side ----------


class AllergenRef(BaseModel):
    name: str


class AllergenLink(BaseModel):
    allergen: AllergenRef


class MealItemWire(BaseModel):
    id: int
    name: str
    allergens: List[AllergenLink] = Field(default_factory=list)


class MealWire(BaseModel):
    id: int
    type: MealType
    items: List[MealItemWire] = Field(default_factory=list)


class MenuWire(BaseModel):
    id: int
    date: str = Field(..., description="Calendar date, possibly a full timestamp")
    meals: List[MealWire] = Field(default_factory=list)


# ---------- write side ----------


class MealItemPayload(BaseModel):
    """Body of item create/update calls and the item shape inside meal payloads"""

    name: str
    allergens: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Dish name must not be blank")
        return v

    @field_validator("allergens")
    @classmethod
    def dedupe_allergens(cls, v: List[str]) -> List[str]:
        unique: List[str] = []
        for name in v:
            name = name.strip()
            if name and name not in unique:
                unique.append(name)
        return unique


class MealPayload(BaseModel):
    type: MealType
    items: List[MealItemPayload] = Field(default_factory=list)


def _check_unique_types(meals: List[MealPayload]) -> None:
    types = [meal.type for meal in meals]
    if len(types) != len(set(types)):
        raise ValueError("Each meal type may appear only once per menu")


class MenuCreateRequest(BaseModel):
    date: str
    meals: List[MealPayload] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return canonical_date(v)

    @model_validator(mode="after")
    def check_meal_types(self) -> "MenuCreateRequest":
        _check_unique_types(self.meals)
        return self


class MenuUpdateRequest(BaseModel):
    meals: List[MealPayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_meal_types(self) -> "MenuUpdateRequest":
        _check_unique_types(self.meals)
        return self
