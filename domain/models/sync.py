"""
Pending/Confirmed wrappers for values that go through a backend round-trip.

A locally created entity is Pending: it carries a correlation token and never
an id. It only becomes Confirmed once the backend has answered with the
canonical entity and its server-assigned id.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.dates import canonical_date
from domain.schemas.menu_schemas import MealPayload

T = TypeVar("T")


@dataclass(frozen=True)
class Pending(Generic[T]):
    value: T
    token: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass(frozen=True)
class Confirmed(Generic[T]):
    value: T


class MenuDraft(BaseModel):
    """A menu that has been requested but not yet created by the backend."""

    model_config = ConfigDict(frozen=True)

    date: str
    meals: List[MealPayload] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return canonical_date(v)
