"""
Domain schemas package - Pydantic models of the menu API wire format.
"""

from domain.schemas.menu_schemas import (
    AllergenRef,
    AllergenLink,
    MealItemWire,
    MealWire,
    MenuWire,
    MealItemPayload,
    MealPayload,
    MenuCreateRequest,
    MenuUpdateRequest,
)
from domain.schemas.auth_schemas import LoginRequest, UserIdentity, AuthResponse

__all__ = [
    # Read side
    "AllergenRef",
    "AllergenLink",
    "MealItemWire",
    "MealWire",
    "MenuWire",
    # Write side
    "MealItemPayload",
    "MealPayload",
    "MenuCreateRequest",
    "MenuUpdateRequest",
    # Auth
    "LoginRequest",
    "UserIdentity",
    "AuthResponse",
]
