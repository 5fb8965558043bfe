"""Example menu loaded into a fresh demo database."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import sessionmaker

from api.store import MenuStore
from domain.enums import MealType
from domain.schemas.menu_schemas import MealItemPayload, MealPayload

logger = logging.getLogger("menuhub.api.seed")

EXAMPLE_MEALS = [
    MealPayload(
        type=MealType.BREAKFAST,
        items=[
            MealItemPayload(name="Café con leche", allergens=["Lácteos"]),
            MealItemPayload(name="Tostadas con mantequilla", allergens=["Gluten", "Lácteos"]),
        ],
    ),
    MealPayload(
        type=MealType.LUNCH,
        items=[
            MealItemPayload(name="Ensalada mixta"),
            MealItemPayload(name="Pollo a la plancha"),
            MealItemPayload(name="Arroz blanco"),
        ],
    ),
    MealPayload(
        type=MealType.DINNER,
        items=[
            MealItemPayload(name="Sopa de verduras"),
            MealItemPayload(name="Pescado al horno", allergens=["Pescado"]),
        ],
    ),
]


def seed_demo_menus(session_factory: sessionmaker, day: Optional[date] = None) -> bool:
    """
    Store the example menu for ``day`` (today by default).

    Returns False when that date already has a menu.
    """
    day = day or date.today()
    db = session_factory()
    try:
        store = MenuStore(db)
        if store.get_by_date(day) is not None:
            logger.info("Menu for %s already present, skipping seed", day)
            return False
        store.create(day, EXAMPLE_MEALS)
        logger.info("Seeded example menu for %s", day)
        return True
    finally:
        db.close()
