"""
Domain enums for MenuHub.
Contains all enumeration types used across the domain models.
"""

import enum


class MealType(str, enum.Enum):
    """Meal slots of a daily menu, in display order"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


MEAL_ORDER = (MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER)
