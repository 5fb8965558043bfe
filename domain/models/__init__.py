"""
Domain models package - menu aggregate and sync wrappers.
"""

from domain.models.menu import Menu, Meal, MealItem
from domain.models.sync import Pending, Confirmed, MenuDraft

__all__ = [
    "Menu",
    "Meal",
    "MealItem",
    "Pending",
    "Confirmed",
    "MenuDraft",
]
