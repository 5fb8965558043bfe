"""
Repositories package - Data access layer.
"""

from repositories.menu_repository import MenuRepository

__all__ = [
    "MenuRepository",
]
