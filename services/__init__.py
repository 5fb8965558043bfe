"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.menu_board import MenuBoard
from services.menu_service import MenuService

# Note: date_index and reconciler contain plain functions, not classes

__all__ = [
    "AuthService",
    "MenuBoard",
    "MenuService",
]
