"""API routes package"""

from . import auth, health, menus

__all__ = ["auth", "health", "menus"]
