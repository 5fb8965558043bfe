"""
Domain mappers package.
Handles transformation between the menu API wire format and domain models.
"""

from domain.mappers.menu_mapper import MenuMapper

__all__ = ["MenuMapper"]
