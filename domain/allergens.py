"""
Allergen vocabulary.

The fourteen allergens that must be declared on a cafeteria menu, each with
the icon key the display surfaces use. Names outside the vocabulary are kept
on the dish as-is and shown with a generic marker.
"""

from typing import Iterable, List

ALLERGENS = (
    "Gluten",
    "Lácteos",
    "Huevos",
    "Frutos secos",
    "Soja",
    "Pescado",
    "Crustáceos",
    "Moluscos",
    "Sésamo",
    "Mostaza",
    "Apio",
    "Cacahuetes",
    "Altramuces",
    "Sulfitos",
)

FALLBACK_MARKER = "⚠️"

_ICON_KEYS = {
    "Gluten": "gluten",
    "Lácteos": "lacteos",
    "Huevos": "huevos",
    "Frutos secos": "frutos-cascara",
    "Soja": "soja",
    "Pescado": "pescado",
    # legacy label, shares the crustacean icon
    "Mariscos": "crustaceos",
    "Crustáceos": "crustaceos",
    "Moluscos": "moluscos",
    "Sésamo": "sesamo",
    "Mostaza": "mostaza",
    "Apio": "apio",
    "Cacahuetes": "cacahuetes",
    "Altramuces": "altramuces",
    "Sulfitos": "sulfitos",
}


def is_recognized(name: str) -> bool:
    return name in ALLERGENS


def icon_for(name: str) -> str:
    """Icon key for an allergen, or FALLBACK_MARKER for unknown names."""
    return _ICON_KEYS.get(name, FALLBACK_MARKER)


def unrecognized(names: Iterable[str]) -> List[str]:
    """Names that are not part of the controlled vocabulary, in input order."""
    return [name for name in names if not is_recognized(name)]
