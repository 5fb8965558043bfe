"""
Shared test fixtures and utilities for the MenuHub test suite.

Builders for menu entities and their wire shapes, plus helpers to run the
client against scripted transports.
"""

import json
from typing import Callable, Dict, List, Optional

import anyio
import httpx

from adapters.http_adapter import ApiClient
from domain.enums import MealType
from domain.models.menu import Meal, MealItem, Menu

BASE_URL = "http://testserver"
TEST_TOKEN = "test-token"
DEMO_USERNAME = "chef"
DEMO_PASSWORD = "s3cret"


def make_item(item_id: int = 1, name: str = "Pollo a la plancha", allergens=None) -> MealItem:
    return MealItem(id=item_id, name=name, allergens=list(allergens or []))


def make_meal(meal_id: int = 1, meal_type: MealType = MealType.LUNCH, items=None) -> Meal:
    return Meal(id=meal_id, type=meal_type, items=list(items or []))


def make_menu(menu_id: int = 1, day: str = "2024-06-10", meals=None) -> Menu:
    """
    Create a Menu for testing.

    Example:
        >>> make_menu(2, "2024-06-11").date
        '2024-06-11'
    """
    return Menu(id=menu_id, date=day, meals=list(meals or []))


def item_wire(item_id: int, name: str, allergens: Optional[List[str]] = None) -> Dict:
    return {
        "id": item_id,
        "name": name,
        "allergens": [{"allergen": {"name": a}} for a in allergens or []],
    }


def meal_wire(meal_id: int, meal_type: str, items: Optional[List[Dict]] = None) -> Dict:
    return {"id": meal_id, "type": meal_type, "items": list(items or [])}


def menu_wire(menu_id: int, day: str, meals: Optional[List[Dict]] = None) -> Dict:
    """Menu as the backend sends it; dates come as midnight UTC timestamps."""
    return {"id": menu_id, "date": f"{day}T00:00:00.000Z", "meals": list(meals or [])}


def scripted_client(session, handler: Callable[[httpx.Request], httpx.Response]) -> ApiClient:
    """ApiClient whose requests are answered by ``handler`` instead of a server."""
    return ApiClient(session, base_url=BASE_URL, transport=httpx.MockTransport(handler))


def recording_handler(status_code: int = 200, json_body=None):
    """
    Handler that always answers ``status_code`` with ``json_body`` and keeps
    every request it saw.

    Returns:
        (handler, seen) where seen is the list of received requests
    """
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if json_body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=json_body)

    return handler, seen


def body_of(request: httpx.Request) -> Dict:
    return json.loads(request.content)


class HoldingTransport(httpx.AsyncBaseTransport):
    """
    Forwards every request to ``inner``. For requests matching ``method`` and
    ``path_part``, the backend applies the request and then the response is
    held back until ``release`` is set. ``applied`` is set once the backend
    has processed such a request.
    """

    def __init__(self, inner: httpx.AsyncBaseTransport, method: str, path_part: str):
        self.inner = inner
        self.method = method
        self.path_part = path_part
        self.applied = anyio.Event()
        self.release = anyio.Event()
        self.held: List[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self.inner.handle_async_request(request)
        if request.method == self.method and self.path_part in request.url.path:
            self.held.append(request)
            self.applied.set()
            await self.release.wait()
        return response
