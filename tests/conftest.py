"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import httpx

from adapters.http_adapter import ApiClient
from adapters.session_store import SessionStore
from api.models import make_engine
from api.server import create_app
from app.config import Settings
from app.session import SessionContext
from domain.schemas.auth_schemas import AuthResponse, UserIdentity
from test_fixtures import BASE_URL, DEMO_PASSWORD, DEMO_USERNAME, TEST_TOKEN


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def test_settings():
    return Settings(
        environment="testing",
        demo_username=DEMO_USERNAME,
        demo_password=DEMO_PASSWORD,
        seed_demo_data=False,
    )


@pytest.fixture
def demo_app(test_settings):
    """Fresh demo backend over its own in-memory database."""
    app = create_app(config=test_settings, engine=make_engine("sqlite://"))
    app.state.tokens.add(TEST_TOKEN)
    return app


@pytest.fixture
def session_store(tmp_path):
    return SessionStore(db_url=f"sqlite:///{tmp_path / 'session.db'}")


@pytest.fixture
def anonymous_session(session_store):
    return SessionContext(session_store)


@pytest.fixture
def session(session_store):
    """Session already holding a token the demo app accepts."""
    ctx = SessionContext(session_store)
    ctx.start(AuthResponse(token=TEST_TOKEN, user=UserIdentity(id="1", username=DEMO_USERNAME)))
    return ctx


@pytest.fixture
def api_client(session, demo_app):
    """Client wired to the demo app in-process."""
    return ApiClient(session, base_url=BASE_URL, transport=httpx.ASGITransport(app=demo_app))
