import httpx
import pytest

from adapters.http_adapter import ApiClient
from app.exceptions import NetworkError, ServiceError, UnauthorizedError, ValidationError
from app.session import SessionContext
from services.auth_service import AuthService
from test_fixtures import BASE_URL, DEMO_PASSWORD, DEMO_USERNAME, body_of, recording_handler, scripted_client

pytestmark = pytest.mark.anyio


@pytest.fixture
def auth(demo_app, anonymous_session):
    client = ApiClient(anonymous_session, base_url=BASE_URL, transport=httpx.ASGITransport(app=demo_app))
    return AuthService(client, anonymous_session)


async def test_login_starts_session(auth, anonymous_session, session_store, demo_app):
    result = await auth.login(DEMO_USERNAME, DEMO_PASSWORD)

    assert result.token in demo_app.state.tokens
    assert auth.current_user.username == DEMO_USERNAME
    assert anonymous_session.is_authenticated
    assert session_store.get("token") == result.token
    assert SessionContext.restore(session_store).user.username == DEMO_USERNAME


async def test_wrong_password_is_unauthorized(auth, anonymous_session):
    with pytest.raises(UnauthorizedError):
        await auth.login(DEMO_USERNAME, "wrong")
    assert not anonymous_session.is_authenticated


async def test_login_failure_does_not_fire_invalidation(auth, anonymous_session):
    reasons = []
    anonymous_session.on_invalidated(reasons.append)
    with pytest.raises(UnauthorizedError):
        await auth.login(DEMO_USERNAME, "wrong")
    assert reasons == []


@pytest.mark.parametrize("username,password", [("", "x"), ("   ", "x"), ("chef", "")])
async def test_blank_credentials_never_hit_the_network(anonymous_session, username, password):
    handler, seen = recording_handler(200, {})
    auth = AuthService(scripted_client(anonymous_session, handler), anonymous_session)

    with pytest.raises(ValidationError):
        await auth.login(username, password)
    assert seen == []


async def test_login_sends_no_bearer_header(session):
    handler, seen = recording_handler(200, {"token": "fresh", "user": {"id": "7", "username": "chef"}})
    auth = AuthService(scripted_client(session, handler), session)

    await auth.login(" chef ", "pw")

    assert "Authorization" not in seen[0].headers
    assert body_of(seen[0]) == {"username": "chef", "password": "pw"}
    assert session.token == "fresh"


async def test_missing_endpoint_is_service_unavailable(anonymous_session):
    handler, _ = recording_handler(404)
    auth = AuthService(scripted_client(anonymous_session, handler), anonymous_session)

    with pytest.raises(ServiceError) as exc_info:
        await auth.login("chef", "pw")
    assert exc_info.value.status_code == 404


async def test_bare_token_gets_synthesized_identity(anonymous_session):
    handler, _ = recording_handler(200, {"token": "bare"})
    auth = AuthService(scripted_client(anonymous_session, handler), anonymous_session)

    result = await auth.login("chef", "pw")

    assert result.user.username == "chef"
    assert anonymous_session.user.id == "chef"


@pytest.mark.parametrize("body", [{}, {"token": ""}, ["token"], {"user": {"id": "1", "username": "x"}}])
async def test_malformed_login_response(anonymous_session, body):
    handler, _ = recording_handler(200, body)
    auth = AuthService(scripted_client(anonymous_session, handler), anonymous_session)

    with pytest.raises(ServiceError):
        await auth.login("chef", "pw")
    assert not anonymous_session.is_authenticated


async def test_unreachable_backend(anonymous_session):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    auth = AuthService(scripted_client(anonymous_session, handler), anonymous_session)
    with pytest.raises(NetworkError):
        await auth.login("chef", "pw")


async def test_logout_clears_session(auth, anonymous_session, session_store):
    await auth.login(DEMO_USERNAME, DEMO_PASSWORD)

    auth.logout()

    assert auth.current_user is None
    assert session_store.get("token") is None
