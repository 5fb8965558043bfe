import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from adapters.http_adapter import ApiClient, ensure_success
from app.exceptions import ServiceError, UnauthorizedError, ValidationError
from app.session import SessionContext
from domain.schemas.auth_schemas import AuthResponse, LoginRequest, UserIdentity

logger = logging.getLogger("menuhub.auth")


class AuthService:
    """Login/logout against the backend's auth endpoint."""

    def __init__(self, client: ApiClient, session: SessionContext):
        self.client = client
        self.session = session

    async def login(self, username: str, password: str) -> AuthResponse:
        """
        Exchange credentials for a bearer token and start the session.

        Raises:
            ValidationError: blank username or password
            UnauthorizedError: credentials rejected (401)
            ServiceError: auth service unavailable (404) or any other failure status
            NetworkError: backend unreachable
        """
        if not username or not username.strip() or not password:
            raise ValidationError("Username and password are required")
        body = LoginRequest(username=username.strip(), password=password)

        response = await self.client.post("/auth/login", json=body.model_dump())
        if response.status_code == 401:
            logger.info("Login rejected for %s", body.username)
            raise UnauthorizedError("Invalid credentials")
        if response.status_code == 404:
            raise ServiceError("Authentication service unavailable", status_code=404)
        ensure_success(response, "log in")

        try:
            data = response.json()
            if data.get("token") and not data.get("user"):
                # bare token: the backend did not send an identity record
                data = {**data, "user": {"id": body.username, "username": body.username}}
            auth = AuthResponse.model_validate(data)
        except (PydanticValidationError, ValueError, AttributeError) as e:
            logger.error("Malformed login response: %s", e)
            raise ServiceError("Backend returned a malformed login response", status_code=response.status_code) from e

        self.session.start(auth)
        return auth

    def logout(self) -> None:
        self.session.logout()

    @property
    def current_user(self) -> Optional[UserIdentity]:
        return self.session.user
