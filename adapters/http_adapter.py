"""HTTP adapter for the menu backend.

One ``httpx.AsyncClient`` per session. Two event hooks play the role of
interceptors: the request hook attaches the bearer credential, the response
hook turns any 401 into a session invalidation, whatever operation caused it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from app.config import settings
from app.exceptions import NetworkError, ServiceError, SessionExpired
from app.session import SessionContext

logger = logging.getLogger("menuhub.http")

# Endpoints that never carry the bearer header and whose 401 means
# "wrong credentials" rather than "session expired".
PUBLIC_PATHS = ("/auth/login",)


def _is_public(request: httpx.Request) -> bool:
    return request.url.path.endswith(PUBLIC_PATHS)


def error_detail(response: httpx.Response) -> Any:
    """Best-effort extraction of the backend's error body for logs and errors."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


def ensure_success(response: httpx.Response, operation: str) -> None:
    """
    Raise ServiceError for any non-2xx response.

    Args:
        response: backend response
        operation: short description used in the error message
    """
    if response.is_success:
        return
    detail = error_detail(response)
    logger.error(
        "Backend rejected %s: %s %s -> %d %s",
        operation,
        response.request.method,
        response.request.url.path,
        response.status_code,
        detail,
    )
    raise ServiceError(
        f"Failed to {operation}",
        status_code=response.status_code,
        details={"path": response.request.url.path, "response": detail},
    )


class ApiClient:
    """
    Thin async client for the menu API.

    Args:
        session: session context supplying the credential and receiving invalidations
        base_url: backend base URL, defaults to settings.api_base_url
        timeout: flat per-request ceiling in seconds, defaults to settings.request_timeout_sec
        transport: optional httpx transport (ASGI app, mock handler...)
    """

    def __init__(
        self,
        session: SessionContext,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.timeout = timeout if timeout is not None else settings.request_timeout_sec
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=httpx.Timeout(self.timeout),
            headers={"Content-Type": "application/json"},
            transport=transport,
            event_hooks={
                "request": [self._attach_credentials],
                "response": [self._check_session],
            },
        )

    # ---------- interceptors ----------

    async def _attach_credentials(self, request: httpx.Request) -> None:
        if _is_public(request):
            return
        token = self.session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _check_session(self, response: httpx.Response) -> None:
        request = response.request
        logger.debug("%s %s -> %d", request.method, request.url.path, response.status_code)
        if response.status_code == 401 and not _is_public(request):
            logger.warning(
                "Backend rejected the session on %s %s, forcing re-authentication",
                request.method,
                request.url.path,
            )
            self.session.invalidate("unauthorized")
            raise SessionExpired(
                "Session expired, please log in again",
                details={"method": request.method, "path": request.url.path},
            )

    # ---------- requests ----------

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Response:
        """
        Perform one round-trip.

        Raises:
            NetworkError: backend unreachable or timeout exceeded
            SessionExpired: backend answered 401 on an authenticated call
        """
        try:
            return await self._client.request(method, path, json=json, params=params)
        except httpx.TimeoutException as e:
            logger.error("%s %s timed out after %.1fs", method, path, self.timeout)
            raise NetworkError(
                f"Request timed out after {self.timeout:g}s",
                details={"method": method, "path": path},
            ) from e
        except httpx.TransportError as e:
            logger.error("%s %s could not reach the backend: %s", method, path, e)
            raise NetworkError(
                "Cannot connect to the menu backend",
                details={"method": method, "path": path, "error": str(e)},
            ) from e

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> httpx.Response:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> httpx.Response:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> httpx.Response:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
