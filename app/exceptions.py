from typing import Any, Mapping, Optional


class MenuHubError(Exception):
    """Base class for all MenuHub failures.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, request info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500

    def __init__(self, message: str = "MenuHub error", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ValidationError(MenuHubError):
    """Raised when input is malformed before any network call is made
    (blank dish name, malformed date, duplicate meal type...).

    http_status is 400.
    """

    http_status = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class NetworkError(MenuHubError):
    """Raised when the backend could not be reached or the request timed out."""

    http_status = 503

    def __init__(self, message: str = "Backend unreachable", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class ServiceError(MenuHubError):
    """Raised when the backend answered with a non-success status, or with a
    payload that does not match the wire contract.

    Attributes:
        status_code: HTTP status returned by the backend, if any
    """

    http_status = 502

    def __init__(
        self,
        message: str = "Backend rejected the request",
        status_code: Optional[int] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message, details, code)
        self.status_code = status_code

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        return payload


class SessionExpired(MenuHubError):
    """Raised for any 401 on an authenticated request. The session has already
    been cleared when this is raised; the user must log in again.
    """

    http_status = 401

    def __init__(self, message: str = "Session expired", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class UnauthorizedError(MenuHubError):
    """Raised when a login attempt is rejected."""

    http_status = 401

    def __init__(self, message: str = "Unauthorized", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class NotFoundError(MenuHubError):
    """Raised when a requested resource was not found. http_status is 404."""

    http_status = 404

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class ConflictError(MenuHubError):
    """Raised when a resource conflict occurs (e.g., a second menu for the same date).

    http_status is 409.
    """

    http_status = 409

    def __init__(self, message: str = "Conflict", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)
