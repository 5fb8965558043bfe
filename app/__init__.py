"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and the client session context.
"""

from app.config import settings
from app.exceptions import (
    MenuHubError,
    ValidationError,
    NetworkError,
    ServiceError,
    SessionExpired,
    UnauthorizedError,
    NotFoundError,
    ConflictError,
)

__all__ = [
    "settings",
    "MenuHubError",
    "ValidationError",
    "NetworkError",
    "ServiceError",
    "SessionExpired",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
]
