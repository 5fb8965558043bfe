"""
Client session context.

Holds the bearer credential and the logged-in identity, persists both through
a session store, and tells subscribers when the session ends (logout or a 401
from the backend) so the UI can send the user back to the login screen.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from domain.schemas.auth_schemas import AuthResponse, UserIdentity

if TYPE_CHECKING:
    from adapters.session_store import SessionStore

logger = logging.getLogger("menuhub.session")

InvalidationListener = Callable[[str], None]

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionContext:
    """Explicit, injectable replacement for process-wide token/user globals."""

    def __init__(self, store: Optional[SessionStore] = None):
        self._store = store
        self.token: Optional[str] = None
        self.user: Optional[UserIdentity] = None
        self._listeners: List[InvalidationListener] = []

    @classmethod
    def restore(cls, store: SessionStore) -> "SessionContext":
        """
        Rebuild a session from the store.

        The session is anonymous (and the store is wiped) when either value is
        missing or blank, or when the stored identity does not parse.
        """
        session = cls(store)
        token = store.get(TOKEN_KEY)
        raw_user = store.get(USER_KEY)

        if not token or not raw_user or not raw_user.strip() or raw_user == "undefined":
            if token or raw_user:
                logger.info("Incomplete stored session, clearing it")
                store.clear()
            return session

        try:
            user = UserIdentity.model_validate_json(raw_user)
        except PydanticValidationError as e:
            logger.warning("Stored user record is corrupt, clearing session: %s", e)
            store.clear()
            return session

        session.token = token
        session.user = user
        logger.info("Restored session for %s", user.username)
        return session

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    def start(self, auth: AuthResponse) -> None:
        """Adopt a fresh credential and persist it."""
        self.token = auth.token
        self.user = auth.user
        if self._store is not None:
            self._store.set(TOKEN_KEY, auth.token)
            self._store.set(USER_KEY, auth.user.model_dump_json())
        logger.info("Session started for %s", auth.user.username)

    def on_invalidated(self, listener: InvalidationListener) -> InvalidationListener:
        """Register a callback run with the reason whenever the session ends."""
        self._listeners.append(listener)
        return listener

    def invalidate(self, reason: str = "logout") -> None:
        """Forget the credential and identity, in memory and in the store."""
        self.token = None
        self.user = None
        if self._store is not None:
            self._store.clear()
        logger.info("Session invalidated (%s)", reason)
        for listener in list(self._listeners):
            listener(reason)

    def logout(self) -> None:
        self.invalidate("logout")
