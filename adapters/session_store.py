"""SQL-backed key/value store for the client session (token and user record).
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from app.config import settings

logger = logging.getLogger("menuhub.session_store")


class SessionStore:
    """
    Persists the session credential and identity between runs.

    Table: client_session(name varchar(64) pk, value text not null)
    """

    def __init__(self, db_url: Optional[str] = None, engine: Optional[Engine] = None):
        self.engine: Engine = engine or create_engine(db_url or settings.session_db_url, future=True)
        self._ensure_table()

    def _ensure_table(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text(
                    "CREATE TABLE IF NOT EXISTS client_session ("
                    "name VARCHAR(64) PRIMARY KEY, value TEXT NOT NULL)"
                )
            )

    def get(self, key: str) -> Optional[str]:
        with self.engine.connect() as conn:
            row = conn.execute(
                text("SELECT value FROM client_session WHERE name = :key"), {"key": key}
            ).first()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(text("DELETE FROM client_session WHERE name = :key"), {"key": key})
            conn.execute(
                text("INSERT INTO client_session (name, value) VALUES (:key, :value)"),
                {"key": key, "value": value},
            )

    def delete(self, key: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(text("DELETE FROM client_session WHERE name = :key"), {"key": key})

    def clear(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(text("DELETE FROM client_session"))
        logger.debug("Session store cleared")
