"""
Adapters package - External service connections.
HTTP client for the menu backend and the SQL session store.
"""

from adapters.http_adapter import ApiClient, ensure_success
from adapters.session_store import SessionStore

__all__ = [
    "ApiClient",
    "ensure_success",
    "SessionStore",
]
