"""Expose constructed client wrappers."""

from .google_auth import GoogleOAuthClient
from .google_calendar import GoogleCalendarClient
from .memory_store import InMemoryKeyValueStore
from .sqlite_store import SQLiteKeyValueStore

__all__ = [
    "GoogleCalendarClient",
    "GoogleOAuthClient",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
]
