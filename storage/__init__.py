"""Storage layer for persisted client preferences.

Provides the repository interface and a SQLite implementation that keeps the
selected locale and theme between sessions.
"""

from pathlib import Path

from config import DEFAULT_DB_PATH
from .base import LOCALE_KEY, THEME_KEY, PreferencesRepository
from .connection import get_connection, init_schema
from .sqlite import InMemoryPreferencesRepository, SQLitePreferencesRepository

__all__ = [
    # Abstract interface
    "PreferencesRepository",
    "LOCALE_KEY",
    "THEME_KEY",
    # Implementations
    "SQLitePreferencesRepository",
    "InMemoryPreferencesRepository",
    # Connection utilities
    "get_connection",
    "init_schema",
    "DEFAULT_DB_PATH",
    # Factory function
    "get_preferences_repo",
]


def get_preferences_repo(db_path: Path | None = DEFAULT_DB_PATH) -> PreferencesRepository:
    """Get a PreferencesRepository instance.

    Passing ``None`` gives a non-persistent repository.
    """
    if db_path is None:
        return InMemoryPreferencesRepository()
    return SQLitePreferencesRepository(db_path)
