"""SQLite implementation of the preferences repository."""

import logging
from datetime import datetime
from pathlib import Path

from config import DEFAULT_DB_PATH
from .base import PreferencesRepository
from .connection import get_connection, init_schema

logger = logging.getLogger(__name__)


class SQLitePreferencesRepository(PreferencesRepository):
    """SQLite implementation of PreferencesRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path
        init_schema(db_path)

    def get(self, key: str) -> str | None:
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("SELECT value FROM preferences WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO preferences (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Saved preference %s=%s", key, value)

    def get_all(self) -> dict[str, str]:
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("SELECT key, value FROM preferences ORDER BY key")
            return {row["key"]: row["value"] for row in cursor.fetchall()}
        finally:
            conn.close()


class InMemoryPreferencesRepository(PreferencesRepository):
    """Non-persistent repository for sessions without a database."""

    def __init__(self, values: dict[str, str] | None = None):
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def get_all(self) -> dict[str, str]:
        return dict(self._values)
