"""Database connection management and schema initialization."""

import sqlite3
from pathlib import Path

from config import DEFAULT_DB_PATH

SCHEMA_SQL = """
-- Client preferences (selected locale, theme) as a key/value table
CREATE TABLE IF NOT EXISTS preferences (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def get_connection(db_path: Path = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Get a database connection with appropriate settings.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A configured sqlite3 Connection object.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_schema(db_path: Path = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    # Ensure the parent directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
