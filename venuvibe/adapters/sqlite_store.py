"""
VenuVibe — SQLite key-value adapter.

Implements KeyValueStore on a single two-column table so that collections
survive restarts. Each key holds one JSON document; writes replace it whole.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from venuvibe.ports.storage_port import StorageError

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore:
    """SQLite-backed implementation of KeyValueStore."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from venuvibe.config import settings
            db_path = settings.DATABASE_PATH

        self._db_path = db_path
        # A ":memory:" database only lives as long as its connection
        self._shared: sqlite3.Connection | None = None
        if db_path == ":memory:":
            self._shared = sqlite3.connect(db_path, check_same_thread=False)
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        if self._shared is not None:
            return self._shared
        try:
            return sqlite3.connect(self._db_path)
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open {self._db_path}: {exc}") from exc

    def _init_db(self) -> None:
        """Create the kv_store table if it doesn't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key   TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
        logger.debug("Key-value table initialized at %s", self._db_path)

    def get(self, key: str) -> str | None:
        """Return the raw value stored under key, or None."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Read of {key!r} failed: {exc}") from exc
        if row is None:
            return None
        return row[0]

    def set(self, key: str, value: str) -> None:
        """Insert or replace the whole value for key."""
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, value),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Write of {key!r} failed: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        except sqlite3.Error as exc:
            raise StorageError(f"Remove of {key!r} failed: {exc}") from exc
