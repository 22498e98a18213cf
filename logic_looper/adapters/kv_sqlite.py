"""
SQLite key-value adapter.

Single table kv(key TEXT PRIMARY KEY, value TEXT, updated_at TEXT).
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime

from logic_looper.ports.kv import StorageUnavailableError

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""


class SQLiteKeyValueStore:
    """SQLite implementation of KeyValueStorePort."""

    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self._external_conn = connection
        self._ensure_schema()

    def _get_conn(self) -> sqlite3.Connection:
        """Get database connection (uses external if provided)."""
        if self._external_conn is not None:
            return self._external_conn

        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageUnavailableError("sqlite", str(e)) from e

    def _should_close(self) -> bool:
        """Whether to close connection after use."""
        return self._external_conn is None

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(SCHEMA)
            conn.commit()
        finally:
            if self._should_close():
                conn.close()

    def get(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        except sqlite3.Error as e:
            raise StorageUnavailableError("sqlite", str(e)) from e
        finally:
            if self._should_close():
                conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.now(UTC).isoformat()),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageUnavailableError("sqlite", str(e)) from e
        finally:
            if self._should_close():
                conn.close()

    def delete(self, key: str) -> bool:
        conn = self._get_conn()
        try:
            cursor = conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StorageUnavailableError("sqlite", str(e)) from e
        finally:
            if self._should_close():
                conn.close()
