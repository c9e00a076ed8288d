"""SQLite-backed string key/value store for state that outlives a session."""

from __future__ import annotations

import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".skillgap-radar" / "state.db"


class LocalStore:
    """Persistent string key/value pairs, one row per key."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS local_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM local_store WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row is not None else None

    def set_item(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO local_store (key, value, updated_at)
                   VALUES (?, ?, ?)""",
                (key, value, time.time()),
            )

    def remove_item(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM local_store WHERE key = ?", (key,))

    def keys(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT key FROM local_store ORDER BY key").fetchall()
        return [r[0] for r in rows]

    def clear(self) -> int:
        """Remove every key. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM local_store")
            return cursor.rowcount


def open_store(db_path: str | Path = DEFAULT_DB_PATH) -> LocalStore | None:
    """Open the store, or return None if the file is unusable.

    A damaged database file raises sqlite3.DatabaseError from the CREATE
    TABLE in ``_init_db``; an unwritable directory raises OSError.
    """
    try:
        return LocalStore(db_path)
    except (OSError, sqlite3.Error):
        logger.exception("Local store at %s unavailable; nothing will be persisted", db_path)
        return None
