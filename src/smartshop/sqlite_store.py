"""SQLite-based blob storage for SmartShop.

This module provides SQLite database storage as an alternative to JSON files.
It implements the same interface as DataStore for seamless switching.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path

from .data_store import validate_slot


class SQLiteStore:
    """Stores slots as rows of a key/value table.

    The database file is not opened until the first read or write, so a
    damaged file surfaces as ``sqlite3.DatabaseError`` from that call.
    """

    def __init__(self, db_path: Path | None = None):
        """Initialize SQLite store.

        Args:
            db_path: Path to the SQLite database file. Defaults to ./data/smartshop.db
        """
        if db_path is None:
            db_path = Path.cwd() / "data" / "smartshop.db"
        self.db_path = db_path
        self._table_ready = False
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _get_connection(self):
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(self.db_path)
        try:
            if not self._table_ready:
                self._init_database(conn)
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_database(self, conn: sqlite3.Connection) -> None:
        """Create tables if needed."""
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                slot TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )
        self._table_ready = True

    def read(self, slot: str) -> str | None:
        """Read a slot, None if it was never written."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv WHERE slot = ?", (validate_slot(slot),)
            ).fetchone()
        return row[0] if row else None

    def write(self, slot: str, blob: str) -> None:
        """Overwrite a slot."""
        with self._get_connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv (slot, value) VALUES (?, ?)",
                (validate_slot(slot), blob),
            )
