"""Local blob storage for SmartShop.

This module provides key/value blob storage with support for JSON files (default)
or SQLite backends. Use create_data_store() to get the appropriate backend based
on configuration.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Protocol

_SLOT_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class BackendType(str, Enum):
    """Data storage backend types."""

    JSON = "json"
    SQLITE = "sqlite"


class BlobStore(Protocol):
    """Protocol defining the blob store interface."""

    def read(self, slot: str) -> str | None: ...
    def write(self, slot: str, blob: str) -> None: ...


def validate_slot(slot: str) -> str:
    """Check that a slot name is safe to use as a file name or key."""
    if not slot or not _SLOT_NAME_RE.match(slot):
        raise ValueError(f"Invalid storage slot name: '{slot}'")
    return slot


class DataStore:
    """Stores each slot as a JSON file in a data directory."""

    def __init__(self, data_dir: Path | None = None):
        """Initialize data store.

        Args:
            data_dir: Directory for data files. Defaults to ./data
        """
        self.data_dir = data_dir or Path.cwd() / "data"
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _slot_path(self, slot: str) -> Path:
        """Path to a slot file."""
        return self.data_dir / f"{validate_slot(slot)}.json"

    def read(self, slot: str) -> str | None:
        """Read a slot.

        Returns:
            The stored text, None if the slot was never written
        """
        path = self._slot_path(slot)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, slot: str, blob: str) -> None:
        """Overwrite a slot.

        The new content is written to a sibling temp file first and then
        moved into place, so a crash mid-write leaves the old value intact.
        """
        path = self._slot_path(slot)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(blob, encoding="utf-8")
        tmp_path.replace(path)


def create_data_store(
    backend: BackendType = BackendType.JSON,
    data_dir: Path | None = None,
    db_path: Path | None = None,
) -> BlobStore:
    """Create a blob store with the specified backend.

    Args:
        backend: Which backend to use (json or sqlite)
        data_dir: Directory for data files (used by JSON backend, also used
                  as base path for SQLite if db_path not specified)
        db_path: Path to SQLite database file (only used by SQLite backend)

    Returns:
        A DataStore or SQLiteStore instance

    Example:
        # Use JSON backend (default)
        store = create_data_store()

        # Use SQLite with custom path
        store = create_data_store(
            BackendType.SQLITE,
            db_path=Path("./my_data/smartshop.db")
        )
    """
    if backend == BackendType.SQLITE:
        from .sqlite_store import SQLiteStore

        if db_path is None and data_dir is not None:
            db_path = data_dir / "smartshop.db"

        return SQLiteStore(db_path=db_path)
    else:
        return DataStore(data_dir=data_dir)
