"""Whole-collection save/load of the shopping list."""

import logging
import sqlite3
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from .data_store import BlobStore
from .models import ShoppingItem

logger = logging.getLogger(__name__)

STORAGE_SLOT = "smartshop_items_v1"

_items_adapter = TypeAdapter(list[ShoppingItem])


def dump_items(items: Sequence[ShoppingItem]) -> str:
    """Serialize a collection to the stored JSON array format."""
    return _items_adapter.dump_json(list(items), by_alias=True).decode("utf-8")


def parse_items(blob: str) -> list[ShoppingItem]:
    """Parse a stored JSON array.

    Raises:
        ValueError: If the blob is not a valid collection
    """
    try:
        items = _items_adapter.validate_json(blob)
    except ValidationError as e:
        raise ValueError(f"Invalid stored list: {e.error_count()} error(s)") from e

    ids = [item.id for item in items]
    if len(ids) != len(set(ids)):
        raise ValueError("Invalid stored list: duplicate item ids")
    return items


class PersistenceBridge:
    """Saves and loads the full item collection to one blob store slot."""

    def __init__(self, store: BlobStore, slot: str = STORAGE_SLOT):
        self.store = store
        self.slot = slot

    def save(self, items: Sequence[ShoppingItem]) -> None:
        """Overwrite the slot with the given collection."""
        self.store.write(self.slot, dump_items(items))
        logger.debug("Saved %d item(s) to slot %s", len(items), self.slot)

    def load(self) -> list[ShoppingItem]:
        """Load the saved collection.

        Returns:
            The stored items, or an empty list when the slot is absent,
            unreadable or corrupt
        """
        try:
            blob = self.store.read(self.slot)
        except (OSError, ValueError, sqlite3.Error) as e:
            logger.warning("Could not read slot %s, starting empty: %s", self.slot, e)
            return []

        if blob is None:
            return []

        try:
            return parse_items(blob)
        except ValueError as e:
            logger.warning("Stored list in slot %s is corrupt, starting empty: %s", self.slot, e)
            return []
