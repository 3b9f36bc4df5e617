"""Shopping list item store."""

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence

from .models import UNCATEGORIZED, ShoppingItem

logger = logging.getLogger(__name__)

MutationHook = Callable[[list[ShoppingItem]], None]


class ItemStore:
    """Ordered collection of shopping items.

    All mutation goes through the methods below. After every successful
    mutation the ``on_mutation`` hook receives a snapshot of the whole
    collection; failures inside the hook are logged and never reach the
    caller.
    """

    def __init__(
        self,
        items: Iterable[ShoppingItem] | None = None,
        on_mutation: MutationHook | None = None,
    ):
        """Initialize item store.

        Args:
            items: Initial collection, usually the result of a persistence load.
            on_mutation: Called with a snapshot after each mutation.
        """
        self._items: list[ShoppingItem] = []
        seen: set[str] = set()
        for item in items or []:
            if item.id in seen:
                raise ValueError(f"Duplicate item id '{item.id}'")
            seen.add(item.id)
            self._items.append(item)
        self.on_mutation = on_mutation

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ShoppingItem]:
        return iter(list(self._items))

    @property
    def items(self) -> list[ShoppingItem]:
        """Copy of the collection in insertion order."""
        return list(self._items)

    def get(self, item_id: str) -> ShoppingItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add_items(self, pairs: Sequence[tuple[str, str]]) -> list[ShoppingItem]:
        """Append one item per (name, category) pair.

        Names are trimmed and blank names dropped. A blank category falls
        back to "Uncategorized".

        Returns:
            The created items, in order
        """
        added: list[ShoppingItem] = []
        for name, category in pairs:
            name = (name or "").strip()
            if not name:
                continue
            category = (category or "").strip() or UNCATEGORIZED
            added.append(ShoppingItem(name=name, category=category))

        if not added:
            return []

        self._items.extend(added)
        logger.debug("Added %d item(s)", len(added))
        self._notify()
        return added

    def toggle(self, item_id: str) -> ShoppingItem | None:
        """Flip the bought flag of an item.

        Returns:
            The updated item, or None when no item has that id
        """
        for i, item in enumerate(self._items):
            if item.id == item_id:
                updated = item.toggled()
                self._items[i] = updated
                self._notify()
                return updated

        logger.debug("Toggle ignored, no item with id %s", item_id)
        return None

    def delete(self, item_id: str) -> ShoppingItem | None:
        """Remove an item.

        Returns:
            The removed item, or None when no item has that id
        """
        for i, item in enumerate(self._items):
            if item.id == item_id:
                removed = self._items.pop(i)
                self._notify()
                return removed

        logger.debug("Delete ignored, no item with id %s", item_id)
        return None

    def clear_completed(self) -> int:
        """Remove all bought items and return how many were removed."""
        remaining = [item for item in self._items if not item.is_bought]
        removed_count = len(self._items) - len(remaining)
        self._items = remaining
        self._notify()
        return removed_count

    def reset_all(self) -> int:
        """Remove every item and return how many were removed."""
        removed_count = len(self._items)
        self._items = []
        self._notify()
        return removed_count

    def _notify(self) -> None:
        if self.on_mutation is None:
            return
        try:
            self.on_mutation(self.items)
        except Exception:
            logger.exception("On-mutation hook failed; in-memory list kept")
