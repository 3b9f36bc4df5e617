"""One user's shopping session: store, persistence and classifier wired together."""

import logging

from .classifier import TextClassifier, split_items
from .item_store import ItemStore
from .models import (
    GENERAL_CATEGORY,
    ClassificationResult,
    GroupedProjection,
    ShoppingItem,
    ViewFilter,
)
from .organizer import organize
from .persistence import PersistenceBridge

logger = logging.getLogger(__name__)


class SessionNotOpenError(Exception):
    """Raised when a session is used before open() or after close()."""

    def __init__(self):
        super().__init__("Shopping session is not open")


class ShoppingSession:
    """Owns the item store for the lifetime of a session.

    ``open()`` loads the saved list and installs the persistence bridge as the
    store's on-mutation hook; ``close()`` performs a final save.
    """

    def __init__(self, bridge: PersistenceBridge, classifier: TextClassifier | None = None):
        self.bridge = bridge
        self.classifier = classifier or TextClassifier()
        self.is_processing = False
        self.last_classification: ClassificationResult | None = None
        self._store: ItemStore | None = None

    def __enter__(self) -> "ShoppingSession":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> ItemStore:
        if self._store is None:
            raise SessionNotOpenError()
        return self._store

    @property
    def items(self) -> list[ShoppingItem]:
        return self.store.items

    def open(self) -> "ShoppingSession":
        if self._store is None:
            items = self.bridge.load()
            self._store = ItemStore(items, on_mutation=self.bridge.save)
            logger.debug("Session opened with %d item(s)", len(items))
        return self

    def close(self) -> None:
        if self._store is None:
            return
        try:
            self.bridge.save(self._store.items)
        except Exception:
            logger.exception("Final save failed")
        self._store = None

    def add_simple(self, text: str) -> list[ShoppingItem]:
        """Add comma-separated names locally, each in the "General" category."""
        return self.store.add_items(
            [(name, GENERAL_CATEGORY) for name in split_items(text, separators=",")]
        )

    async def add_smart(self, text: str) -> list[ShoppingItem]:
        """Classify free text and add the resulting items.

        ``is_processing`` is set while the classifier call is outstanding.
        Other mutations may run meanwhile; the new items are appended once
        the call resolves.
        """
        store = self.store
        if not text.strip():
            return []

        self.is_processing = True
        try:
            result = await self.classifier.classify(text)
        finally:
            self.is_processing = False

        self.last_classification = result
        if result.used_fallback:
            logger.info("Smart add used local fallback (%s)", result.outcome.value)
        return store.add_items(result.pairs)

    def toggle(self, item_id: str) -> ShoppingItem | None:
        return self.store.toggle(item_id)

    def delete(self, item_id: str) -> ShoppingItem | None:
        return self.store.delete(item_id)

    def clear_completed(self) -> int:
        return self.store.clear_completed()

    def reset_all(self) -> int:
        return self.store.reset_all()

    def view(self, view_filter: ViewFilter | str = ViewFilter.ALL) -> GroupedProjection:
        return organize(self.store.items, view_filter)
