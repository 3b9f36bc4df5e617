"""SmartShop - Shopping list with AI-assisted categorization."""

from .classifier import TextClassifier, fallback_items, split_items
from .config import ConfigManager
from .data_store import BackendType, BlobStore, DataStore, create_data_store
from .item_store import ItemStore
from .models import (
    GENERAL_CATEGORY,
    UNCATEGORIZED,
    ClassificationOutcome,
    ClassificationResult,
    ClassifiedItem,
    GroupedProjection,
    ShoppingItem,
    ViewFilter,
)
from .organizer import organize, progress_percent
from .output_formatter import OutputFormatter
from .persistence import STORAGE_SLOT, PersistenceBridge
from .session import SessionNotOpenError, ShoppingSession
from .sqlite_store import SQLiteStore

__version__ = "0.1.0"

__all__ = [
    "BackendType",
    "BlobStore",
    "ClassificationOutcome",
    "ClassificationResult",
    "ClassifiedItem",
    "ConfigManager",
    "create_data_store",
    "DataStore",
    "fallback_items",
    "GENERAL_CATEGORY",
    "GroupedProjection",
    "ItemStore",
    "organize",
    "OutputFormatter",
    "PersistenceBridge",
    "progress_percent",
    "SessionNotOpenError",
    "ShoppingItem",
    "ShoppingSession",
    "split_items",
    "SQLiteStore",
    "STORAGE_SLOT",
    "TextClassifier",
    "UNCATEGORIZED",
    "ViewFilter",
]
