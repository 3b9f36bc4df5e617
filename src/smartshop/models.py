"""Core data models for SmartShop."""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

GENERAL_CATEGORY = "General"
UNCATEGORIZED = "Uncategorized"


def new_item_id() -> str:
    """Generate a fresh opaque item identifier."""
    return str(uuid4())


class ViewFilter(str, Enum):
    """Which items a projection shows."""

    ALL = "all"
    PENDING = "pending"


class ClassificationOutcome(str, Enum):
    """Which path produced a classification."""

    REMOTE = "remote"
    NOT_CONFIGURED = "not_configured"
    REMOTE_FAILED = "remote_failed"


class ShoppingItem(BaseModel):
    """A shopping list entry.

    Only ``is_bought`` changes after creation; the model is frozen, so a
    toggle produces a copy with the flag flipped.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_item_id)
    name: str = Field(min_length=1)
    category: str = UNCATEGORIZED
    is_bought: bool = Field(default=False, alias="isBought")

    def toggled(self) -> "ShoppingItem":
        return self.model_copy(update={"is_bought": not self.is_bought})


class ClassifiedItem(BaseModel):
    """A (name, category) pair produced by the classifier."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)

    def as_pair(self) -> tuple[str, str]:
        return (self.name, self.category)


class ClassificationResult(BaseModel):
    """Classifier output tagged with the path that produced it."""

    items: list[ClassifiedItem] = Field(default_factory=list)
    outcome: ClassificationOutcome

    @property
    def pairs(self) -> list[tuple[str, str]]:
        return [item.as_pair() for item in self.items]

    @property
    def used_fallback(self) -> bool:
        return self.outcome != ClassificationOutcome.REMOTE


class GroupedProjection(BaseModel):
    """Grouped, sorted view of the item collection plus statistics."""

    view_filter: ViewFilter = ViewFilter.ALL
    groups: dict[str, list[ShoppingItem]] = Field(default_factory=dict)
    total_count: int = 0
    bought_count: int = 0
    progress_percent: int = 0

    @property
    def pending_count(self) -> int:
        return self.total_count - self.bought_count

    @property
    def categories(self) -> list[str]:
        return list(self.groups)

    def ordered_items(self) -> list[ShoppingItem]:
        """Flatten the groups in display order."""
        return [item for items in self.groups.values() for item in items]
