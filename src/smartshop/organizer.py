"""Grouping, sorting and progress statistics for the shopping list."""

from collections.abc import Sequence

from .models import UNCATEGORIZED, GroupedProjection, ShoppingItem, ViewFilter


def progress_percent(bought_count: int, total_count: int) -> int:
    """Percentage of bought items, rounded half up. 0 for an empty list."""
    if total_count <= 0:
        return 0
    # round-half-up of 100 * bought / total, in integer arithmetic
    return (200 * bought_count + total_count) // (2 * total_count)


def sort_pending_first(items: Sequence[ShoppingItem]) -> list[ShoppingItem]:
    """Stable sort putting not-bought items before bought ones."""
    return sorted(items, key=lambda item: item.is_bought)


def group_by_category(items: Sequence[ShoppingItem]) -> dict[str, list[ShoppingItem]]:
    """Group items by category, keeping first-seen category order."""
    groups: dict[str, list[ShoppingItem]] = {}
    for item in items:
        category = item.category or UNCATEGORIZED
        groups.setdefault(category, []).append(item)
    return groups


def organize(
    items: Sequence[ShoppingItem],
    view_filter: ViewFilter | str = ViewFilter.ALL,
) -> GroupedProjection:
    """Build the grouped projection of a collection.

    Args:
        items: Collection in insertion order
        view_filter: ``all`` or ``pending`` (bought items hidden)

    Returns:
        GroupedProjection. Counts always describe the whole collection.
    """
    view_filter = ViewFilter(view_filter)

    visible = list(items)
    if view_filter == ViewFilter.PENDING:
        visible = [item for item in visible if not item.is_bought]

    total_count = len(items)
    bought_count = sum(1 for item in items if item.is_bought)

    return GroupedProjection(
        view_filter=view_filter,
        groups=group_by_category(sort_pending_first(visible)),
        total_count=total_count,
        bought_count=bought_count,
        progress_percent=progress_percent(bought_count, total_count),
    )
