"""Table pagination and keyword selection."""

import math
from collections.abc import Iterable, Sequence
from typing import Any

from ..models import KeywordRecord, SelectionStats


def page_count(total_items: int, page_size: int) -> int:
    """Number of pages needed for `total_items` (0 for an empty table)."""
    return math.ceil(total_items / max(page_size, 1))


def clamp_page(page_number: int, total_items: int, page_size: int) -> int:
    """Clamp a page number to [1, max(page_count, 1)]."""
    last_page = max(page_count(total_items, page_size), 1)
    return min(max(page_number, 1), last_page)


def paginate(
    items: Sequence[Any], page_size: int, page_number: int
) -> list[Any]:
    """Get one page of items.

    Args:
        items: Full (filtered, sorted) item list
        page_size: Items per page, values below 1 are treated as 1
        page_number: 1-indexed page, clamped to the valid range

    Returns:
        Slice of items for the page
    """
    page_size = max(page_size, 1)
    page = clamp_page(page_number, len(items), page_size)
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def toggle_selection(selection: frozenset[str], key: str) -> frozenset[str]:
    """Add `key` if absent, remove it if present."""
    if key in selection:
        return selection - {key}
    return selection | {key}


def select_all_visible(
    selection: frozenset[str], visible_keys: Iterable[str]
) -> frozenset[str]:
    """Select every visible keyword, keeping those already selected."""
    return selection | frozenset(visible_keys)


def deselect_visible(
    selection: frozenset[str], visible_keys: Iterable[str]
) -> frozenset[str]:
    """Remove every visible keyword from the selection."""
    return selection - frozenset(visible_keys)


def selected_records(
    records: Iterable[KeywordRecord], selection: frozenset[str]
) -> list[KeywordRecord]:
    """Filtered records whose keyword is selected, in filtered order."""
    return [r for r in records if r.keyword in selection]


def selection_stats(
    records: Iterable[KeywordRecord], selection: frozenset[str]
) -> SelectionStats:
    """Count and volume of selected keywords present in `records`.

    Selected keywords filtered out of the current view contribute nothing.
    """
    selected = selected_records(records, selection)
    return SelectionStats(
        selected_count=len(selected),
        selected_volume=sum(r.search_volume for r in selected),
    )
