"""Analysis algorithms for keyword gap data."""

from .categories import aggregate_by_category, toggle_excluded_category
from .competitors import compute_competitor_totals, compute_rank_buckets
from .filters import filter_records, normalize_criteria
from .selection import paginate, select_all_visible, selection_stats, toggle_selection
from .sorting import request_sort, sort_items
from .universe import derive_universes

__all__ = [
    "aggregate_by_category",
    "toggle_excluded_category",
    "compute_competitor_totals",
    "compute_rank_buckets",
    "filter_records",
    "normalize_criteria",
    "paginate",
    "select_all_visible",
    "selection_stats",
    "toggle_selection",
    "request_sort",
    "sort_items",
    "derive_universes",
]
