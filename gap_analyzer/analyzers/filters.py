"""Keyword filtering by category, volume, brand, text and competitor rank."""

import math
from collections.abc import Iterable
from typing import Any

from ..models import FilterCriteria, KeywordRecord
from ..parsers import _parse_float


def filter_records(
    records: Iterable[KeywordRecord], criteria: FilterCriteria
) -> list[KeywordRecord]:
    """Reduce the record set to those matching every filter clause.

    Output keeps the input order. Filtering an already filtered set with
    the same criteria returns it unchanged.

    Args:
        records: Full keyword record set
        criteria: Filter parameters

    Returns:
        List of matching KeywordRecord objects
    """
    terms = criteria.keyword_terms
    return [r for r in records if _matches(r, criteria, terms)]


def record_matches(record: KeywordRecord, criteria: FilterCriteria) -> bool:
    """Check a single record against the filter criteria."""
    return _matches(record, criteria, criteria.keyword_terms)


def _matches(
    record: KeywordRecord, criteria: FilterCriteria, terms: list[str]
) -> bool:
    if criteria.categories and record.category not in criteria.categories:
        return False

    if record.search_volume < criteria.min_volume:
        return False

    if criteria.branded_only and not record.is_branded:
        return False

    if terms:
        keyword_lower = record.keyword.lower()
        if not any(term in keyword_lower for term in terms):
            return False

    return _competitor_clause(record, criteria)


def _competitor_clause(record: KeywordRecord, criteria: FilterCriteria) -> bool:
    """True if any competitor entry has an allowed name and rank in range."""
    if criteria.competitor_clause_unrestricted:
        return True

    for entry in record.competitors:
        if criteria.competitors and entry.name not in criteria.competitors:
            continue
        if criteria.rank_range is not None:
            low, high = criteria.rank_range
            if not low <= entry.rank <= high:
                continue
        return True

    return False


def normalize_criteria(
    categories: Iterable[str] | None = None,
    min_volume: Any = 0,
    branded_only: bool = False,
    keyword_filter: str | None = "",
    competitors: Iterable[str] | None = None,
    rank_range: tuple[Any, Any] | None = None,
) -> FilterCriteria:
    """Build FilterCriteria from raw interactive input without raising.

    Non-numeric or negative volume becomes 0. An inverted rank range is
    swapped. A rank range with a non-numeric bound is treated as
    unrestricted.
    """
    volume = _parse_float(min_volume)
    if volume is None or not math.isfinite(volume) or volume < 0:
        volume = 0.0

    return FilterCriteria(
        categories=frozenset(c for c in (categories or ()) if c is not None),
        min_volume=math.ceil(volume),
        branded_only=bool(branded_only),
        keyword_filter=keyword_filter or "",
        competitors=frozenset(c for c in (competitors or ()) if c),
        rank_range=_normalize_rank_range(rank_range),
    )


def _normalize_rank_range(
    rank_range: tuple[Any, Any] | None,
) -> tuple[int, int] | None:
    if rank_range is None:
        return None

    try:
        low_raw, high_raw = rank_range
    except (TypeError, ValueError):
        return None

    low = _parse_float(low_raw)
    high = _parse_float(high_raw)
    if low is None or high is None:
        return None
    if not (math.isfinite(low) and math.isfinite(high)):
        return None

    low_rank, high_rank = int(low), int(high)
    if low_rank > high_rank:
        low_rank, high_rank = high_rank, low_rank
    return low_rank, high_rank
