"""Category breakdown of keyword counts and search volume."""

from collections.abc import Iterable

from ..models import CategoryAggregate, KeywordRecord


def aggregate_by_category(
    records: Iterable[KeywordRecord],
    excluded_categories: Iterable[str] = (),
) -> list[CategoryAggregate]:
    """Group records by category with totals and percentage shares.

    Records in an excluded category are skipped entirely, so they count
    neither toward their own row nor toward the percentage denominator.
    Rows appear in order of first occurrence.

    Args:
        records: Filtered keyword records
        excluded_categories: Categories to leave out of this view

    Returns:
        List of CategoryAggregate objects
    """
    excluded = frozenset(excluded_categories)
    grouped: dict[str, CategoryAggregate] = {}

    for record in records:
        if record.category in excluded:
            continue

        aggregate = grouped.get(record.category)
        if aggregate is None:
            aggregate = CategoryAggregate(category=record.category)
            grouped[record.category] = aggregate

        aggregate.search_volume += record.search_volume
        aggregate.count += 1
        if record.is_branded:
            aggregate.branded_volume += record.search_volume
            aggregate.branded_count += 1
        else:
            aggregate.non_branded_volume += record.search_volume
            aggregate.non_branded_count += 1

    aggregates = list(grouped.values())
    total_volume = sum(a.search_volume for a in aggregates)
    total_count = sum(a.count for a in aggregates)

    for aggregate in aggregates:
        aggregate.volume_percentage = _percentage(
            aggregate.search_volume, total_volume
        )
        aggregate.count_percentage = _percentage(aggregate.count, total_count)

    return aggregates


def toggle_excluded_category(
    excluded: Iterable[str], category: str
) -> frozenset[str]:
    """Return a new exclusion set with `category` added or removed."""
    current = frozenset(excluded)
    if category in current:
        return current - {category}
    return current | {category}


def summarize_categories(aggregates: list[CategoryAggregate]) -> dict[str, int]:
    """Get totals across the category rows."""
    return {
        "categories": len(aggregates),
        "keywords": sum(a.count for a in aggregates),
        "search_volume": sum(a.search_volume for a in aggregates),
        "branded_keywords": sum(a.branded_count for a in aggregates),
        "branded_volume": sum(a.branded_volume for a in aggregates),
    }


def _percentage(part: float, total: float) -> float:
    if not total:
        return 0.0
    return part / total * 100
