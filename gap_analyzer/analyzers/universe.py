"""Category and competitor universes shared by every table."""

from collections.abc import Iterable

from ..models import KeywordRecord, Universes


def derive_universes(records: Iterable[KeywordRecord]) -> Universes:
    """Derive category and competitor names from the authoritative dataset.

    Both universes keep first-occurrence order. Pass the result to the
    aggregators so table columns stay stable when filters remove every
    keyword for a category or competitor.
    """
    categories: dict[str, None] = {}
    competitors: dict[str, None] = {}

    for record in records:
        categories.setdefault(record.category, None)
        for entry in record.competitors:
            if entry.name:
                competitors.setdefault(entry.name, None)

    return Universes(
        categories=tuple(categories),
        competitors=tuple(competitors),
    )
