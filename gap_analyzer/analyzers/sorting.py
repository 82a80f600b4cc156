"""Stable, direction-aware sorting for aggregated tables."""

import math
from collections.abc import Iterable
from typing import Any

from ..models import SortConfig, SortDirection
from ..parsers import _parse_float


def request_sort(config: SortConfig, key: str) -> SortConfig:
    """Sort config after the analyst asks to sort by `key`.

    Asking again for the current key flips the direction; a new key
    starts ascending.
    """
    if config.key == key:
        if config.direction == SortDirection.ASCENDING:
            return SortConfig(key=key, direction=SortDirection.DESCENDING)
        return SortConfig(key=key, direction=SortDirection.ASCENDING)
    return SortConfig(key=key, direction=SortDirection.ASCENDING)


def apply_sort(items: Iterable[Any], config: SortConfig) -> list[Any]:
    """Sort items by a SortConfig; no key keeps the current order."""
    if config.key is None:
        return list(items)
    return sort_items(items, config.key, config.direction)


def sort_items(
    items: Iterable[Any],
    key: str,
    direction: SortDirection = SortDirection.ASCENDING,
) -> list[Any]:
    """Stable sort of dataclass or dict rows by one field.

    Values that parse as numbers (including "12.50%" and "1,234") compare
    numerically and order before text values, which compare as strings.
    Equal values keep their relative order in both directions.

    Args:
        items: Rows to sort
        key: Attribute or dict key to sort by
        direction: Ascending or descending

    Returns:
        New sorted list
    """
    return sorted(
        items,
        key=lambda item: _sort_key(_field_value(item, key)),
        reverse=direction == SortDirection.DESCENDING,
    )


def _field_value(item: Any, key: str) -> Any:
    if isinstance(item, dict):
        return item.get(key)
    return getattr(item, key, None)


def _sort_key(value: Any) -> tuple[int, float | str]:
    number = _parse_float(value) if not isinstance(value, bool) else float(value)
    if number is not None and not math.isnan(number):
        return (0, number)
    return (1, "" if value is None else str(value))
