"""Parsers turning raw keyword data rows into KeywordRecords."""

import logging
import math
from typing import Any

from .models import CompetitorEntry, KeywordRecord

logger = logging.getLogger(__name__)


def parse_records(data: list[dict[str, Any]]) -> list[KeywordRecord]:
    """Parse raw keyword rows (from a JSON or JS data file).

    Rows without a keyword are skipped. Missing or malformed fields fall
    back to defaults so one bad row never fails the batch.

    Args:
        data: List of row dictionaries

    Returns:
        List of KeywordRecord objects in input order
    """
    records = []
    skipped = 0

    for row in data:
        if not isinstance(row, dict):
            skipped += 1
            continue

        record = parse_record(row)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.debug("Skipped %d rows without a keyword", skipped)

    return records


def parse_record(row: dict[str, Any]) -> KeywordRecord | None:
    """Parse a single raw row, or None if it has no keyword."""
    normalized = _normalize_columns(row)

    keyword = normalized.get("keyword")
    if keyword is None or str(keyword).strip() == "":
        return None

    category = normalized.get("category")
    if category is None:
        logger.debug("Keyword %r has no category", keyword)
        category = ""

    return KeywordRecord(
        keyword=str(keyword),
        category=str(category),
        search_volume=max(_parse_int(normalized.get("search_volume", 0)), 0),
        is_branded=_parse_bool(normalized.get("is_branded")),
        competitors=parse_competitors(normalized.get("competitors")),
    )


def parse_competitors(value: Any) -> tuple[CompetitorEntry, ...]:
    """Parse a competitor list, dropping entries without a name or rank."""
    if not isinstance(value, (list, tuple)):
        return ()

    entries = []
    for item in value:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        rank = _parse_float(item.get("rank"))
        if not name or rank is None or not math.isfinite(rank):
            logger.debug("Dropping malformed competitor entry %r", item)
            continue
        entries.append(CompetitorEntry(name=str(name), rank=int(rank)))

    return tuple(entries)


def _normalize_columns(row: dict[str, Any]) -> dict[str, Any]:
    """Normalize field names to standard format."""
    exact_mappings = {
        "keyword": "keyword",
        "search query": "keyword",
        "query": "keyword",
        "category": "category",
        "searchvolume": "search_volume",
        "search volume": "search_volume",
        "search_volume": "search_volume",
        "volume": "search_volume",
        "isbranded": "is_branded",
        "is_branded": "is_branded",
        "branded": "is_branded",
        "competitors": "competitors",
    }

    normalized = {}
    for key, value in row.items():
        key_lower = str(key).lower().strip()

        if key_lower in exact_mappings:
            target = exact_mappings[key_lower]
            # Don't overwrite if already set (prefer earlier columns)
            if target not in normalized:
                normalized[target] = value
            continue

        normalized[key_lower.replace(" ", "_")] = value

    return normalized


def _parse_int(value: Any) -> int:
    """Parse value to integer."""
    if value is None or value == "" or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    try:
        # Handle strings with commas or percentage signs
        cleaned = str(value).replace(",", "").replace("%", "").strip()
        return int(float(cleaned))
    except (ValueError, TypeError, OverflowError):
        return 0


def _parse_float(value: Any) -> float | None:
    """Parse value to float."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        # Handle strings with commas or percentages
        cleaned = str(value).replace(",", "").replace("%", "").strip()
        return float(cleaned)
    except (ValueError, TypeError):
        return None


def _parse_bool(value: Any) -> bool:
    """Parse a branded flag that may arrive as bool, number or text."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().upper() in ("TRUE", "YES", "1", "Y")
