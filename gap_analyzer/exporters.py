"""Export keyword records as delimited text.

Values are joined as-is: a value containing the delimiter is not quoted
or escaped, so such rows will not parse back into the same columns.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from .analyzers.selection import selected_records
from .config import DEFAULT_DELIMITER
from .models import KeywordRecord


@dataclass(frozen=True)
class ExportField:
    """An export column: header text and how to read it from a record."""
    header: str
    value: Callable[[KeywordRecord], Any]


def _format_competitors(record: KeywordRecord) -> str:
    return " | ".join(f"{c.name}: {c.rank}" for c in record.competitors)


STANDARD_FIELDS: dict[str, ExportField] = {
    "keyword": ExportField("keyword", lambda r: r.keyword),
    "category": ExportField("category", lambda r: r.category),
    "search volume": ExportField("search volume", lambda r: r.search_volume),
    "branded": ExportField(
        "branded", lambda r: "YES" if r.is_branded else "NO"
    ),
    "competitors": ExportField("competitors", _format_competitors),
}

DEFAULT_EXPORT_FIELDS = ("keyword", "category", "search volume")


def competitor_rank_field(name: str) -> ExportField:
    """Column with the best rank of one competitor (blank if unranked)."""
    def best_rank(record: KeywordRecord) -> Any:
        ranks = [c.rank for c in record.competitors if c.name == name]
        return min(ranks) if ranks else ""

    return ExportField(f"{name} rank", best_rank)


def competitor_rank_fields(names: Iterable[str]) -> list[ExportField]:
    """Rank columns for each competitor in a universe."""
    return [competitor_rank_field(name) for name in names]


def resolve_fields(
    fields: Sequence[str | ExportField],
) -> list[ExportField]:
    """Turn column names into ExportFields."""
    resolved = []
    for item in fields:
        if isinstance(item, ExportField):
            resolved.append(item)
        elif item in STANDARD_FIELDS:
            resolved.append(STANDARD_FIELDS[item])
        else:
            raise ValueError(f"Unknown export field: {item}")
    return resolved


def to_delimited_text(
    records: Iterable[KeywordRecord],
    fields: Sequence[str | ExportField] = DEFAULT_EXPORT_FIELDS,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Render records as a header row plus one row per record.

    Args:
        records: Records to export, written in input order
        fields: Column names from STANDARD_FIELDS or ExportField objects
        delimiter: Column separator

    Returns:
        Newline-separated delimited text
    """
    columns = resolve_fields(fields)
    lines = [delimiter.join(c.header for c in columns)]
    for record in records:
        lines.append(
            delimiter.join(_cell(column.value(record)) for column in columns)
        )
    return "\n".join(lines)


def export_all(
    records: Iterable[KeywordRecord],
    fields: Sequence[str | ExportField] = DEFAULT_EXPORT_FIELDS,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Export the full filtered set."""
    return to_delimited_text(records, fields, delimiter)


def export_selected(
    records: Iterable[KeywordRecord],
    selection: frozenset[str],
    fields: Sequence[str | ExportField] = DEFAULT_EXPORT_FIELDS,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Export only selected keywords that are in the filtered set."""
    return to_delimited_text(
        selected_records(records, selection), fields, delimiter
    )


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
