"""Output formatting utilities for tables and Google Sheets."""

from typing import Any

from ..models import (
    CategoryAggregate,
    CompetitorTotal,
    KeywordRecord,
    MetricType,
    RankBucket,
)


METRIC_LABELS = {
    MetricType.COUNT: "Keywords",
    MetricType.VOLUME: "Search Volume",
    MetricType.TRAFFIC: "Estimated Traffic",
}


def format_percentage(value: float | None, decimals: int = 2) -> str:
    """Format a percentage value as a string."""
    if value is None:
        return ""
    return f"{value:.{decimals}f}%"


def format_number(value: int | float | None, decimals: int = 0) -> str:
    """Format number with thousands separator."""
    if value is None:
        return ""
    if decimals == 0:
        return f"{round(value):,}"
    return f"{value:,.{decimals}f}"


def format_keyword(keyword: str) -> str:
    """Capitalize the first letter of each word for display."""
    return " ".join(w[:1].upper() + w[1:] for w in keyword.split(" "))


def format_keyword_record(
    record: KeywordRecord,
    client_domain: str,
    show_competitors: bool = True,
) -> dict[str, Any]:
    """Format a keyword for table output."""
    formatted = {
        "Keyword": format_keyword(record.keyword),
        "Branded": "YES" if record.is_branded else "",
        "Category": record.category,
        "Search Volume": format_number(record.search_volume),
    }
    if show_competitors:
        formatted["Competitors"] = " | ".join(
            f"CLIENT: {c.rank}" if c.name == client_domain else f"{c.name}: {c.rank}"
            for c in record.competitors
        )
    return formatted


def format_category_aggregate(aggregate: CategoryAggregate) -> dict[str, Any]:
    """Format a category row for table output."""
    return {
        "Category": aggregate.category,
        "Count": format_number(aggregate.count),
        "Count %": format_percentage(aggregate.count_percentage),
        "Volume": format_number(aggregate.search_volume),
        "Volume %": format_percentage(aggregate.volume_percentage),
        "Branded Volume": format_number(aggregate.branded_volume),
        "Non-Branded Volume": format_number(aggregate.non_branded_volume),
    }


def format_competitor_total(
    total: CompetitorTotal, metric: MetricType = MetricType.COUNT
) -> dict[str, Any]:
    """Format a competitor row for the selected metric."""
    return {
        "Competitor": "CLIENT: " + total.name if total.is_client else total.name,
        f"Total {METRIC_LABELS[metric]}": format_number(total.value(metric)),
        "Percentage": format_percentage(total.percentage(metric)),
    }


def format_rank_bucket(
    bucket: RankBucket, metric: MetricType = MetricType.COUNT
) -> dict[str, Any]:
    """Format a rank bucket with each competitor's share for the metric."""
    formatted = {
        "Rank": bucket.rank,
        f"Total {METRIC_LABELS[metric]}": format_number(
            getattr(bucket, metric.value)
        ),
    }
    for name in bucket.ranked_competitors(metric):
        formatted[name] = format_percentage(
            bucket.competitors[name].percentage(metric)
        )
    return formatted
