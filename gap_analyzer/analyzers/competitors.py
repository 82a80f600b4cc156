"""Competitor ranking and share-of-voice estimation.

Each (keyword, competitor) pair ranking in the top 20 lands in the bucket
for its rank. Estimated traffic is the keyword's search volume multiplied
by the assumed click-through rate of that position.
"""

from collections.abc import Iterable

from ..config import CTR_BY_POSITION, DEFAULT_CLIENT_DOMAIN, MAX_RANKED_POSITION
from ..models import (
    CompetitorMetrics,
    CompetitorTotal,
    KeywordRecord,
    RankBucket,
)


def ctr_for_rank(rank: int) -> float:
    """Assumed click-through rate for a result position (0 outside 1-20)."""
    return CTR_BY_POSITION.get(rank, 0.0)


def estimated_traffic(search_volume: int, rank: int) -> float:
    """Estimated monthly clicks for a keyword at the given position."""
    return search_volume * ctr_for_rank(rank)


def compute_rank_buckets(
    records: Iterable[KeywordRecord],
    competitors: Iterable[str] | None = None,
) -> list[RankBucket]:
    """Build per-rank keyword count, volume and traffic tables.

    Args:
        records: Filtered keyword records
        competitors: Competitor universe. Every name appears in every
            bucket, with zeros if it has no remaining keywords. Names seen
            in `records` but absent from the universe are appended after
            it. Defaults to the names found in `records`.

    Returns:
        List of 20 RankBuckets, index 0 holding rank 1
    """
    records = list(records)
    names = _competitor_names(records, competitors)

    buckets = [
        RankBucket(
            rank=rank,
            competitors={name: CompetitorMetrics() for name in names},
        )
        for rank in range(1, MAX_RANKED_POSITION + 1)
    ]

    for record in records:
        for entry in record.competitors:
            if not 1 <= entry.rank <= MAX_RANKED_POSITION:
                continue

            traffic = estimated_traffic(record.search_volume, entry.rank)
            bucket = buckets[entry.rank - 1]
            metrics = bucket.competitors[entry.name]

            metrics.count += 1
            metrics.volume += record.search_volume
            metrics.traffic += traffic
            bucket.count += 1
            bucket.volume += record.search_volume
            bucket.traffic += traffic

    for bucket in buckets:
        for metrics in bucket.competitors.values():
            metrics.count_percentage = _percentage(metrics.count, bucket.count)
            metrics.volume_percentage = _percentage(metrics.volume, bucket.volume)
            metrics.traffic_percentage = _percentage(
                metrics.traffic, bucket.traffic
            )

    return buckets


def compute_competitor_totals(
    buckets: list[RankBucket],
    client_domain: str = DEFAULT_CLIENT_DOMAIN,
) -> list[CompetitorTotal]:
    """Sum per-bucket competitor metrics into overall share of voice.

    Percentages are relative to the grand total across all competitors.

    Args:
        buckets: Output of compute_rank_buckets
        client_domain: Name identifying the analyst's own site

    Returns:
        List of CompetitorTotal objects in competitor universe order
    """
    totals: dict[str, CompetitorTotal] = {}

    for bucket in buckets:
        for name, metrics in bucket.competitors.items():
            total = totals.get(name)
            if total is None:
                total = CompetitorTotal(
                    name=name, is_client=name == client_domain
                )
                totals[name] = total
            total.count += metrics.count
            total.volume += metrics.volume
            total.traffic += metrics.traffic

    grand_count = sum(t.count for t in totals.values())
    grand_volume = sum(t.volume for t in totals.values())
    grand_traffic = sum(t.traffic for t in totals.values())

    for total in totals.values():
        total.count_percentage = _percentage(total.count, grand_count)
        total.volume_percentage = _percentage(total.volume, grand_volume)
        total.traffic_percentage = _percentage(total.traffic, grand_traffic)

    return list(totals.values())


def _competitor_names(
    records: list[KeywordRecord], competitors: Iterable[str] | None
) -> list[str]:
    names: dict[str, None] = dict.fromkeys(competitors or ())
    for record in records:
        for entry in record.competitors:
            names.setdefault(entry.name, None)
    return list(names)


def _percentage(part: float, total: float) -> float:
    if not total:
        return 0.0
    return part / total * 100
