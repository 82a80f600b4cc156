"""Core data models for the content gap analyzer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MetricType(Enum):
    """Measure shown in competitor tables and charts."""
    COUNT = "count"
    VOLUME = "volume"
    TRAFFIC = "traffic"  # share of voice


class SortDirection(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class CompetitorEntry:
    """A site ranking for a keyword."""
    name: str
    rank: int


@dataclass(frozen=True)
class KeywordRecord:
    """Single observed keyword with the sites ranking for it."""
    keyword: str
    category: str = ""
    search_volume: int = 0
    is_branded: bool = False
    competitors: tuple[CompetitorEntry, ...] = ()

    def client_rank(self, client_name: str) -> int | None:
        """Best rank of the analyst's own site, or None if it doesn't rank."""
        ranks = [c.rank for c in self.competitors if c.name == client_name]
        return min(ranks) if ranks else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape used by data files."""
        return {
            "keyword": self.keyword,
            "category": self.category,
            "searchVolume": self.search_volume,
            "isBranded": self.is_branded,
            "competitors": [
                {"name": c.name, "rank": c.rank} for c in self.competitors
            ],
        }


@dataclass(frozen=True)
class FilterCriteria:
    """Filter parameters applied to the full record set.

    Empty `categories` / `competitors` and a `rank_range` of None mean
    "no restriction".
    """
    categories: frozenset[str] = frozenset()
    min_volume: int = 0
    branded_only: bool = False
    keyword_filter: str = ""
    competitors: frozenset[str] = frozenset()
    rank_range: tuple[int, int] | None = None

    @property
    def competitor_clause_unrestricted(self) -> bool:
        return not self.competitors and self.rank_range is None

    @property
    def keyword_terms(self) -> list[str]:
        """Trimmed, lower-cased keyword terms with blanks removed."""
        terms = (t.strip().lower() for t in self.keyword_filter.split(","))
        return [t for t in terms if t]


@dataclass
class CategoryAggregate:
    """Totals for one category in the current view."""
    category: str
    search_volume: int = 0
    count: int = 0
    branded_volume: int = 0
    branded_count: int = 0
    non_branded_volume: int = 0
    non_branded_count: int = 0
    volume_percentage: float = 0.0
    count_percentage: float = 0.0


@dataclass
class CompetitorMetrics:
    """Count, volume and estimated traffic for one competitor."""
    count: int = 0
    volume: int = 0
    traffic: float = 0.0
    count_percentage: float = 0.0
    volume_percentage: float = 0.0
    traffic_percentage: float = 0.0

    def value(self, metric: MetricType) -> float:
        return getattr(self, metric.value)

    def percentage(self, metric: MetricType) -> float:
        return getattr(self, f"{metric.value}_percentage")


@dataclass
class RankBucket:
    """Aggregates for one search result position (1-20)."""
    rank: int
    count: int = 0
    volume: int = 0
    traffic: float = 0.0
    competitors: dict[str, CompetitorMetrics] = field(default_factory=dict)

    def ranked_competitors(
        self, metric: MetricType = MetricType.COUNT
    ) -> list[str]:
        """Competitors present in this bucket, largest first."""
        present = [
            (name, m) for name, m in self.competitors.items() if m.count > 0
        ]
        present.sort(key=lambda item: item[1].value(metric), reverse=True)
        return [name for name, _ in present]


@dataclass
class CompetitorTotal(CompetitorMetrics):
    """Competitor metrics summed across all rank buckets."""
    name: str = ""
    is_client: bool = False


@dataclass(frozen=True)
class SortConfig:
    key: str | None = None
    direction: SortDirection = SortDirection.ASCENDING


@dataclass(frozen=True)
class SelectionStats:
    """Statistics for the selected keywords still in the filtered set."""
    selected_count: int = 0
    selected_volume: int = 0


@dataclass(frozen=True)
class Universes:
    """Category and competitor names derived once from the full dataset."""
    categories: tuple[str, ...] = ()
    competitors: tuple[str, ...] = ()
