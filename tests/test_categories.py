"""Tests for the category breakdown."""

import pytest

from gap_analyzer.analyzers.categories import (
    aggregate_by_category,
    summarize_categories,
    toggle_excluded_category,
)
from gap_analyzer.models import KeywordRecord


MOCK_RECORDS = [
    KeywordRecord("garlic press", "Tools", 5000),
    KeywordRecord("acme garlic press", "Brand", 800, is_branded=True),
    KeywordRecord("garlic mincer", "Tools", 3000),
    KeywordRecord("roasted garlic", "Recipes", 1200),
    KeywordRecord("acme mincer", "Tools", 200, is_branded=True),
]


class TestAggregateByCategory:
    def test_single_category_example(self):
        records = [KeywordRecord("a", "X", 100)]
        result = aggregate_by_category(records)

        assert len(result) == 1
        assert result[0].category == "X"
        assert result[0].search_volume == 100
        assert result[0].count == 1
        assert result[0].volume_percentage == 100

    def test_first_occurrence_order(self):
        result = aggregate_by_category(MOCK_RECORDS)
        assert [a.category for a in result] == ["Tools", "Brand", "Recipes"]

    def test_totals(self):
        tools = aggregate_by_category(MOCK_RECORDS)[0]
        assert tools.search_volume == 8200
        assert tools.count == 3

    def test_branded_breakdown(self):
        tools = aggregate_by_category(MOCK_RECORDS)[0]
        assert tools.branded_volume == 200
        assert tools.branded_count == 1
        assert tools.non_branded_volume == 8000
        assert tools.non_branded_count == 2

    def test_percentages_sum_to_100(self):
        result = aggregate_by_category(MOCK_RECORDS)
        assert sum(a.volume_percentage for a in result) == pytest.approx(100.0)
        assert sum(a.count_percentage for a in result) == pytest.approx(100.0)

    def test_excluded_categories_leave_denominator(self):
        result = aggregate_by_category(MOCK_RECORDS, excluded_categories=["Tools"])

        assert [a.category for a in result] == ["Brand", "Recipes"]
        assert result[0].volume_percentage == pytest.approx(800 / 2000 * 100)
        assert sum(a.volume_percentage for a in result) == pytest.approx(100.0)

    def test_percentages_follow_exclusion_set(self):
        full = aggregate_by_category(MOCK_RECORDS)
        partial = aggregate_by_category(MOCK_RECORDS, ["Recipes"])
        again = aggregate_by_category(MOCK_RECORDS)

        assert full[0].volume_percentage != partial[0].volume_percentage
        assert full[0].volume_percentage == again[0].volume_percentage

    def test_all_excluded_is_empty(self):
        result = aggregate_by_category(MOCK_RECORDS, ["Tools", "Brand", "Recipes"])
        assert result == []

    def test_zero_volume_gives_zero_percentage(self):
        records = [KeywordRecord("a", "X", 0), KeywordRecord("b", "Y", 0)]
        result = aggregate_by_category(records)

        assert [a.volume_percentage for a in result] == [0.0, 0.0]
        assert [a.count_percentage for a in result] == [50.0, 50.0]

    def test_raw_category_key(self):
        records = [KeywordRecord("a", "Tools", 10), KeywordRecord("b", "tools ", 10)]
        assert len(aggregate_by_category(records)) == 2

    def test_does_not_mutate_input(self):
        before = list(MOCK_RECORDS)
        aggregate_by_category(MOCK_RECORDS, ["Brand"])
        assert MOCK_RECORDS == before


class TestToggleExcludedCategory:
    def test_adds_missing(self):
        assert toggle_excluded_category([], "Tools") == frozenset({"Tools"})

    def test_removes_present(self):
        excluded = frozenset({"Tools", "Brand"})
        result = toggle_excluded_category(excluded, "Tools")
        assert result == frozenset({"Brand"})
        assert excluded == frozenset({"Tools", "Brand"})


class TestSummarizeCategories:
    def test_counts(self):
        summary = summarize_categories(aggregate_by_category(MOCK_RECORDS))
        assert summary == {
            "categories": 3,
            "keywords": 5,
            "search_volume": 10200,
            "branded_keywords": 2,
            "branded_volume": 1000,
        }
