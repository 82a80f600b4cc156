"""Tests for the gap analysis command."""

import json
from unittest.mock import MagicMock, patch

import pytest

from gap_analyzer.commands.analyze_gap import (
    build_criteria,
    build_sort_config,
    create_parser,
    main,
)
from gap_analyzer.config import AppConfig, EngineSettings, SheetsConfig
from gap_analyzer.models import SortConfig, SortDirection


MOCK_ROWS = [
    {
        "keyword": "garlic press",
        "category": "Tools",
        "searchVolume": 5000,
        "isBranded": False,
        "competitors": [{"name": "client.com", "rank": 3}, {"name": "rival.com", "rank": 1}],
    },
    {
        "keyword": "garlic mincer",
        "category": "Tools",
        "searchVolume": 3000,
        "isBranded": False,
        "competitors": [{"name": "rival.com", "rank": 12}],
    },
    {
        "keyword": "acme press",
        "category": "Brand",
        "searchVolume": 800,
        "isBranded": True,
        "competitors": [{"name": "client.com", "rank": 1}],
    },
    {
        "keyword": "roasted garlic",
        "category": "Recipes",
        "searchVolume": 1200,
        "isBranded": False,
        "competitors": [{"name": "food.com", "rank": 2}],
    },
]


def _make_mock_config(spreadsheet_id: str = "test-sheet-id") -> AppConfig:
    return AppConfig(
        engine=EngineSettings(page_size=2),
        sheets=SheetsConfig(
            spreadsheet_id=spreadsheet_id,
            credentials_path="test.json",
            export_tab_name="Gap Analysis",
        ),
    )


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(MOCK_ROWS), encoding="utf-8")
    return path


@pytest.fixture
def mock_config():
    with patch("gap_analyzer.commands.analyze_gap.load_config") as mock_load:
        mock_load.return_value = _make_mock_config()
        yield mock_load


class TestBuildCriteria:
    def test_from_arguments(self):
        args = create_parser().parse_args([
            "data.json",
            "--categories", "Tools, Brand",
            "--min-volume", "abc",
            "--competitors", "rival.com",
            "--rank-range", "10", "1",
        ])
        criteria = build_criteria(args)

        assert criteria.categories == frozenset({"Tools", "Brand"})
        assert criteria.min_volume == 0
        assert criteria.competitors == frozenset({"rival.com"})
        assert criteria.rank_range == (1, 10)

    def test_defaults_unrestricted(self):
        criteria = build_criteria(create_parser().parse_args(["data.json"]))
        assert criteria.competitor_clause_unrestricted


class TestBuildSortConfig:
    def test_no_keys(self):
        assert build_sort_config([]) == SortConfig()

    def test_repeated_key_flips(self):
        config = build_sort_config(["count", "count"])
        assert config == SortConfig("count", SortDirection.DESCENDING)

    def test_last_new_key_wins(self):
        config = build_sort_config(["count", "count", "category"])
        assert config == SortConfig("category", SortDirection.ASCENDING)


class TestMain:
    def test_keyword_view(self, data_file, mock_config, capsys):
        assert main([str(data_file), "--sort", "search_volume"]) == 0

        out = capsys.readouterr().out
        assert "4 of 4 keywords" in out
        assert "Acme Press" in out
        assert "Roasted Garlic" in out
        assert "Garlic Press" not in out
        assert "Page 1 of 2" in out

    def test_filters_applied(self, data_file, mock_config, capsys):
        assert main([str(data_file), "--min-volume", "2000"]) == 0
        assert "2 of 4 keywords" in capsys.readouterr().out

    def test_no_matches_message(self, data_file, mock_config, capsys):
        assert main([str(data_file), "--keywords", "pizza"]) == 0
        assert "No records match" in capsys.readouterr().out

    def test_selection_stats(self, data_file, mock_config, capsys):
        assert main([
            str(data_file), "--select", "acme press", "--select", "missing",
        ]) == 0

        out = capsys.readouterr().out
        assert "Total Selected Keywords: 1" in out
        assert "Total Search Volume for Selected Keywords: 800" in out

    def test_category_view(self, data_file, mock_config, capsys):
        assert main([
            str(data_file), "--view", "categories", "--exclude-category", "Brand",
        ]) == 0

        out = capsys.readouterr().out
        assert "Tools" in out
        assert "Recipes" in out
        assert "2 categories" in out

    def test_competitor_view(self, data_file, mock_config, capsys):
        assert main([
            str(data_file), "--view", "competitors", "--metric", "traffic",
        ]) == 0

        out = capsys.readouterr().out
        assert "CLIENT: client.com" in out
        assert "Total Estimated Traffic" in out

    def test_rank_view(self, data_file, mock_config, capsys):
        assert main([str(data_file), "--view", "ranks"]) == 0
        assert "Rank" in capsys.readouterr().out

    def test_export(self, data_file, mock_config, tmp_path):
        out_path = tmp_path / "gap.csv"
        assert main([
            str(data_file), "--min-volume", "1000", "--export", str(out_path),
        ]) == 0

        assert out_path.read_text(encoding="utf-8").split("\n") == [
            "keyword,category,search volume",
            "garlic press,Tools,5000",
            "garlic mincer,Tools,3000",
            "roasted garlic,Recipes,1200",
            "",
        ]

    def test_export_selected_page(self, data_file, mock_config, tmp_path):
        out_path = tmp_path / "selected.csv"
        assert main([
            str(data_file),
            "--select-page",
            "--page", "2",
            "--with-competitor-ranks",
            "--export-selected", str(out_path),
        ]) == 0

        lines = out_path.read_text(encoding="utf-8").strip().split("\n")
        assert lines[0] == (
            "keyword,category,search volume,client.com rank,rival.com rank,food.com rank"
        )
        assert lines[1:] == [
            "acme press,Brand,800,1,,",
            "roasted garlic,Recipes,1200,,,2",
        ]

    @patch("gap_analyzer.commands.analyze_gap.SheetsClient")
    def test_sheets_export(self, mock_sheets_cls, data_file, mock_config):
        mock_sheets = MagicMock()
        mock_sheets.write_delimited_text.return_value = 4
        mock_sheets_cls.return_value = mock_sheets

        assert main([str(data_file), "--sheets"]) == 0

        tab_name, text, delimiter = mock_sheets.write_delimited_text.call_args[0]
        assert tab_name == "Gap Analysis"
        assert text.startswith("keyword,category,search volume\n")
        assert delimiter == ","

    def test_sheets_requires_spreadsheet(self, data_file, mock_config, capsys):
        mock_config.return_value = _make_mock_config(spreadsheet_id="")
        assert main([str(data_file), "--sheets"]) == 1
        assert "SPREADSHEET_ID" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, mock_config, capsys):
        assert main([str(tmp_path / "missing.json")]) == 1
        assert "[ERROR]" in capsys.readouterr().out

    def test_no_data_file_prints_help(self, mock_config, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()
