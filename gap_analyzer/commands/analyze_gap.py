#!/usr/bin/env python3
"""Content gap analysis over a keyword competition data file.

Loads keyword records, applies filters and prints the keyword table,
category breakdown, competitor share of voice or rank distribution.
Optionally exports the filtered or selected keywords as CSV and to
Google Sheets.

Usage:
    python -m gap_analyzer.commands.analyze_gap data.json --view categories
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from ..analyzers.categories import aggregate_by_category, summarize_categories
from ..analyzers.competitors import compute_competitor_totals, compute_rank_buckets
from ..analyzers.filters import filter_records, normalize_criteria
from ..analyzers.selection import (
    clamp_page,
    page_count,
    paginate,
    select_all_visible,
    selection_stats,
)
from ..analyzers.sorting import apply_sort, request_sort
from ..analyzers.universe import derive_universes
from ..config import AppConfig, load_config
from ..exporters import (
    DEFAULT_EXPORT_FIELDS,
    competitor_rank_fields,
    export_all,
    export_selected,
)
from ..importers import import_file
from ..models import FilterCriteria, KeywordRecord, MetricType, SortConfig, Universes
from ..sheets.client import SheetsClient
from ..sheets.formatters import (
    format_category_aggregate,
    format_competitor_total,
    format_keyword_record,
    format_number,
    format_rank_bucket,
)


VIEWS = ("keywords", "categories", "competitors", "ranks")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        description="Content gap analysis for keyword competition data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Keyword table, page 2, branded keywords only
    python -m gap_analyzer.commands.analyze_gap data.json --branded-only --page 2

    # Category breakdown without one category, largest volume first
    python -m gap_analyzer.commands.analyze_gap data.json --view categories \\
        --exclude-category Brand --sort search_volume --sort search_volume

    # Share of voice for two competitors ranking in the top 10
    python -m gap_analyzer.commands.analyze_gap data.json --view competitors \\
        --metric traffic --competitors a.com,b.com --rank-range 1 10

    # Export the filtered keywords with a rank column per competitor
    python -m gap_analyzer.commands.analyze_gap data.js --export gap.csv \\
        --with-competitor-ranks
        """,
    )
    parser.add_argument("data_file", nargs="?", help="JSON or JS data file")
    parser.add_argument(
        "--view", choices=VIEWS, default="keywords", help="Table to print"
    )

    filters = parser.add_argument_group("filters")
    filters.add_argument("--categories", default="", help="Comma-separated categories")
    filters.add_argument("--min-volume", default="0", help="Minimum search volume")
    filters.add_argument("--branded-only", action="store_true", help="Branded keywords only")
    filters.add_argument(
        "--keywords", default="", help="Comma-separated keyword substrings (any match)"
    )
    filters.add_argument("--competitors", default="", help="Comma-separated competitor names")
    filters.add_argument(
        "--rank-range", nargs=2, metavar=("MIN", "MAX"), help="Inclusive competitor rank range"
    )

    table = parser.add_argument_group("table")
    table.add_argument(
        "--exclude-category",
        action="append",
        default=[],
        help="Category left out of the category breakdown (repeatable)",
    )
    table.add_argument(
        "--metric",
        choices=[m.value for m in MetricType],
        default=MetricType.COUNT.value,
        help="Competitor measure: keyword count, search volume or share of voice",
    )
    table.add_argument(
        "--sort",
        action="append",
        default=[],
        help="Sort field; repeating the same field flips the direction",
    )
    table.add_argument("--page", type=int, default=1, help="Keyword table page")
    table.add_argument("--page-size", type=int, help="Keywords per page")
    table.add_argument("--hide-competitors", action="store_true", help="Hide competitor column")

    selection = parser.add_argument_group("selection and export")
    selection.add_argument(
        "--select", action="append", default=[], help="Select a keyword (repeatable)"
    )
    selection.add_argument(
        "--select-page", action="store_true", help="Select every keyword on the page"
    )
    selection.add_argument("--export", help="Write filtered keywords to this CSV path")
    selection.add_argument(
        "--export-selected", help="Write selected keywords to this CSV path"
    )
    selection.add_argument(
        "--with-competitor-ranks",
        action="store_true",
        help="Add a rank column per competitor to exports",
    )
    selection.add_argument(
        "--sheets", action="store_true", help="Write filtered keywords to Google Sheets"
    )
    parser.add_argument(
        "--test-sheets", action="store_true", help="Test Google Sheets connection"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def build_criteria(args: argparse.Namespace) -> FilterCriteria:
    """Build filter criteria from command line arguments."""
    return normalize_criteria(
        categories=_split_list(args.categories),
        min_volume=args.min_volume,
        branded_only=args.branded_only,
        keyword_filter=args.keywords,
        competitors=_split_list(args.competitors),
        rank_range=tuple(args.rank_range) if args.rank_range else None,
    )


def build_sort_config(sort_keys: list[str]) -> SortConfig:
    """Replay sort requests in order, as repeated header clicks would."""
    config = SortConfig()
    for key in sort_keys:
        config = request_sort(config, key)
    return config


def print_table(rows: list[dict[str, Any]]) -> None:
    """Print rows as aligned text columns."""
    if not rows:
        print("  (no rows)")
        return

    headers: dict[str, None] = {}
    for row in rows:
        for key in row:
            headers.setdefault(key, None)

    widths = {
        h: max(len(h), *(len(str(row.get(h, ""))) for row in rows))
        for h in headers
    }
    print("  ".join(f"{h:<{widths[h]}}" for h in headers))
    print("  ".join("-" * widths[h] for h in headers))
    for row in rows:
        print("  ".join(f"{str(row.get(h, '')):<{widths[h]}}" for h in headers))


def show_keywords(
    filtered: list[KeywordRecord],
    args: argparse.Namespace,
    config: AppConfig,
    selection: frozenset[str],
) -> None:
    """Print one page of the keyword table and selection statistics."""
    page_size = args.page_size or config.engine.page_size
    rows = apply_sort(filtered, build_sort_config(args.sort))
    page = clamp_page(args.page, len(rows), page_size)
    visible = paginate(rows, page_size, page)

    print_table([
        format_keyword_record(
            record,
            config.engine.client_domain,
            show_competitors=not args.hide_competitors,
        )
        for record in visible
    ])
    print(f"\nPage {page} of {max(page_count(len(rows), page_size), 1)}")

    stats = selection_stats(filtered, selection)
    print(f"Total Selected Keywords: {format_number(stats.selected_count)}")
    print(
        "Total Search Volume for Selected Keywords: "
        f"{format_number(stats.selected_volume)}"
    )


def show_categories(
    filtered: list[KeywordRecord],
    args: argparse.Namespace,
    universes: Universes,
) -> None:
    """Print the category breakdown."""
    unknown = [c for c in args.exclude_category if c not in universes.categories]
    if unknown:
        print(f"[INFO] Unknown categories ignored: {', '.join(unknown)}")

    aggregates = aggregate_by_category(filtered, args.exclude_category)
    aggregates = apply_sort(aggregates, build_sort_config(args.sort))
    print_table([format_category_aggregate(a) for a in aggregates])

    summary = summarize_categories(aggregates)
    print(
        f"\n{summary['categories']} categories, "
        f"{format_number(summary['keywords'])} keywords, "
        f"{format_number(summary['search_volume'])} total search volume"
    )


def show_competitors(
    filtered: list[KeywordRecord],
    args: argparse.Namespace,
    config: AppConfig,
    universes: Universes,
) -> None:
    """Print competitor totals for the chosen metric."""
    metric = MetricType(args.metric)
    buckets = compute_rank_buckets(filtered, universes.competitors)
    totals = compute_competitor_totals(buckets, config.engine.client_domain)
    totals = apply_sort(totals, build_sort_config(args.sort))
    print_table([format_competitor_total(t, metric) for t in totals])


def show_ranks(
    filtered: list[KeywordRecord],
    args: argparse.Namespace,
    universes: Universes,
) -> None:
    """Print the per-rank competitor distribution for the chosen metric."""
    metric = MetricType(args.metric)
    buckets = compute_rank_buckets(filtered, universes.competitors)
    print_table([format_rank_bucket(b, metric) for b in buckets])


def run(args: argparse.Namespace, config: AppConfig) -> int:
    """Run the analysis for parsed arguments."""
    try:
        records = import_file(args.data_file)
    except (OSError, ValueError) as e:
        print(f"[ERROR] Failed to load data: {e}")
        return 1

    universes = derive_universes(records)
    criteria = build_criteria(args)
    filtered = filter_records(records, criteria)

    print(
        f"[INFO] {len(filtered)} of {len(records)} keywords match the filters "
        f"({len(universes.categories)} categories, "
        f"{len(universes.competitors)} competitors)"
    )
    if not filtered:
        print("[INFO] No records match the current filters")

    selection = frozenset(args.select)
    if args.select_page:
        page_size = args.page_size or config.engine.page_size
        sorted_rows = apply_sort(filtered, build_sort_config(args.sort))
        visible = paginate(sorted_rows, page_size, args.page)
        selection = select_all_visible(selection, (r.keyword for r in visible))

    if args.view == "keywords":
        show_keywords(filtered, args, config, selection)
    elif args.view == "categories":
        show_categories(filtered, args, universes)
    elif args.view == "competitors":
        show_competitors(filtered, args, config, universes)
    else:
        show_ranks(filtered, args, universes)

    fields: list[Any] = list(DEFAULT_EXPORT_FIELDS)
    if args.with_competitor_ranks:
        fields.extend(competitor_rank_fields(universes.competitors))
    delimiter = config.engine.export_delimiter

    if args.export:
        text = export_all(filtered, fields, delimiter)
        Path(args.export).write_text(text + "\n", encoding="utf-8")
        print(f"[INFO] Wrote {len(filtered)} keywords to {args.export}")

    if args.export_selected:
        stats = selection_stats(filtered, selection)
        text = export_selected(filtered, selection, fields, delimiter)
        Path(args.export_selected).write_text(text + "\n", encoding="utf-8")
        print(
            f"[INFO] Wrote {stats.selected_count} selected keywords "
            f"to {args.export_selected}"
        )

    if args.sheets:
        if not config.sheets.spreadsheet_id:
            print("[ERROR] SPREADSHEET_ID is not configured")
            return 1
        sheets = SheetsClient(config.sheets)
        written = sheets.write_delimited_text(
            config.sheets.export_tab_name,
            export_all(filtered, fields, delimiter),
            delimiter,
        )
        print(
            f"[INFO] Wrote {written} keywords to tab "
            f"'{config.sheets.export_tab_name}'"
        )

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Load config
    try:
        config = load_config()
    except ValueError as e:
        print(f"[ERROR] Failed to load configuration: {e}")
        return 1

    # Test sheets connection
    if args.test_sheets:
        print("Testing Google Sheets connection...")
        sheets = SheetsClient(config.sheets)
        if sheets.test_connection():
            print("[SUCCESS] Connected to Google Sheets")
            return 0
        else:
            print("[FAILED] Could not connect to Google Sheets")
            return 1

    if not args.data_file:
        parser.print_help()
        return 1

    return run(args, config)


if __name__ == "__main__":
    sys.exit(main())
