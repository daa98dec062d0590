"""CLI entrypoint for the office-holder lifespan pipeline."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import find_dotenv, load_dotenv

from assembler import default_as_of_year, lifespan_stats
from csv_sink import format_records_table
from errors import ExtractionError, FetchError
from models import PipelineResult
from page_cache import fetch
from pipeline import run_pipeline
from report import format_stats, generate_reports


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(
        description="Extract birth/death years from an office-holder table and chart their lifespans"
    )
    parser.add_argument("--url", default=None, help="Source page (default: SOURCE_URL env var)")
    parser.add_argument("--cache-dir", default=None, help="Directory for the cached page (default: CACHE_DIR)")
    parser.add_argument("--refresh", action="store_true", help="Re-download the page even if cached")
    parser.add_argument(
        "--as-of-year",
        type=int,
        default=None,
        help="Year that ends the timeline for living people (default: AS_OF_YEAR or current year)",
    )
    parser.add_argument("--output", default=None, help="Record CSV path (default: CSV_OUTPUT_PATH)")
    parser.add_argument("--skipped-output", default=None, help="Skipped-row CSV path (default: SKIPPED_OUTPUT_PATH)")
    parser.add_argument("--chart", default=None, help="Timeline PNG path (default: CHART_OUTPUT_PATH)")
    parser.add_argument("--no-chart", action="store_true", help="Skip drawing the timeline chart")
    parser.add_argument(
        "--keep-first-row",
        action="store_true",
        help="Keep the first data row even when it does not look like a person",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the table and summary without writing any output files",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> PipelineResult:
    """Run one fetch → extract → report cycle."""
    markup = fetch(args.url, cache_dir=args.cache_dir, refresh=args.refresh)
    result = run_pipeline(markup, skip_first_row=not args.keep_first_row)
    as_of_year = args.as_of_year if args.as_of_year is not None else default_as_of_year()

    print(format_records_table(result.records))
    print()
    print(format_stats(lifespan_stats(result.records)))
    print(f"Skipped rows: {result.skipped_count}")

    if args.dry_run:
        logging.info("[dry-run] Would write %s records and %s skipped rows", len(result.records), result.skipped_count)
        return result

    outputs = generate_reports(
        result,
        as_of_year=as_of_year,
        csv_path=args.output,
        skipped_path=args.skipped_output,
        chart_path=args.chart,
        draw_chart=not args.no_chart,
    )
    for name, path in outputs.items():
        print(f"{name:<8} → {path}")
    return result


def main(argv: list[str] | None = None) -> int:
    """Initialize config and execute the pipeline."""
    # .env from the working directory, not from beside this file.
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    args = parse_args(argv)

    try:
        run(args)
    except (ExtractionError, FetchError) as exc:
        logging.error("Run aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
