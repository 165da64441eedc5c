"""Helper functions for sync_articles CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import parse_date, positive_int


def parse_sync_articles_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for sync_articles."""

    parser = argparse.ArgumentParser(description="Import WordPress posts into the content catalog.")

    # Input options
    parser.add_argument(
        "--max-articles",
        type=positive_int,
        default=None,
        help="Maximum number of posts to fetch (default: sync.max_articles from config)",
    )
    parser.add_argument(
        "--start-date",
        type=lambda v: parse_date(v, "start-date"),
        default=None,
        help="Only fetch posts published on or after this date (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--end-date",
        type=lambda v: parse_date(v, "end-date"),
        default=None,
        help="Only fetch posts published on or before this date (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name under configs/ (default: CONFIG_ENV or prod)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be created without writing articles",
    )

    # Output options
    parser.add_argument("--load-s3", action="store_true", help="Upload the run report to S3")
    parser.add_argument(
        "--load-local", action="store_true", help="Save the run report to a local file"
    )

    args = parser.parse_args(argv)
    if args.start_date and args.end_date and args.end_date < args.start_date:
        parser.error("end-date must be on or after start-date")
    return args
