"""Helper functions for match_news CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import positive_int


def parse_match_news_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for match_news."""

    parser = argparse.ArgumentParser(description="Link published news candidates to catalog articles.")

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--candidate-id", help="Match a single news candidate")
    target.add_argument(
        "--unmatched",
        action="store_true",
        help="Match the most recent published candidates without a match",
    )

    parser.add_argument(
        "--limit",
        type=positive_int,
        default=10,
        help="Maximum candidates to match with --unmatched (default: 10)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name under configs/ (default: CONFIG_ENV or prod)",
    )

    # Output options
    parser.add_argument(
        "--load-local", action="store_true", help="Save match responses to a local file"
    )

    return parser.parse_args(argv)
