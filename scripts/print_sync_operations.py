"""Print the most recent sync runs and catalog counts."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv
from sqlalchemy import func, select

from common.cli_helpers import setup_logging
from common.config import load_config
from content_db.connection import get_session
from content_db.models import Article, Author, NewsCandidate, SyncOperation


def _format_value(value: object, max_len: int = 100) -> str:
    if isinstance(value, str) and len(value) > max_len:
        return f"{value[:max_len]}..."
    return str(value) if value is not None else "None"


def main() -> None:
    parser = argparse.ArgumentParser(description="Print recent sync operations.")
    parser.add_argument("--limit", type=int, default=10, help="Max rows to print")
    parser.add_argument("--config", default=None, help="Config name under configs/")
    args = parser.parse_args()

    load_dotenv()
    setup_logging()
    logger = logging.getLogger(__name__)

    config = load_config(args.config)
    with get_session(config.database) as session:
        counts = {
            model.__tablename__: session.execute(select(func.count()).select_from(model)).scalar_one()
            for model in (Article, Author, NewsCandidate)
        }
        operations = session.execute(
            select(SyncOperation).order_by(SyncOperation.started_at.desc()).limit(args.limit)
        ).scalars().all()

    for table, count in counts.items():
        print(f"{table}: {count}")
    print("-" * 40)

    logger.info("Fetched %d sync operations", len(operations))
    for op in operations:
        print(f"id: {op.id}")
        print(f"status: {op.status}")
        print(f"started_at: {op.started_at}")
        print(f"total_items: {op.total_items}")
        print(f"results_summary: {_format_value(str(op.results_summary))}")
        print(f"errors: {len(op.error_details or [])}")
        print("-" * 40)


if __name__ == "__main__":
    main()
