"""CLI for syncing WordPress posts into the content catalog."""

from __future__ import annotations

import json
import logging
import sys

from dotenv import load_dotenv

from common.aws import upload_jsonl_records_to_s3
from common.cli_helpers import setup_logging
from common.config import load_config
from common.datetime import utc_now
from common.errors import CatalogError
from common.local_io import save_jsonl_records_local
from content_db.connection import get_session
from sync_articles.fetch_articles.wordpress_client import WordPressClient
from sync_articles.helpers import parse_sync_articles_args
from sync_articles.models import SyncRequest, SyncRunReport
from sync_articles.sync_articles import run_sync

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = parse_sync_articles_args(argv)
    config = load_config(args.config)

    request = SyncRequest(
        max_articles=args.max_articles or config.sync.max_articles,
        start_date=args.start_date,
        end_date=args.end_date,
        dry_run=args.dry_run,
    )
    client = WordPressClient(config.wordpress)

    try:
        with get_session(config.database) as session:
            response = run_sync(request, client, session)
    except CatalogError as e:
        logger.error("WordPress sync failed: %s", e)
        print(json.dumps({"success": False, "error": str(e)}))
        return 1

    results = response["results"]
    logger.info(
        "Synced %d new articles, %d duplicates, %d errors out of %d posts",
        results["synced"],
        results["duplicates"],
        len(results["errors"]),
        response["totalArticles"],
    )

    report = SyncRunReport.from_response(request, response, utc_now())
    if args.load_s3:
        upload_jsonl_records_to_s3([report], config.sync.report_prefix)

    if args.load_local:
        save_jsonl_records_local([report], config.sync.report_prefix)

    print(json.dumps(response, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
