"""CLI for matching news candidates to published articles."""

from __future__ import annotations

import json
import logging
import sys

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from common.errors import CatalogError
from common.local_io import save_jsonl_records_local
from content_db.connection import get_session
from match_news.helpers import parse_match_news_args
from match_news.match_news import match_news_candidate, match_unmatched_candidates

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = parse_match_news_args(argv)
    config = load_config(args.config)

    try:
        with get_session(config.database) as session:
            if args.unmatched:
                responses = match_unmatched_candidates(session, config.matching, limit=args.limit)
            else:
                responses = [
                    {
                        "candidateId": args.candidate_id,
                        **match_news_candidate(args.candidate_id, session, config.matching),
                    }
                ]
    except CatalogError as e:
        logger.error("News matching failed: %s", e)
        print(json.dumps({"success": False, "error": str(e)}))
        return 1

    if args.load_local and responses:
        save_jsonl_records_local(responses, "news_matches")

    for response in responses:
        print(json.dumps(response))
    return 0


if __name__ == "__main__":
    sys.exit(main())
