"""Create the content catalog tables in the configured database."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from content_db.connection import create_tables, get_engine


def main() -> None:
    parser = argparse.ArgumentParser(description="Create catalog tables.")
    parser.add_argument("--config", default=None, help="Config name under configs/")
    args = parser.parse_args()

    load_dotenv()
    setup_logging()
    logger = logging.getLogger(__name__)

    config = load_config(args.config)
    engine = get_engine(config.database)
    try:
        create_tables(engine)
    finally:
        engine.dispose()
    logger.info("Catalog schema ready at %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    main()
