"""Engine and session factory for the content catalog."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from common.config import DatabaseConfig
from content_db.models import Base

logger = logging.getLogger(__name__)


def get_engine(config: DatabaseConfig) -> Engine:
    """Create an engine for the configured database URL."""
    return create_engine(config.url, echo=config.echo, future=True)


@contextmanager
def get_session(config: DatabaseConfig) -> Iterator[Session]:
    """Context manager yielding a session; rolls back on error and always closes."""
    engine = get_engine(config)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()


def create_tables(engine: Engine) -> None:
    """Create all catalog tables that do not exist yet."""
    Base.metadata.create_all(engine)
    logger.info("Ensured tables: %s", ", ".join(sorted(Base.metadata.tables)))
