"""Shared fixtures: an in-memory catalog and RemoteArticle factories."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from content_db.models import Base
from sync_articles.models import RemoteArticle, RemoteAuthor


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def make_remote():
    """Factory for RemoteArticle with sensible defaults."""

    def _make(**overrides) -> RemoteArticle:
        values = {
            "id": 42,
            "title": "Fed Raises Rates Again",
            "content_html": "<p>The Federal Reserve raised rates.</p>",
            "excerpt_html": "<p>The Fed raised rates by a quarter point.</p>",
            "published_at": datetime(2024, 3, 20, 14, 30, tzinfo=timezone.utc),
            "status": "publish",
            "author_id": 7,
            "categories": (3,),
            "tags": (11, 12),
            "link": "https://example.com/fed-raises-rates-again",
            "author": RemoteAuthor(id=7, name="Jane Doe", slug="jane-doe"),
        }
        values.update(overrides)
        return RemoteArticle(**values)

    return _make
