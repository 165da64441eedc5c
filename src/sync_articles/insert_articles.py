"""Write newly discovered remote articles into the catalog."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from common.errors import ArticleConflict, PersistenceError
from common.hashing import generate_article_id
from common.text import clean_text, count_words, truncate
from content_db.models import Article
from sync_articles.models import RemoteArticle

logger = logging.getLogger(__name__)

SOURCE_SYSTEM = "wordpress"
EXCERPT_MAX_LENGTH = 500


def map_status(remote_status: str) -> str:
    return "published" if remote_status == "publish" else "draft"


def build_article(
    remote: RemoteArticle,
    author_id: Optional[str],
    synced_at: datetime,
) -> Article:
    """Normalize a remote article into an unsaved catalog row."""
    clean_content = clean_text(remote.content_html) or clean_text(remote.excerpt_html)
    return Article(
        id=generate_article_id(SOURCE_SYSTEM, remote.id),
        wordpress_id=remote.id,
        title=remote.title,
        content=remote.content_html,
        excerpt=truncate(clean_text(remote.excerpt_html), EXCERPT_MAX_LENGTH),
        clean_content=clean_content,
        word_count=count_words(clean_content),
        status=map_status(remote.status),
        published_at=remote.published_at.date(),
        primary_author_id=author_id,
        wordpress_author_id=remote.author_id,
        wordpress_author_name=remote.author.name if remote.author else None,
        wordpress_categories=list(remote.categories),
        wordpress_tags=list(remote.tags),
        source_system=SOURCE_SYSTEM,
        source_url=remote.link,
        last_wordpress_sync=synced_at,
    )


def insert_article(
    remote: RemoteArticle,
    author_id: Optional[str],
    session: Session,
    synced_at: datetime,
) -> str:
    """
    Insert a remote article and commit the item's transaction.

    Only called after the duplicate check cleared this article. Never updates
    an existing row.

    Raises:
        ArticleConflict: Another writer inserted the same WordPress id first.
        PersistenceError: Any other database failure.
    """
    article = build_article(remote, author_id, synced_at)
    session.add(article)

    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        existing_id = session.execute(
            select(Article.id).where(Article.wordpress_id == remote.id)
        ).scalar_one_or_none()
        if existing_id is not None:
            raise ArticleConflict(
                f"WordPress id {remote.id} already imported as {existing_id}",
                existing_id=existing_id,
            ) from e
        raise PersistenceError(f"constraint violation: {e.orig}") from e
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(str(e)) from e

    logger.info("Created article %s: %s", article.id, article.title)
    return article.id
