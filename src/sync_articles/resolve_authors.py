"""Map WordPress authors onto local author records."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from common.hashing import generate_author_id
from common.text import escape_like
from content_db.models import Author
from sync_articles.models import RemoteAuthor

logger = logging.getLogger(__name__)

SOURCE_SYSTEM = "wordpress"


def resolve_author(
    remote_author_id: Optional[int],
    remote_author: Optional[RemoteAuthor],
    session: Session,
) -> Optional[str]:
    """
    Resolve a WordPress author to a local author id.

    Resolution order:
    1. author already linked to this WordPress id
    2. unlinked author with the same name (case-insensitive), which is
       adopted by backfilling its WordPress id
    3. new external author

    Returns None when there is no author payload. Changes are flushed, not
    committed; the caller owns the transaction.
    """
    if remote_author is None or remote_author_id is None:
        return None

    # Heuristic 1: existing link on the WordPress id
    linked = session.execute(
        select(Author).where(Author.wordpress_author_id == remote_author_id)
    ).scalar_one_or_none()
    if linked is not None:
        return linked.id

    # Heuristic 2: adopt a manually created author with the same name
    unlinked = session.execute(
        select(Author)
        .where(
            Author.wordpress_author_id.is_(None),
            Author.name.ilike(escape_like(remote_author.name), escape="\\"),
        )
        .order_by(Author.created_at, Author.id)
        .limit(1)
    ).scalar_one_or_none()
    if unlinked is not None:
        unlinked.wordpress_author_id = remote_author_id
        unlinked.wordpress_author_name = remote_author.name
        session.flush()
        logger.info(
            "Linked existing author %s (%s) to WordPress author %d",
            unlinked.id,
            unlinked.name,
            remote_author_id,
        )
        return unlinked.id

    author = Author(
        id=generate_author_id(SOURCE_SYSTEM, remote_author_id),
        name=remote_author.name,
        email=remote_author.email,
        bio=remote_author.description,
        author_type="external",
        wordpress_author_id=remote_author_id,
        wordpress_author_name=remote_author.name,
        is_active=True,
    )
    session.add(author)
    session.flush()
    logger.info("Created external author %s (%s)", author.id, author.name)
    return author.id
