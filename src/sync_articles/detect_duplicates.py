"""Decide whether a remote article is already in the local catalog."""

from __future__ import annotations

import html
import logging
import re
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from common.text import escape_like, normalize_title
from content_db.models import Article
from sync_articles.models import DuplicateCheck, RemoteArticle

logger = logging.getLogger(__name__)

# Titles shorter than this (after normalization) are too generic to compare
MIN_TITLE_LENGTH = 5
# Words used to narrow the candidate set; at least three ASCII letters or digits
_PLAIN_WORD_RE = re.compile(r"[A-Za-z0-9]{3,}")


def detect_duplicate(remote: RemoteArticle, session: Session) -> DuplicateCheck:
    """
    Look up a remote article in the catalog.

    Checks, in order, short-circuiting on the first hit:
    1. exact WordPress id (authoritative)
    2. exact normalized title, among articles whose title contains the
       longest plain word of the remote title

    Substring hits only narrow the candidate set; they never count as a
    duplicate on their own.
    """
    existing_id = session.execute(
        select(Article.id).where(Article.wordpress_id == remote.id)
    ).scalar_one_or_none()
    if existing_id is not None:
        return DuplicateCheck(
            remote_id=remote.id,
            is_duplicate=True,
            existing_local_id=existing_id,
            match_type="remote_id",
        )

    remote_title = normalize_title(remote.title)
    if len(remote_title) < MIN_TITLE_LENGTH:
        logger.debug("Title too short to compare for post %d: %r", remote.id, remote.title)
        return DuplicateCheck(remote_id=remote.id, is_duplicate=False)

    for article_id, title in _load_title_candidates(remote.title, session):
        if normalize_title(title) == remote_title:
            return DuplicateCheck(
                remote_id=remote.id,
                is_duplicate=True,
                existing_local_id=article_id,
                match_type="exact_title",
            )

    return DuplicateCheck(remote_id=remote.id, is_duplicate=False)


def _load_title_candidates(title: str, session: Session) -> list[tuple[str, str]]:
    """Articles whose title contains the longest plain word of ``title`` (case-insensitive).

    Punctuation, quotes and entities are folded by ``normalize_title`` and
    may be spelled differently in the stored title, so only a purely
    alphanumeric word is used to narrow. Titles without one are compared
    against every article.
    """
    query = select(Article.id, Article.title).order_by(Article.created_at, Article.id)
    anchor = _title_anchor(title)
    if anchor:
        query = query.where(Article.title.ilike(f"%{escape_like(anchor)}%", escape="\\"))
    else:
        logger.debug("No anchor word in title %r, scanning all titles", title)
    return [(row.id, row.title) for row in session.execute(query).all()]


def _title_anchor(title: str) -> Optional[str]:
    words = [w for w in html.unescape(title).split() if _PLAIN_WORD_RE.fullmatch(w)]
    if not words:
        return None
    return max(words, key=len)
