"""Convert WordPress REST API post payloads into RemoteArticle records."""

from __future__ import annotations

from typing import Any, Optional

from common.datetime import parse_datetime
from common.text import decode_entities
from sync_articles.models import RemoteArticle, RemoteAuthor


def parse_post(entry: Any) -> RemoteArticle:
    """Parse a single post payload.

    Raises:
        ValueError: If the payload is not a post object, has no integer id,
            or carries an unparseable date.
    """
    if not isinstance(entry, dict):
        raise ValueError(f"expected a post object, got {type(entry).__name__}")

    post_id = entry.get("id")
    # bool is an int subclass; reject it explicitly
    if not isinstance(post_id, int) or isinstance(post_id, bool):
        raise ValueError(f"post has no integer id: {post_id!r}")

    published_at = parse_datetime(entry.get("date"))
    if published_at is None:
        raise ValueError(f"post {post_id} has no date")

    author_id = entry.get("author")
    if not isinstance(author_id, int) or isinstance(author_id, bool) or author_id <= 0:
        author_id = None

    return RemoteArticle(
        id=post_id,
        title=decode_entities(_rendered(entry, "title")),
        content_html=_rendered(entry, "content"),
        excerpt_html=_rendered(entry, "excerpt"),
        published_at=published_at,
        status=str(entry.get("status") or ""),
        author_id=author_id,
        categories=_int_list(entry.get("categories")),
        tags=_int_list(entry.get("tags")),
        link=entry.get("link") or None,
        author=_parse_embedded_author(entry, author_id),
    )


def _rendered(entry: dict, key: str) -> str:
    """Read ``entry[key]["rendered"]``, tolerating plain strings and missing keys."""
    value = entry.get(key)
    if isinstance(value, dict):
        value = value.get("rendered")
    return value if isinstance(value, str) else ""


def _int_list(value: Any) -> tuple[int, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, int) and not isinstance(v, bool))


def _parse_embedded_author(entry: dict, author_id: Optional[int]) -> Optional[RemoteAuthor]:
    embedded = entry.get("_embedded")
    if not isinstance(embedded, dict):
        return None
    authors = embedded.get("author")
    if not isinstance(authors, list) or not authors or not isinstance(authors[0], dict):
        return None

    data = authors[0]
    name = decode_entities(data.get("name"))
    if not name:
        # WordPress returns {"code": "rest_user_invalid_id", ...} for hidden users
        return None

    embedded_id = data.get("id")
    if not isinstance(embedded_id, int) or isinstance(embedded_id, bool):
        embedded_id = author_id

    return RemoteAuthor(
        id=embedded_id,
        name=name,
        slug=data.get("slug") or None,
        description=data.get("description") or None,
        email=data.get("email") or None,
    )
