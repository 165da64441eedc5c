"""Paginated client for the WordPress REST API posts endpoint."""

from __future__ import annotations

import logging
import time
from datetime import date
from typing import Any, Iterator, Optional

import requests

from common.config import MAX_PER_PAGE, WordPressConfig
from common.errors import RemoteUnavailable
from sync_articles.fetch_articles.parse_posts import parse_post
from sync_articles.models import RemoteArticle

logger = logging.getLogger(__name__)

USER_AGENT = "content-sync/1.0 (WordPress importer)"


class WordPressClient:
    """Reads posts from ``{base_url}/posts``; knows nothing about local storage."""

    def __init__(self, config: WordPressConfig, http: Optional[requests.Session] = None):
        if not config.base_url:
            raise ValueError("WordPress base_url is not configured")
        self.config = config
        self.http = http or requests.Session()
        self.http.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
        if config.username and config.password:
            self.http.auth = (config.username, config.password)

    def iter_pages(
        self,
        max_articles: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Iterator[list[RemoteArticle]]:
        """Yield batches of posts until ``max_articles`` or the end of the stream.

        Every call starts again from page 1.

        Raises:
            RemoteUnavailable: If the first page cannot be fetched.
        """
        page = 1
        fetched = 0

        while fetched < max_articles:
            per_page = min(max_articles - fetched, self.config.per_page, MAX_PER_PAGE)
            entries = self._fetch_page(page, per_page, start_date, end_date)
            if entries is None or not entries:
                break

            fetched += len(entries)
            batch = _parse_entries(entries)
            logger.info("Fetched page %d: %d posts (%d usable)", page, len(entries), len(batch))
            if batch:
                yield batch

            if len(entries) < per_page:
                break

            page += 1
            if self.config.api_delay > 0 and fetched < max_articles:
                time.sleep(self.config.api_delay)

        logger.info("Fetched %d posts from %s", fetched, self.config.base_url)

    def _fetch_page(
        self,
        page: int,
        per_page: int,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Optional[list[Any]]:
        """Fetch one page of raw entries.

        Returns None when a page after the first fails, which ends the stream.
        """
        url = f"{self.config.base_url}/posts"
        params = build_query_params(page, per_page, start_date, end_date)

        try:
            response = self.http.get(url, params=params, timeout=self.config.request_timeout)
        except requests.RequestException as e:
            return self._page_failed(page, f"request failed: {e}")

        if not response.ok:
            return self._page_failed(
                page,
                f"WordPress API error: {response.status_code} - {response.reason}",
                response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            return self._page_failed(page, f"invalid JSON body: {e}")

        if not isinstance(payload, list):
            return self._page_failed(page, f"expected a list of posts, got {type(payload).__name__}")

        return payload

    def _page_failed(self, page: int, message: str, status_code: Optional[int] = None) -> None:
        if page == 1:
            raise RemoteUnavailable(message, status_code=status_code)
        # Pagination may legitimately run out before the requested maximum
        logger.warning("Stopping at page %d: %s", page, message)
        return None


def build_query_params(
    page: int,
    per_page: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> dict[str, Any]:
    """Query string for one posts page, with author objects embedded."""
    params: dict[str, Any] = {"page": page, "per_page": per_page, "_embed": "author"}
    if start_date:
        params["after"] = f"{start_date.isoformat()}T00:00:00"
    if end_date:
        params["before"] = f"{end_date.isoformat()}T23:59:59"
    return params


def _parse_entries(entries: list[Any]) -> list[RemoteArticle]:
    articles = []
    for entry in entries:
        try:
            articles.append(parse_post(entry))
        except ValueError as e:
            logger.warning("Skipping malformed post: %s", e)
    return articles
