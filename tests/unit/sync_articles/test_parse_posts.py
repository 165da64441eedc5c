"""Tests for sync_articles.fetch_articles.parse_posts module."""

from datetime import datetime

import pytest

from sync_articles.fetch_articles.parse_posts import parse_post


def _post(**overrides) -> dict:
    post = {
        "id": 42,
        "date": "2024-03-20T14:30:00",
        "status": "publish",
        "link": "https://example.com/fed",
        "title": {"rendered": "Fed&#8217;s &#8220;Pause&#8221; Ends"},
        "content": {"rendered": "<p>Body</p>"},
        "excerpt": {"rendered": "<p>Short</p>"},
        "author": 7,
        "categories": [3, 4],
        "tags": [11],
        "_embedded": {"author": [{"id": 7, "name": "Jane Doe", "slug": "jane-doe"}]},
    }
    post.update(overrides)
    return post


class TestParsePost:
    def test_parses_rendered_fields(self) -> None:
        article = parse_post(_post())

        assert article.id == 42
        assert article.title == "Fed’s “Pause” Ends"
        assert article.content_html == "<p>Body</p>"
        assert article.excerpt_html == "<p>Short</p>"
        assert article.published_at == datetime(2024, 3, 20, 14, 30)
        assert article.status == "publish"
        assert article.categories == (3, 4)
        assert article.tags == (11,)
        assert article.link == "https://example.com/fed"

    def test_parses_embedded_author(self) -> None:
        article = parse_post(_post())

        assert article.author_id == 7
        assert article.author.id == 7
        assert article.author.name == "Jane Doe"
        assert article.author.slug == "jane-doe"

    def test_missing_embedded_author(self) -> None:
        article = parse_post(_post(_embedded={}))
        assert article.author is None
        assert article.author_id == 7

    def test_hidden_author_payload_is_ignored(self) -> None:
        embedded = {"author": [{"code": "rest_user_invalid_id", "message": "Invalid user ID."}]}
        assert parse_post(_post(_embedded=embedded)).author is None

    def test_embedded_author_without_id_uses_post_author(self) -> None:
        article = parse_post(_post(_embedded={"author": [{"name": "Jane Doe"}]}))
        assert article.author.id == 7

    def test_zero_author_is_none(self) -> None:
        assert parse_post(_post(author=0, _embedded={})).author_id is None

    def test_missing_rendered_fields_default_to_empty(self) -> None:
        article = parse_post(_post(content=None, excerpt={}))
        assert article.content_html == ""
        assert article.excerpt_html == ""

    def test_non_integer_categories_are_dropped(self) -> None:
        assert parse_post(_post(categories=[1, "2", True, 3])).categories == (1, 3)

    @pytest.mark.parametrize("post_id", [None, "42", True])
    def test_rejects_missing_or_non_integer_id(self, post_id) -> None:
        with pytest.raises(ValueError):
            parse_post(_post(id=post_id))

    def test_rejects_missing_date(self) -> None:
        with pytest.raises(ValueError):
            parse_post(_post(date=None))

    def test_rejects_non_object(self) -> None:
        with pytest.raises(ValueError):
            parse_post(["not", "a", "post"])
