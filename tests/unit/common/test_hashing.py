"""Tests for common.hashing module."""

from common.hashing import generate_article_id, generate_author_id


class TestGenerateArticleId:
    def test_deterministic_output(self) -> None:
        assert generate_article_id("wordpress", 42) == generate_article_id("wordpress", 42)

    def test_int_and_str_remote_ids_agree(self) -> None:
        assert generate_article_id("wordpress", 42) == generate_article_id("wordpress", "42")

    def test_returns_16_char_hex_string(self) -> None:
        result = generate_article_id("wordpress", 42)
        assert len(result) == 16
        assert all(c in "0123456789abcdef" for c in result)

    def test_different_source_produces_different_id(self) -> None:
        assert generate_article_id("wordpress", 42) != generate_article_id("legacy", 42)

    def test_different_remote_id_produces_different_id(self) -> None:
        assert generate_article_id("wordpress", 42) != generate_article_id("wordpress", 43)


class TestGenerateAuthorId:
    def test_deterministic_output(self) -> None:
        assert generate_author_id("wordpress", 7) == generate_author_id("wordpress", 7)

    def test_does_not_collide_with_article_id(self) -> None:
        assert generate_author_id("wordpress", 7) != generate_article_id("wordpress", 7)
