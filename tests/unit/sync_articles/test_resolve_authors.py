"""Tests for sync_articles.resolve_authors module."""

from sqlalchemy import func, select

from common.hashing import generate_author_id
from content_db.models import Author
from sync_articles.models import RemoteAuthor
from sync_articles.resolve_authors import resolve_author


def _author_count(session) -> int:
    return session.execute(select(func.count()).select_from(Author)).scalar_one()


class TestResolveAuthor:
    def test_no_payload_returns_none(self, session) -> None:
        assert resolve_author(7, None, session) is None
        assert resolve_author(None, RemoteAuthor(id=None, name="Jane Doe"), session) is None
        assert _author_count(session) == 0

    def test_creates_external_author(self, session) -> None:
        remote = RemoteAuthor(id=7, name="Jane Doe", description="Economics desk")

        author_id = resolve_author(7, remote, session)

        author = session.get(Author, author_id)
        assert author_id == generate_author_id("wordpress", 7)
        assert author.author_type == "external"
        assert author.wordpress_author_id == 7
        assert author.wordpress_author_name == "Jane Doe"
        assert author.bio == "Economics desk"

    def test_same_wordpress_id_resolves_to_same_author(self, session) -> None:
        remote = RemoteAuthor(id=7, name="Jane Doe")

        first = resolve_author(7, remote, session)
        second = resolve_author(7, remote, session)

        assert first == second
        assert _author_count(session) == 1

    def test_linked_author_found_even_if_renamed(self, session) -> None:
        session.add(Author(id="staff-1", name="J. Doe", wordpress_author_id=7))
        session.commit()

        assert resolve_author(7, RemoteAuthor(id=7, name="Jane Doe"), session) == "staff-1"

    def test_adopts_unlinked_author_with_same_name(self, session) -> None:
        session.add(Author(id="staff-1", name="jane doe", author_type="internal"))
        session.commit()

        author_id = resolve_author(7, RemoteAuthor(id=7, name="Jane Doe"), session)

        author = session.get(Author, "staff-1")
        assert author_id == "staff-1"
        assert author.wordpress_author_id == 7
        assert author.wordpress_author_name == "Jane Doe"
        assert author.author_type == "internal"
        assert _author_count(session) == 1

    def test_adopts_author_with_non_ascii_name(self, session) -> None:
        session.add(Author(id="staff-2", name="Émile Zola"))
        session.commit()

        assert resolve_author(8, RemoteAuthor(id=8, name="Émile Zola"), session) == "staff-2"

    def test_wildcards_in_name_are_literal(self, session) -> None:
        session.add(Author(id="staff-1", name="Jane Doe"))
        session.commit()

        author_id = resolve_author(7, RemoteAuthor(id=7, name="J_ne%"), session)

        assert author_id != "staff-1"
        assert session.get(Author, "staff-1").wordpress_author_id is None

    def test_does_not_adopt_author_linked_elsewhere(self, session) -> None:
        session.add(Author(id="staff-1", name="Jane Doe", wordpress_author_id=3))
        session.commit()

        author_id = resolve_author(7, RemoteAuthor(id=7, name="Jane Doe"), session)

        assert author_id != "staff-1"
        assert _author_count(session) == 2

    def test_does_not_commit(self, session) -> None:
        resolve_author(7, RemoteAuthor(id=7, name="Jane Doe"), session)
        session.rollback()

        assert _author_count(session) == 0
