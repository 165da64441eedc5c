"""SQLAlchemy models for the local content catalog."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class Author(Base):
    """Canonical author record; may or may not be linked to a WordPress user."""

    __tablename__ = "authors"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String)
    bio: Mapped[Optional[str]] = mapped_column(Text)
    author_type: Mapped[str] = mapped_column(String, nullable=False, default="internal")  # internal, external, contributor
    wordpress_author_id: Mapped[Optional[int]] = mapped_column(Integer, unique=True)
    wordpress_author_name: Mapped[Optional[str]] = mapped_column(String)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utc_now)

    def __repr__(self) -> str:
        return f"<Author(id={self.id!r}, name={self.name!r}, wordpress_author_id={self.wordpress_author_id})>"


class Article(Base):
    """Canonical article record."""

    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    wordpress_id: Mapped[Optional[int]] = mapped_column(Integer, unique=True)  # dedup key
    title: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text)
    excerpt: Mapped[Optional[str]] = mapped_column(String(500))
    clean_content: Mapped[Optional[str]] = mapped_column(Text)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")  # published, draft
    published_at: Mapped[Optional[date]] = mapped_column(Date)
    primary_author_id: Mapped[Optional[str]] = mapped_column(ForeignKey("authors.id"))
    wordpress_author_id: Mapped[Optional[int]] = mapped_column(Integer)
    wordpress_author_name: Mapped[Optional[str]] = mapped_column(String)
    wordpress_categories: Mapped[list[int]] = mapped_column(JSON, default=list)
    wordpress_tags: Mapped[list[int]] = mapped_column(JSON, default=list)
    matched_clusters: Mapped[Optional[list[str]]] = mapped_column(JSON)  # curated topic tags
    source_system: Mapped[Optional[str]] = mapped_column(String)  # wordpress, manual
    source_url: Mapped[Optional[str]] = mapped_column(String)
    last_wordpress_sync: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utc_now)

    __table_args__ = (
        Index("idx_articles_status", "status"),
        Index("idx_articles_published_at", "published_at"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id!r}, wordpress_id={self.wordpress_id}, title={self.title!r})>"


class NewsCandidate(Base):
    """A discovered news item awaiting a link to its published article."""

    __tablename__ = "news"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    headline: Mapped[str] = mapped_column(String, nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text)
    matched_clusters: Mapped[Optional[list[str]]] = mapped_column(JSON)
    timestamp: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    publication_status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    matched_article_id: Mapped[Optional[str]] = mapped_column(ForeignKey("articles.id"))
    match_confidence: Mapped[Optional[float]] = mapped_column(Float)

    __table_args__ = (
        Index("idx_news_publication_status", "publication_status"),
    )

    def __repr__(self) -> str:
        return f"<NewsCandidate(id={self.id!r}, headline={self.headline!r})>"


class SyncOperation(Base):
    """Audit record for one sync run."""

    __tablename__ = "sync_operations"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_id)
    operation_type: Mapped[str] = mapped_column(String, nullable=False, default="wordpress_import")
    status: Mapped[str] = mapped_column(String, nullable=False)  # completed, dry_run_completed, failed
    total_items: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_items: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    results_summary: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    error_details: Mapped[Optional[list[str]]] = mapped_column(JSON)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utc_now)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<SyncOperation(id={self.id!r}, status={self.status!r})>"
