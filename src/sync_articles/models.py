"""Data models for the sync_articles stage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional


@dataclass(frozen=True)
class RemoteAuthor:
    """Author sub-object embedded in a WordPress post (``_embedded.author[0]``)."""
    id: Optional[int]
    name: str
    slug: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class RemoteArticle:
    """Snapshot of a WordPress post fetched during one sync run."""
    id: int
    title: str
    content_html: str
    excerpt_html: str
    published_at: datetime
    status: str
    author_id: Optional[int]
    categories: tuple[int, ...] = ()
    tags: tuple[int, ...] = ()
    link: Optional[str] = None
    author: Optional[RemoteAuthor] = None


@dataclass(frozen=True)
class DuplicateCheck:
    """Outcome of looking a remote article up in the local catalog."""
    remote_id: int
    is_duplicate: bool
    existing_local_id: Optional[str] = None
    match_type: Optional[str] = None  # "remote_id" or "exact_title"


@dataclass(frozen=True)
class ItemOutcome:
    """Result of processing one remote article."""
    remote_id: int
    status: str  # "created", "duplicate", "error"
    local_id: Optional[str] = None
    duplicate: Optional[DuplicateCheck] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class SyncRunResult:
    """Summary of one orchestrator invocation."""
    total_articles: int
    created: int
    duplicates_skipped: int
    errors: tuple[str, ...] = ()
    duplicate_matches: tuple[DuplicateCheck, ...] = ()
    dry_run: bool = False

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @classmethod
    def from_outcomes(
        cls, total_articles: int, outcomes: list[ItemOutcome], dry_run: bool = False
    ) -> "SyncRunResult":
        """Fold per-item outcomes into a run summary."""
        return cls(
            total_articles=total_articles,
            created=sum(1 for o in outcomes if o.status == "created"),
            duplicates_skipped=sum(1 for o in outcomes if o.status == "duplicate"),
            errors=tuple(o.error for o in outcomes if o.status == "error" and o.error),
            duplicate_matches=tuple(o.duplicate for o in outcomes if o.duplicate is not None),
            dry_run=dry_run,
        )


@dataclass
class SyncRequest:
    """Parameters accepted by the sync invocation."""
    max_articles: int = 100
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    dry_run: bool = False

    def __post_init__(self) -> None:
        if self.max_articles <= 0:
            raise ValueError("max_articles must be greater than zero")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")



@dataclass(frozen=True)
class SyncRunReport:
    """One line of the run report archived to S3 or output/."""
    run_at: datetime
    start_date: Optional[date]
    end_date: Optional[date]
    max_articles: int
    dry_run: bool
    synced: int
    duplicates: int
    errors: tuple[str, ...]
    total_articles: int

    @classmethod
    def from_response(
        cls, request: SyncRequest, response: dict[str, Any], run_at: datetime
    ) -> "SyncRunReport":
        results = response["results"]
        return cls(
            run_at=run_at,
            start_date=request.start_date,
            end_date=request.end_date,
            max_articles=request.max_articles,
            dry_run=request.dry_run,
            synced=results["synced"],
            duplicates=results["duplicates"],
            errors=tuple(results["errors"]),
            total_articles=response["totalArticles"],
        )
