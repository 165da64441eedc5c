"""Data models for the match_news stage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class CandidateView:
    """The fields of a news candidate that take part in scoring."""
    id: str
    headline: str
    summary: Optional[str]
    clusters: tuple[str, ...]
    timestamp: Optional[datetime]
    publication_status: str


@dataclass(frozen=True)
class CatalogArticle:
    """A published article with a WordPress id, as seen by the matcher."""
    id: str
    title: str
    excerpt: Optional[str]
    clusters: tuple[str, ...]
    published_at: Optional[date]


@dataclass(frozen=True)
class MatchScore:
    """Score of one candidate against one article, with its breakdown."""
    article_id: str
    title_score: int
    body_score: int
    cluster_score: int
    recency_score: int

    @property
    def total(self) -> int:
        return self.title_score + self.body_score + self.cluster_score + self.recency_score


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    article_id: Optional[str] = None
    article_title: Optional[str] = None
    score: int = 0
    confidence: Optional[float] = None
