"""Link published news candidates to their counterpart in the article catalog."""

from __future__ import annotations

import logging
from datetime import datetime, time, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from common.config import MatchWeights
from common.datetime import days_between
from common.errors import NotFound, PersistenceError, PreconditionFailed
from common.text import keywords
from content_db.models import Article, NewsCandidate
from match_news.models import CandidateView, CatalogArticle, MatchResult, MatchScore

logger = logging.getLogger(__name__)

PUBLISHED = "published"


def score_article(
    candidate: CandidateView,
    article: CatalogArticle,
    weights: MatchWeights,
) -> MatchScore:
    """Score one candidate against one article.

    Signals (additive):
    - headline/title keyword overlap
    - summary keywords found inside the article excerpt
    - shared topic clusters (the strongest signal, clusters are curated)
    - publication dates within a week, or within a day
    """
    article_tokens = set(keywords(article.title, weights.title_min_length))
    title_overlap = sum(
        1 for token in keywords(candidate.headline, weights.title_min_length)
        if token in article_tokens
    )

    body_overlap = 0
    if candidate.summary and article.excerpt:
        excerpt = article.excerpt.lower()
        body_overlap = sum(
            1 for token in keywords(candidate.summary, weights.body_min_length)
            if token in excerpt
        )

    article_clusters = set(article.clusters)
    cluster_overlap = sum(1 for cluster in candidate.clusters if cluster in article_clusters)

    recency = 0
    if candidate.timestamp and article.published_at:
        published = datetime.combine(article.published_at, time.min, tzinfo=timezone.utc)
        days = days_between(published, candidate.timestamp)
        if days <= 1:
            recency = weights.day_bonus
        elif days <= 7:
            recency = weights.week_bonus

    return MatchScore(
        article_id=article.id,
        title_score=title_overlap * weights.title_weight,
        body_score=body_overlap * weights.body_weight,
        cluster_score=cluster_overlap * weights.cluster_weight,
        recency_score=recency,
    )


def find_best_match(
    candidate: CandidateView,
    articles: list[CatalogArticle],
    weights: MatchWeights,
) -> MatchResult:
    """Pick the highest-scoring article if it clears the threshold.

    Ties keep the earlier article in ``articles``.
    """
    best: Optional[CatalogArticle] = None
    best_score = 0

    for article in articles:
        score = score_article(candidate, article, weights)
        logger.debug(
            "  article '%s' -> %d (title=%d, body=%d, clusters=%d, recency=%d)",
            article.title,
            score.total,
            score.title_score,
            score.body_score,
            score.cluster_score,
            score.recency_score,
        )
        if score.total > best_score and score.total > weights.min_score:
            best = article
            best_score = score.total

    if best is None:
        return MatchResult(matched=False)

    return MatchResult(
        matched=True,
        article_id=best.id,
        article_title=best.title,
        score=best_score,
        confidence=min(best_score / 100, 1.0),
    )


def match_candidate(
    candidate_id: str,
    session: Session,
    weights: MatchWeights,
) -> MatchResult:
    """
    Score a news candidate against the catalog and store the match.

    Only the candidate's matched_article_id and match_confidence are written,
    and only when a match clears the threshold.

    Raises:
        NotFound: No candidate with this id.
        PreconditionFailed: The candidate is not marked as published.
        PersistenceError: The match could not be written.
    """
    row = session.get(NewsCandidate, candidate_id)
    if row is None:
        raise NotFound(f"News candidate {candidate_id} not found")

    candidate = _to_candidate_view(row)
    if candidate.publication_status != PUBLISHED:
        raise PreconditionFailed("News item must be published before matching to articles")

    articles = load_catalog_articles(session)
    logger.info("Scoring '%s' against %d published articles", candidate.headline, len(articles))

    result = find_best_match(candidate, articles, weights)
    if not result.matched:
        logger.info("No article cleared the threshold for '%s'", candidate.headline)
        return result

    row.matched_article_id = result.article_id
    row.match_confidence = result.confidence
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(f"Failed to store match for {candidate_id}: {e}") from e

    logger.info(
        "Matched '%s' -> '%s' (score=%d, confidence=%.2f)",
        candidate.headline,
        result.article_title,
        result.score,
        result.confidence,
    )
    return result


def match_news_candidate(
    candidate_id: str,
    session: Session,
    weights: MatchWeights,
) -> dict[str, Any]:
    """
    Match invocation: returns the response dict for one candidate.

    Raises:
        NotFound: No candidate with this id.
        PersistenceError: The match could not be written.
    """
    try:
        result = match_candidate(candidate_id, session, weights)
    except PreconditionFailed as e:
        return {"success": False, "message": str(e)}

    if not result.matched:
        return {
            "success": False,
            "message": "No suitable article match found",
            "threshold": weights.min_score,
        }

    return {
        "success": True,
        "match": {
            "articleId": result.article_id,
            "articleTitle": result.article_title,
            "confidenceScore": result.confidence,
            "matchScore": result.score,
        },
    }


def match_unmatched_candidates(
    session: Session,
    weights: MatchWeights,
    limit: int = 10,
) -> list[dict[str, Any]]:
    """Match the most recent published candidates that have no match yet."""
    candidate_ids = session.execute(
        select(NewsCandidate.id)
        .where(
            NewsCandidate.publication_status == PUBLISHED,
            NewsCandidate.matched_article_id.is_(None),
        )
        .order_by(NewsCandidate.timestamp.desc(), NewsCandidate.id)
        .limit(limit)
    ).scalars().all()

    if not candidate_ids:
        logger.info("No unmatched published news candidates")
        return []

    logger.info("Matching %d unmatched news candidates", len(candidate_ids))
    responses = []
    for candidate_id in candidate_ids:
        response = match_news_candidate(candidate_id, session, weights)
        responses.append({"candidateId": candidate_id, **response})

    matched = sum(1 for r in responses if r["success"])
    logger.info("Matched %d of %d candidates", matched, len(responses))
    return responses


def load_catalog_articles(session: Session) -> list[CatalogArticle]:
    """Published articles that came from WordPress, newest first."""
    rows = session.execute(
        select(Article)
        .where(Article.status == PUBLISHED, Article.wordpress_id.is_not(None))
        .order_by(Article.published_at.desc(), Article.id)
    ).scalars().all()

    return [
        CatalogArticle(
            id=row.id,
            title=row.title,
            excerpt=row.excerpt,
            clusters=tuple(row.matched_clusters or ()),
            published_at=row.published_at,
        )
        for row in rows
    ]


def _to_candidate_view(row: NewsCandidate) -> CandidateView:
    return CandidateView(
        id=row.id,
        headline=row.headline,
        summary=row.summary,
        clusters=tuple(row.matched_clusters or ()),
        timestamp=row.timestamp,
        publication_status=row.publication_status,
    )
