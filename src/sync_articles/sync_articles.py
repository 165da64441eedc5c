"""Sync WordPress posts into the local catalog."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from common.datetime import utc_now
from common.errors import ArticleConflict, RemoteUnavailable
from common.hashing import generate_article_id
from common.text import normalize_title
from content_db.models import SyncOperation
from sync_articles.detect_duplicates import MIN_TITLE_LENGTH, detect_duplicate
from sync_articles.fetch_articles.wordpress_client import WordPressClient
from sync_articles.insert_articles import SOURCE_SYSTEM, insert_article
from sync_articles.models import (
    DuplicateCheck,
    ItemOutcome,
    RemoteArticle,
    SyncRequest,
    SyncRunResult,
)
from sync_articles.resolve_authors import resolve_author

logger = logging.getLogger(__name__)

# Error messages returned to callers; the sync_operations row keeps all of them
MAX_REPORTED_ERRORS = 50


class DryRunPlan:
    """Articles a dry run would have created, so later items in the same run
    are reported as the duplicates a real run would find."""

    def __init__(self) -> None:
        self.by_remote_id: dict[int, str] = {}
        self.by_title: dict[str, str] = {}

    def check(self, remote: RemoteArticle) -> Optional[DuplicateCheck]:
        local_id = self.by_remote_id.get(remote.id)
        if local_id is not None:
            return DuplicateCheck(
                remote_id=remote.id,
                is_duplicate=True,
                existing_local_id=local_id,
                match_type="remote_id",
            )

        title = normalize_title(remote.title)
        if len(title) >= MIN_TITLE_LENGTH and title in self.by_title:
            return DuplicateCheck(
                remote_id=remote.id,
                is_duplicate=True,
                existing_local_id=self.by_title[title],
                match_type="exact_title",
            )
        return None

    def add(self, remote: RemoteArticle) -> str:
        local_id = generate_article_id(SOURCE_SYSTEM, remote.id)
        self.by_remote_id[remote.id] = local_id
        title = normalize_title(remote.title)
        if len(title) >= MIN_TITLE_LENGTH:
            self.by_title.setdefault(title, local_id)
        return local_id


def fetch_remote_articles(
    client: WordPressClient,
    max_articles: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[RemoteArticle]:
    """Accumulate every page before processing starts."""
    articles: list[RemoteArticle] = []
    for batch in client.iter_pages(max_articles, start_date, end_date):
        articles.extend(batch)
    return articles


def sync_articles(
    client: WordPressClient,
    session: Session,
    max_articles: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    dry_run: bool = False,
) -> SyncRunResult:
    """
    Fetch up to ``max_articles`` posts and import the ones not yet in the catalog.

    Items are processed one at a time and each is committed on its own, so a
    failing item never aborts the run.

    Raises:
        RemoteUnavailable: If the first page cannot be fetched.
    """
    remote_articles = fetch_remote_articles(client, max_articles, start_date, end_date)
    if not remote_articles:
        logger.warning("0 posts fetched")
        return SyncRunResult(total_articles=0, created=0, duplicates_skipped=0, dry_run=dry_run)

    logger.info("Processing %d posts%s", len(remote_articles), " (dry run)" if dry_run else "")

    synced_at = utc_now()
    plan = DryRunPlan() if dry_run else None
    outcomes = []
    for index, remote in enumerate(remote_articles, start=1):
        logger.info("Processing post %d/%d (id=%d)", index, len(remote_articles), remote.id)
        outcomes.append(process_article(remote, session, synced_at, dry_run, plan))

    result = SyncRunResult.from_outcomes(len(remote_articles), outcomes, dry_run=dry_run)
    logger.info(
        "Sync completed: %d created, %d duplicates skipped, %d errors",
        result.created,
        result.duplicates_skipped,
        result.error_count,
    )
    return result


def process_article(
    remote: RemoteArticle,
    session: Session,
    synced_at: datetime,
    dry_run: bool = False,
    plan: Optional[DryRunPlan] = None,
) -> ItemOutcome:
    """Detect, resolve, and insert one post. Never raises.

    In a dry run nothing is written; ``plan`` records what would have been
    created so repeats within the run count as duplicates.
    """
    try:
        check = detect_duplicate(remote, session)
        if not check.is_duplicate and plan is not None:
            check = plan.check(remote) or check
        if check.is_duplicate:
            logger.info(
                "Skipping duplicate post %d (%s match with %s)",
                remote.id,
                check.match_type,
                check.existing_local_id,
            )
            return ItemOutcome(remote_id=remote.id, status="duplicate", duplicate=check)

        if dry_run:
            logger.info("[DRY RUN] Would create: %s", remote.title)
            local_id = plan.add(remote) if plan is not None else None
            return ItemOutcome(remote_id=remote.id, status="created", local_id=local_id)

        author_id = resolve_author(remote.author_id, remote.author, session)
        local_id = insert_article(remote, author_id, session, synced_at)
        return ItemOutcome(remote_id=remote.id, status="created", local_id=local_id)

    except ArticleConflict as e:
        # Another run inserted this post between the check and the insert
        logger.warning("Post %d imported concurrently as %s", remote.id, e.existing_id)
        check = DuplicateCheck(
            remote_id=remote.id,
            is_duplicate=True,
            existing_local_id=e.existing_id,
            match_type="remote_id",
        )
        return ItemOutcome(remote_id=remote.id, status="duplicate", duplicate=check)

    except Exception as e:
        session.rollback()
        logger.error("Error syncing post %d: %s", remote.id, e)
        return ItemOutcome(remote_id=remote.id, status="error", error=f"Article {remote.id}: {e}")


def run_sync(
    request: SyncRequest,
    client: WordPressClient,
    session: Session,
) -> dict[str, Any]:
    """
    Sync invocation: run the orchestrator, record the run, and build the response.

    Raises:
        RemoteUnavailable: If the first page cannot be fetched. The failed
            run is still recorded.
    """
    started_at = utc_now()
    try:
        result = sync_articles(
            client,
            session,
            max_articles=request.max_articles,
            start_date=request.start_date,
            end_date=request.end_date,
            dry_run=request.dry_run,
        )
    except RemoteUnavailable as e:
        record_sync_operation(session, None, started_at, error=str(e))
        raise

    record_sync_operation(session, result, started_at)
    return build_sync_response(result)


def build_sync_response(result: SyncRunResult) -> dict[str, Any]:
    return {
        "success": True,
        "results": {
            "synced": result.created,
            # Revision sync is not supported, existing articles are never updated
            "updated": 0,
            "duplicates": result.duplicates_skipped,
            "errors": list(result.errors[:MAX_REPORTED_ERRORS]),
        },
        "totalArticles": result.total_articles,
    }


def record_sync_operation(
    session: Session,
    result: Optional[SyncRunResult],
    started_at: datetime,
    error: Optional[str] = None,
) -> Optional[str]:
    """Store a sync_operations row; failures here are logged, not raised."""
    if result is None:
        status = "failed"
        summary: dict[str, Any] = {}
        error_details = [error] if error else []
        total = 0
    else:
        status = "dry_run_completed" if result.dry_run else "completed"
        summary = {
            "processed": result.total_articles,
            "created": result.created,
            "updated": 0,
            "skipped": result.duplicates_skipped,
            "total_errors": result.error_count,
            "dry_run": result.dry_run,
            "match_details": [
                {
                    "wordpress_id": m.remote_id,
                    "article_id": m.existing_local_id,
                    "match_type": m.match_type,
                }
                for m in result.duplicate_matches
            ],
        }
        error_details = list(result.errors)
        total = result.total_articles

    operation = SyncOperation(
        operation_type="wordpress_import",
        status=status,
        total_items=total,
        completed_items=total,
        results_summary=summary,
        error_details=error_details,
        started_at=started_at,
        completed_at=utc_now(),
    )
    session.add(operation)
    try:
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error("Failed to record sync operation: %s", e)
        return None

    logger.info("Recorded sync operation %s (%s)", operation.id, status)
    return operation.id
