"""Error types shared by the sync and matching stages."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for errors raised by the content catalog stages."""


class RemoteUnavailable(CatalogError):
    """The remote content API could not serve the first page of a run."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(CatalogError):
    """A write to the local catalog failed for a single item."""


class ArticleConflict(PersistenceError):
    """An insert lost a race against the unique remote-id constraint."""

    def __init__(self, message: str, existing_id: str):
        super().__init__(message)
        self.existing_id = existing_id


class PreconditionFailed(CatalogError):
    """An operation was invoked on a record that is not in the required state."""


class NotFound(CatalogError):
    """The requested record does not exist."""
