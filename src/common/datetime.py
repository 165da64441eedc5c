"""Datetime utilities."""

from datetime import datetime, timezone
from typing import Optional


def parse_datetime(value) -> Optional[datetime]:
    """Parse datetime from ISO string or return as-is if already datetime.

    Returns None for empty values. Raises ValueError for strings that are not ISO 8601.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def days_between(a: datetime, b: datetime) -> float:
    """Absolute distance between two datetimes in fractional days.

    Naive values are treated as UTC.
    """
    if a.tzinfo is None:
        a = a.replace(tzinfo=timezone.utc)
    if b.tzinfo is None:
        b = b.replace(tzinfo=timezone.utc)
    return abs((a - b).total_seconds()) / 86400
