"""
Datetime utilities for consistent timezone handling across the application.

All instants are handled as timezone-aware UTC datetimes. Multi-timezone
presentation is left to the callers.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get the current UTC datetime.

    Returns:
        Current datetime with UTC timezone
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime is timezone-aware in UTC.

    Naive datetimes are assumed to already be UTC.

    Args:
        dt: Datetime to normalize

    Returns:
        Timezone-aware UTC datetime, or None if input is None
    """
    if dt is None:
        return None
    return to_utc(dt)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to aware UTC; naive values are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso(dt: datetime) -> str:
    """Format a datetime as an ISO 8601 UTC string (e.g. 2025-11-06T10:00:00Z)."""
    return to_utc(dt).isoformat().replace("+00:00", "Z")
