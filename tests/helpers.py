"""
Shared helpers for slot booking tests.
"""

from datetime import datetime, timedelta, timezone

# Fixed reference day for slot windows
BASE_DAY = datetime(2030, 6, 3, tzinfo=timezone.utc)


def at(hour: int, minute: int = 0, day_offset: int = 0) -> datetime:
    """Return a UTC instant on the reference day."""
    return BASE_DAY + timedelta(days=day_offset, hours=hour, minutes=minute)


def auth_headers(user_id) -> dict:
    """Headers carrying the caller identity."""
    return {"X-User-ID": str(user_id)}
