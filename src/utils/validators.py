"""
Input validators shared by the booking services.

Validators raise ValidationError before anything reaches the store.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from core.constants import MAX_STRING_LENGTH, RESOURCE_CATEGORIES
from core.exceptions import ValidationError
from utils.datetime_utils import to_utc


def validate_time_window(start_time: datetime, end_time: datetime) -> tuple[datetime, datetime]:
    """
    Validate a time window and normalize it to UTC.

    Args:
        start_time: Window start
        end_time: Window end

    Returns:
        (start_time, end_time) as UTC-aware datetimes

    Raises:
        ValidationError: If end_time is not strictly after start_time
    """
    if start_time is None or end_time is None:
        raise ValidationError("Start time and end time are required.")

    start_utc = to_utc(start_time)
    end_utc = to_utc(end_time)

    if end_utc <= start_utc:
        raise ValidationError("End time must be after start time.")
    return start_utc, end_utc


def validate_capacity(capacity: int) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
        raise ValidationError("Capacity must be a positive integer.")
    return capacity


def validate_category(category: str) -> str:
    if category not in RESOURCE_CATEGORIES:
        raise ValidationError(
            f"Category must be one of: {', '.join(RESOURCE_CATEGORIES)}."
        )
    return category


def validate_name(name: Optional[str], field_name: str = "Name") -> str:
    if name is None or not name.strip():
        raise ValidationError(f"{field_name} is required.")
    name = name.strip()
    if len(name) > MAX_STRING_LENGTH:
        raise ValidationError(f"{field_name} must be at most {MAX_STRING_LENGTH} characters.")
    return name


def validate_operating_hours(operating_hours: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Validate the structured operating-hours description.

    Expected shape: {"<weekday>": {"open": "HH:MM", "close": "HH:MM"}, ...}
    """
    if operating_hours is None:
        return None
    if not isinstance(operating_hours, dict):
        raise ValidationError("Operating hours must be an object keyed by weekday.")

    for day, hours in operating_hours.items():
        if not isinstance(hours, dict) or "open" not in hours or "close" not in hours:
            raise ValidationError(f"Operating hours for '{day}' must have 'open' and 'close'.")
        try:
            opens = datetime.strptime(str(hours["open"]), "%H:%M").time()
            closes = datetime.strptime(str(hours["close"]), "%H:%M").time()
        except ValueError:
            raise ValidationError(f"Operating hours for '{day}' must use HH:MM format.")
        if closes <= opens:
            raise ValidationError(f"Operating hours for '{day}' must close after they open.")
    return operating_hours
