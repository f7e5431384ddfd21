"""
Utility functions for consistent booking queries.

These helpers make sure every component counts "active" bookings and matches
overlapping windows the same way.
"""

import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Query, Session

from core.constants import ACTIVE_BOOKING_STATUSES
from models import Booking, TimeSlot


def filter_active_bookings(query: Query[Booking]) -> Query[Booking]:
    """
    Restrict a booking query to active bookings (pending or confirmed).

    Args:
        query: Base query for Booking

    Returns:
        Query excluding cancelled bookings
    """
    return query.filter(Booking.status.in_(ACTIVE_BOOKING_STATUSES))


def count_active_bookings_for_slot(db: Session, time_slot_id: uuid.UUID) -> int:
    """
    Count active bookings referencing a time slot.

    Args:
        db: Database session
        time_slot_id: Time slot ID

    Returns:
        Number of pending or confirmed bookings for the slot
    """
    query = db.query(Booking).filter(Booking.time_slot_id == time_slot_id)
    return filter_active_bookings(query).count()


def active_booking_count_subquery():
    """
    Correlated scalar subquery counting active bookings for the outer TimeSlot row.

    Used by availability reads to re-derive remaining capacity instead of
    trusting the cached availability flag.
    """
    return (
        select(func.count(Booking.id))
        .where(
            Booking.time_slot_id == TimeSlot.id,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .correlate(TimeSlot)
        .scalar_subquery()
    )


def filter_overlapping_slots(query: Query, start_time: datetime, end_time: datetime) -> Query:
    """
    Keep rows whose TimeSlot window overlaps the half-open window [start_time, end_time).

    Two windows [s1, e1) and [s2, e2) overlap iff s1 < e2 and s2 < e1. A window
    ending exactly when the other starts is not an overlap.

    Args:
        query: Query that selects from or joins TimeSlot
        start_time: Proposed start (inclusive)
        end_time: Proposed end (exclusive)
    """
    return query.filter(
        TimeSlot.start_time < end_time,
        TimeSlot.end_time > start_time,
    )
