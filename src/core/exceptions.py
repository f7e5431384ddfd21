"""
Booking domain errors and store error classification.

Every failure surfaced by the services is one of the errors below. Each carries
a stable machine-readable ``kind`` and a human-readable ``message``; raw driver
diagnostics are logged but never placed in the message.
"""

import logging
from typing import Optional

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes that mean "try the whole operation again"
RETRYABLE_SQLSTATES = {
    "40001",  # serialization_failure
    "40P01",  # deadlock_detected
    "55P03",  # lock_not_available (lock_timeout)
    "57014",  # query_canceled (statement_timeout)
}


class BookingSystemError(Exception):
    """Base class for all errors raised by the booking services."""

    kind = "booking_error"
    default_message = "Booking operation failed."
    retryable = False

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message, "type": self.kind}


class ValidationError(BookingSystemError):
    """Malformed input, e.g. a time window whose end is not after its start."""

    kind = "validation_error"
    default_message = "Invalid request."


class NotFoundError(BookingSystemError):
    """Entity is absent, or not owned by the caller."""

    kind = "not_found"
    default_message = "Not found."


class SlotUnavailableError(BookingSystemError):
    """Time slot does not exist, belongs to another resource, or is closed."""

    kind = "not_found_or_unavailable"
    default_message = "Time slot not found or unavailable."


class CapacityExceededError(BookingSystemError):
    """Time slot already holds as many active bookings as its capacity."""

    kind = "capacity_exceeded"
    default_message = "Time slot is at full capacity."


class ConflictDetectedError(BookingSystemError):
    """Proposed window overlaps an active booking (advisory)."""

    kind = "conflict_detected"
    default_message = "Time slot conflicts with existing bookings."


class TransientStoreError(BookingSystemError):
    """Timeout, lost connection or serialization conflict. Safe to retry."""

    kind = "transient_store_error"
    default_message = "The booking store is temporarily unavailable. Please retry."
    retryable = True


class ConstraintViolationError(BookingSystemError):
    """Store-level integrity failure (unique, foreign key or check constraint)."""

    kind = "constraint_violation"
    default_message = "The request violates a data integrity constraint."


class StoreError(BookingSystemError):
    """Any other storage failure."""

    kind = "store_error"
    default_message = "Internal storage error."


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def classify_store_error(exc: SQLAlchemyError) -> BookingSystemError:
    """
    Map a SQLAlchemy error to a booking error kind.

    Args:
        exc: Error raised by SQLAlchemy or the DBAPI driver

    Returns:
        The matching BookingSystemError (not raised)
    """
    if isinstance(exc, PoolTimeoutError):
        return TransientStoreError()

    if isinstance(exc, DBAPIError):
        if exc.connection_invalidated or _sqlstate(exc) in RETRYABLE_SQLSTATES:
            return TransientStoreError()
        if isinstance(exc, IntegrityError):
            return ConstraintViolationError()
        if isinstance(exc, OperationalError):
            return TransientStoreError()

    return StoreError()
