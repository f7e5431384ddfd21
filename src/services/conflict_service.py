"""
Conflict service for advisory overlap checks.

Answers "does this proposed window overlap any active booking on the
resource?". The answer is meant for UI pre-checks only. It does not prevent
double booking under concurrency; BookingService.create_booking does that
inside its transaction.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from core.database import Database
from core.exceptions import ConflictDetectedError
from models import Booking, TimeSlot
from utils.booking_queries import filter_active_bookings, filter_overlapping_slots
from utils.validators import validate_time_window


@dataclass
class ConflictCheckResult:
    """Outcome of a conflict check."""

    has_conflicts: bool
    conflicting_booking_ids: List[uuid.UUID] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "has_conflicts": self.has_conflicts,
            "conflicting_booking_ids": [str(booking_id) for booking_id in self.conflicting_booking_ids],
        }


class ConflictService:
    """Service for detecting overlaps between a proposed window and active bookings."""

    def __init__(self, database: Database, logger: Optional[logging.Logger] = None):
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

    def find_conflicts(
        self,
        resource_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime
    ) -> ConflictCheckResult:
        """
        Find active bookings on a resource whose slot window overlaps [start_time, end_time).

        Args:
            resource_id: Resource ID
            start_time: Proposed start (inclusive)
            end_time: Proposed end (exclusive)

        Returns:
            ConflictCheckResult with the offending booking IDs ordered by slot start

        Raises:
            ValidationError: If end_time is not after start_time
        """
        start_utc, end_utc = validate_time_window(start_time, end_time)

        with self.database.session() as db:
            query = db.query(Booking).join(
                TimeSlot, Booking.time_slot_id == TimeSlot.id
            ).filter(
                Booking.resource_id == resource_id
            )
            query = filter_active_bookings(query)
            query = filter_overlapping_slots(query, start_utc, end_utc)

            conflicting_ids = [
                booking.id
                for booking in query.order_by(TimeSlot.start_time.asc(), Booking.created_at.asc()).all()
            ]

        if conflicting_ids:
            self.logger.debug(
                f"Found {len(conflicting_ids)} conflicting bookings on resource {resource_id} "
                f"for {start_utc.isoformat()} - {end_utc.isoformat()}"
            )
        return ConflictCheckResult(
            has_conflicts=bool(conflicting_ids),
            conflicting_booking_ids=conflicting_ids,
        )

    def ensure_no_conflicts(
        self,
        resource_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime
    ) -> None:
        """
        Raise if the proposed window overlaps an active booking.

        Raises:
            ConflictDetectedError: If any active booking overlaps
            ValidationError: If end_time is not after start_time
        """
        result = self.find_conflicts(resource_id, start_time, end_time)
        if result.has_conflicts:
            raise ConflictDetectedError()
