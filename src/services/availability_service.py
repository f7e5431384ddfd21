"""
Availability service for time slot availability reads.

Combines each slot's static capacity with a live count of its active bookings,
so readers that need accuracy never rely on the cached availability flag alone.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from core.database import Database
from core.exceptions import ValidationError
from models import TimeSlot
from utils.booking_queries import active_booking_count_subquery
from utils.datetime_utils import ensure_utc


class AvailabilityService:
    """
    Service class for availability operations.

    Pure reads; nothing here mutates the store.
    """

    def __init__(self, database: Database, logger: Optional[logging.Logger] = None):
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

    def get_available_slots(
        self,
        resource_id: uuid.UUID,
        start_date: datetime,
        end_date: datetime
    ) -> List[TimeSlot]:
        """
        List bookable time slots of a resource within [start_date, end_date].

        A slot is returned when its whole window lies inside the range, its
        availability flag is set, and its active booking count is strictly below
        its capacity. The count is taken with a correlated subquery at read time.

        Args:
            resource_id: Resource ID
            start_date: Range start (inclusive)
            end_date: Range end (inclusive)

        Returns:
            Slots ordered by start time ascending; empty when nothing matches

        Raises:
            ValidationError: If end_date is before start_date
        """
        start_utc = ensure_utc(start_date)
        end_utc = ensure_utc(end_date)
        if start_utc is None or end_utc is None:
            raise ValidationError("start_date and end_date are required.")
        if end_utc < start_utc:
            raise ValidationError("end_date must not be before start_date.")

        active_count = active_booking_count_subquery()

        with self.database.session() as db:
            slots = db.query(TimeSlot).filter(
                TimeSlot.resource_id == resource_id,
                TimeSlot.is_available == True,  # noqa: E712
                TimeSlot.start_time >= start_utc,
                TimeSlot.end_time <= end_utc,
                active_count < TimeSlot.capacity,
            ).order_by(TimeSlot.start_time.asc()).all()

        self.logger.debug(f"Resource {resource_id}: {len(slots)} available slots between {start_utc} and {end_utc}")
        return slots
