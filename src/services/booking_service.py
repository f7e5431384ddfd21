"""
Booking service: the transactional core of the booking system.

Creates and cancels bookings as single all-or-nothing transactions and keeps
each time slot's cached availability flag in step with its active bookings.

Concurrency: every create/cancel takes an exclusive lock on the time slot row
(SELECT ... FOR UPDATE on PostgreSQL; BEGIN IMMEDIATE on SQLite) before the
active bookings are counted, and holds it until commit. Two requests for the
same slot therefore run their count-then-insert one after the other, and the
active count can never exceed the slot capacity. Lock waits are bounded by
the store's lock timeout; a timed-out request fails with TransientStoreError
and leaves nothing behind.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from core.constants import BOOKING_STATUS_CANCELLED, BOOKING_STATUS_CONFIRMED
from core.database import Database
from core.exceptions import CapacityExceededError, NotFoundError, SlotUnavailableError
from models import Booking, TimeSlot
from services.conflict_service import ConflictCheckResult, ConflictService
from utils.booking_queries import count_active_bookings_for_slot


class BookingService:
    """
    Service class for booking writes.

    Callers may retry a whole operation after a TransientStoreError. Nothing
    here retries internally.
    """

    def __init__(
        self,
        database: Database,
        conflict_service: Optional[ConflictService] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.database = database
        self.logger = logger or logging.getLogger(__name__)
        self.conflict_service = conflict_service or ConflictService(database, logger=self.logger)

    @staticmethod
    def _lock_time_slot(db: Session, time_slot_id: uuid.UUID, resource_id: Optional[uuid.UUID] = None) -> Optional[TimeSlot]:
        """Load a time slot with a row lock held until the transaction ends."""
        query = db.query(TimeSlot).filter(TimeSlot.id == time_slot_id)
        if resource_id is not None:
            query = query.filter(TimeSlot.resource_id == resource_id)
        return query.with_for_update().first()

    def create_booking(
        self,
        user_id: uuid.UUID,
        resource_id: uuid.UUID,
        time_slot_id: uuid.UUID,
        notes: Optional[str] = None
    ) -> Booking:
        """
        Create a confirmed booking for a time slot.

        Steps, all inside one transaction:
        1. Lock the slot, matching both its id and the resource id.
        2. Count active bookings; reject when the slot is full.
        3. Reject when the slot was closed by an administrator.
        4. Insert the booking with total_amount copied from the slot price.
        5. Clear the availability flag if the slot just became full.

        Args:
            user_id: Caller's user ID (resolved by the auth layer)
            resource_id: Resource the slot must belong to
            time_slot_id: Slot to book
            notes: Optional booking notes

        Returns:
            The newly created booking, re-read after commit

        Raises:
            SlotUnavailableError: Slot missing, owned by another resource, or closed
            CapacityExceededError: Slot already holds `capacity` active bookings
            ConstraintViolationError: Store rejected the insert (e.g. unknown user)
            TransientStoreError: Timeout or serialization conflict, safe to retry
        """
        with self.database.transaction() as db:
            time_slot = self._lock_time_slot(db, time_slot_id, resource_id=resource_id)
            if time_slot is None:
                self.logger.info(
                    f"Booking rejected: slot {time_slot_id} not found for resource {resource_id}"
                )
                raise SlotUnavailableError()

            # Recount under the lock; the flag alone may lag behind
            active_count = count_active_bookings_for_slot(db, time_slot.id)
            if active_count >= time_slot.capacity:
                self.logger.info(
                    f"Booking rejected: slot {time_slot_id} is full ({active_count}/{time_slot.capacity})"
                )
                raise CapacityExceededError()

            if not time_slot.is_available:
                self.logger.info(f"Booking rejected: slot {time_slot_id} is marked unavailable")
                raise SlotUnavailableError()

            booking = Booking(
                user_id=user_id,
                resource_id=resource_id,
                time_slot_id=time_slot.id,
                status=BOOKING_STATUS_CONFIRMED,
                notes=notes,
                total_amount=time_slot.price,
            )
            db.add(booking)
            db.flush()  # Surface constraint violations before touching the flag

            if active_count + 1 >= time_slot.capacity:
                time_slot.is_available = False

            booking_id = booking.id
            self.logger.info(
                f"Created booking {booking_id} for user {user_id} on slot {time_slot_id} "
                f"({active_count + 1}/{time_slot.capacity})"
            )

        return self.get_booking(booking_id)

    def cancel_booking(self, booking_id: uuid.UUID, user_id: uuid.UUID) -> Booking:
        """
        Cancel a booking owned by the caller.

        Cancelling an already-cancelled booking succeeds without changing it.

        Args:
            booking_id: Booking ID
            user_id: Caller's user ID; must own the booking

        Returns:
            The cancelled booking

        Raises:
            NotFoundError: Booking does not exist or belongs to someone else
            TransientStoreError: Timeout or serialization conflict, safe to retry
        """
        with self.database.transaction() as db:
            booking = db.query(Booking).filter(
                Booking.id == booking_id,
                Booking.user_id == user_id
            ).with_for_update().first()

            # Missing and not-owned are deliberately indistinguishable
            if booking is None:
                raise NotFoundError("Booking not found.")

            time_slot = self._lock_time_slot(db, booking.time_slot_id)

            if booking.status == BOOKING_STATUS_CANCELLED:
                self.logger.info(f"Booking {booking_id} already cancelled, returning success")
            else:
                booking.status = BOOKING_STATUS_CANCELLED
                db.flush()
                self.logger.info(f"User {user_id} cancelled booking {booking_id}")

            if time_slot is not None:
                remaining = count_active_bookings_for_slot(db, time_slot.id)
                if remaining < time_slot.capacity and not time_slot.is_available:
                    time_slot.is_available = True
                    self.logger.info(
                        f"Slot {time_slot.id} reopened ({remaining}/{time_slot.capacity})"
                    )

        return booking

    def check_conflicts(
        self,
        resource_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime
    ) -> ConflictCheckResult:
        """Advisory overlap check. Read-only; see ConflictService.find_conflicts."""
        return self.conflict_service.find_conflicts(resource_id, start_time, end_time)

    def get_booking(self, booking_id: uuid.UUID) -> Booking:
        with self.database.session() as db:
            booking = db.query(Booking).filter(Booking.id == booking_id).first()
            if booking is None:
                raise NotFoundError("Booking not found.")
            return booking
