"""
Time slot service for administrative slot management.

Publishes new time slots on a resource and lets administrators open or close
a slot's availability flag.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from core.database import Database
from core.exceptions import NotFoundError, ValidationError
from models import Resource, TimeSlot
from utils.validators import validate_capacity, validate_time_window

MAX_PRICE = Decimal("100000000")


class TimeSlotService:
    """Service for time slot administration."""

    def __init__(self, database: Database, logger: Optional[logging.Logger] = None):
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

    def create_time_slot(
        self,
        resource_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime,
        capacity: int = 1,
        price: Optional[Union[Decimal, float, str]] = None
    ) -> TimeSlot:
        """
        Publish a new time slot on a resource.

        Input is validated before anything reaches the store.

        Args:
            resource_id: Owning resource ID
            start_time: Slot start
            end_time: Slot end, strictly after start_time
            capacity: Maximum active bookings (positive)
            price: Optional price, non-negative

        Returns:
            The created time slot, available by default

        Raises:
            ValidationError: Bad window, capacity or price
            NotFoundError: Resource does not exist
        """
        start_utc, end_utc = validate_time_window(start_time, end_time)
        validate_capacity(capacity)
        slot_price = self._parse_price(price)

        with self.database.transaction() as db:
            resource = db.query(Resource).filter(Resource.id == resource_id).first()
            if resource is None:
                raise NotFoundError("Resource not found.")

            if capacity > resource.capacity:
                # Allowed, but usually a data entry mistake
                self.logger.warning(
                    f"Slot capacity {capacity} exceeds resource {resource_id} capacity {resource.capacity}"
                )

            time_slot = TimeSlot(
                resource_id=resource_id,
                start_time=start_utc,
                end_time=end_utc,
                capacity=capacity,
                is_available=True,
                price=slot_price,
            )
            db.add(time_slot)
            db.flush()
            self.logger.info(f"Created time slot {time_slot.id} on resource {resource_id}")

        return time_slot

    def set_availability(self, time_slot_id: uuid.UUID, is_available: bool) -> TimeSlot:
        """
        Set a slot's availability flag.

        Opening a full slot does not let bookings past capacity; create_booking
        always recounts.

        Raises:
            NotFoundError: Slot does not exist
        """
        with self.database.transaction() as db:
            time_slot = db.query(TimeSlot).filter(TimeSlot.id == time_slot_id).with_for_update().first()
            if time_slot is None:
                raise NotFoundError("Time slot not found.")
            time_slot.is_available = is_available
            self.logger.info(f"Time slot {time_slot_id} availability set to {is_available}")

        return time_slot

    def get_time_slot(self, time_slot_id: uuid.UUID) -> TimeSlot:
        with self.database.session() as db:
            time_slot = db.query(TimeSlot).filter(TimeSlot.id == time_slot_id).first()
            if time_slot is None:
                raise NotFoundError("Time slot not found.")
            return time_slot

    @staticmethod
    def _parse_price(price: Optional[Union[Decimal, float, str]]) -> Optional[Decimal]:
        if price is None:
            return None
        try:
            value = Decimal(str(price))
        except ArithmeticError:
            raise ValidationError("Price must be a number.")
        if not value.is_finite() or value < 0:
            raise ValidationError("Price must be a non-negative number.")
        try:
            value = value.quantize(Decimal("0.01"))
        except InvalidOperation:
            raise ValidationError(f"Price must be less than {MAX_PRICE}.")
        # Numeric(10, 2) holds at most 8 integer digits
        if value >= MAX_PRICE:
            raise ValidationError(f"Price must be less than {MAX_PRICE}.")
        return value
