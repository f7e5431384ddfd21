"""
Booking model representing a user's reservation against one time slot.

Bookings are only created by BookingService.create_booking and only move from
confirmed to cancelled. Cancelled bookings stay in the table but no longer
count against capacity or take part in conflict detection.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import ACTIVE_BOOKING_STATUSES, BOOKING_STATUS_CONFIRMED
from core.database import Base, UTCDateTime


class Booking(Base):
    """Reservation of one time slot by one user."""

    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    """Unique identifier for the booking."""

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    """Reference to the user who made the booking."""

    resource_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True
    )
    """Denormalized reference to the resource. Always equals the slot's resource_id."""

    time_slot_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("time_slots.id", ondelete="CASCADE"), nullable=False, index=True
    )
    """Reference to the booked time slot."""

    status: Mapped[str] = mapped_column(String(20), nullable=False, default=BOOKING_STATUS_CONFIRMED, index=True)
    """Current status. Valid values: 'pending', 'confirmed', 'cancelled'."""

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    """Optional user-provided notes."""

    total_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    """Slot price at creation time. Not recomputed if the slot price changes later."""

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    user = relationship("User", back_populates="bookings")
    resource = relationship("Resource", back_populates="bookings")
    time_slot = relationship("TimeSlot", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'confirmed', 'cancelled')", name="ck_bookings_status"),
    )

    @property
    def is_active(self) -> bool:
        """True if this booking counts against slot capacity."""
        return self.status in ACTIVE_BOOKING_STATUSES

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user_id={self.user_id}, time_slot_id={self.time_slot_id}, status={self.status})>"
