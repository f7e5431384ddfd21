"""
TimeSlot model representing a bookable window on a resource.

A slot has its own capacity and optional price. Its availability flag is a
cached approximation of "active bookings < capacity"; the booking service keeps
it in step on every create and cancel, but capacity decisions always recount.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base, UTCDateTime


class TimeSlot(Base):
    """Time window [start_time, end_time) on a resource."""

    __tablename__ = "time_slots"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    """Unique identifier for the time slot."""

    resource_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False
    )
    """Reference to the resource that owns this slot."""

    start_time: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    """Start instant (inclusive)."""

    end_time: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    """End instant (exclusive). Always strictly after start_time."""

    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    """Maximum number of active bookings this slot accepts."""

    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    """Cached flag: True means at least one more booking may currently be accepted."""

    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    """Optional price, snapshotted onto bookings when they are created."""

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    resource = relationship("Resource", back_populates="time_slots")
    bookings = relationship("Booking", back_populates="time_slot", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="valid_time_range"),
        CheckConstraint("capacity > 0", name="ck_time_slots_capacity_positive"),
        Index("idx_time_slots_resource_time", "resource_id", "start_time", "end_time"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimeSlot(id={self.id}, resource_id={self.resource_id}, "
            f"start={self.start_time}, end={self.end_time}, capacity={self.capacity})>"
        )
