"""
Resource model representing a bookable entity.

Resources are the fixed catalog of things users can book: doctors, courts and
facilities. Each resource publishes time slots; changes to its capacity or
operating hours do not touch slots that were already issued.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, CheckConstraint, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import MAX_STRING_LENGTH
from core.database import Base, UTCDateTime


class Resource(Base):
    """
    Resource entity representing a doctor, court or facility.

    Examples: "Court A", "Dr. Smith", "Conference Hall"
    """

    __tablename__ = "resources"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    """Unique, immutable identifier for the resource."""

    name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH), nullable=False)
    """Display name of the resource."""

    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    """Category of the resource: 'doctor', 'court' or 'facility'."""

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    """Optional free-text description."""

    location: Mapped[Optional[str]] = mapped_column(String(MAX_STRING_LENGTH), nullable=True)
    """Optional location description."""

    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    """Maximum concurrent bookings a single time slot of this resource may support."""

    operating_hours: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    """
    Structured operating hours, keyed by weekday name.

    Example: {"monday": {"open": "08:00", "close": "18:00"}}
    """

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    time_slots = relationship("TimeSlot", back_populates="resource", cascade="all, delete-orphan", passive_deletes=True)
    """Time slots published for this resource."""

    bookings = relationship("Booking", back_populates="resource", passive_deletes=True)
    """Bookings made against this resource."""

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_resources_capacity_positive"),
        CheckConstraint("category IN ('doctor', 'court', 'facility')", name="ck_resources_category"),
    )

    def __repr__(self) -> str:
        return f"<Resource(id={self.id}, name='{self.name}', category='{self.category}')>"
