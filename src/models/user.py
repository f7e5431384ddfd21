"""
User model representing people who make bookings.

Authentication is handled outside this service; a user row only exists so that
bookings can reference the person who made them.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import DEFAULT_USER_ROLE, MAX_STRING_LENGTH
from core.database import Base, UTCDateTime


class User(Base):
    """User entity referenced by bookings."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    """Unique identifier for the user."""

    email: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH), unique=True, nullable=False)
    """Email address. Unique across users."""

    name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH), nullable=False)
    """Display name."""

    role: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_USER_ROLE)
    """Role: 'admin', 'provider' or 'customer'."""

    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    """Optional phone number."""

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    bookings = relationship("Booking", back_populates="user")
    """Bookings made by this user."""

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'provider', 'customer')", name="ck_users_role"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
