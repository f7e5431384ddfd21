"""
Query service for read-only lookups used by the API layer.

Listing operations return empty lists rather than errors when nothing
matches. Singular lookups raise NotFoundError.
"""

import logging
import uuid
from typing import List, Optional

from core.database import Database
from core.exceptions import NotFoundError
from models import Booking, Resource, TimeSlot
from utils.validators import validate_category


class QueryService:
    """Read-only lookups for bookings, resources and time slots."""

    def __init__(self, database: Database, logger: Optional[logging.Logger] = None):
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

    def list_user_bookings(self, user_id: uuid.UUID) -> List[Booking]:
        """List all bookings of a user, newest first."""
        with self.database.session() as db:
            return db.query(Booking).filter(
                Booking.user_id == user_id
            ).order_by(Booking.created_at.desc()).all()

    def get_booking(self, booking_id: uuid.UUID) -> Booking:
        with self.database.session() as db:
            booking = db.query(Booking).filter(Booking.id == booking_id).first()
            if booking is None:
                raise NotFoundError("Booking not found.")
            return booking

    def list_resources(self, category: Optional[str] = None) -> List[Resource]:
        """
        List resources.

        Args:
            category: Optional category filter ('doctor', 'court', 'facility')

        Returns:
            All resources newest first, or the resources of one category by name
        """
        with self.database.session() as db:
            query = db.query(Resource)
            if category is None:
                return query.order_by(Resource.created_at.desc()).all()
            validate_category(category)
            return query.filter(Resource.category == category).order_by(Resource.name.asc()).all()

    def get_resource(self, resource_id: uuid.UUID) -> Resource:
        with self.database.session() as db:
            resource = db.query(Resource).filter(Resource.id == resource_id).first()
            if resource is None:
                raise NotFoundError("Resource not found.")
            return resource

    def list_resource_time_slots(self, resource_id: uuid.UUID) -> List[TimeSlot]:
        """List every time slot of a resource, available or not, by start time."""
        with self.database.session() as db:
            return db.query(TimeSlot).filter(
                TimeSlot.resource_id == resource_id
            ).order_by(TimeSlot.start_time.asc()).all()
