"""
Resource service for administrative catalog management.

Creates, patches and deletes resources. Changing a resource's capacity or
operating hours never rewrites time slots that were already published.
"""

import logging
import uuid
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

from core.database import Database
from core.exceptions import NotFoundError
from core.sentinels import MISSING, MissingType
from models import Resource
from utils.validators import (
    validate_capacity,
    validate_category,
    validate_name,
    validate_operating_hours,
)


@dataclass(frozen=True)
class ResourcePatch:
    """
    Partial update for a resource.

    Only the fields listed here may change. A field left as MISSING is not
    touched; a nullable field set to None is cleared.
    """

    name: Union[str, MissingType] = MISSING
    category: Union[str, MissingType] = MISSING
    description: Union[Optional[str], MissingType] = MISSING
    location: Union[Optional[str], MissingType] = MISSING
    capacity: Union[int, MissingType] = MISSING
    operating_hours: Union[Optional[Dict[str, Any]], MissingType] = MISSING

    def provided(self) -> Dict[str, Any]:
        """Return the fields that were set, by name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not MISSING
        }


class ResourceService:
    """Service for resource administration."""

    def __init__(self, database: Database, logger: Optional[logging.Logger] = None):
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

    def create_resource(
        self,
        name: str,
        category: str,
        capacity: int = 1,
        description: Optional[str] = None,
        location: Optional[str] = None,
        operating_hours: Optional[Dict[str, Any]] = None
    ) -> Resource:
        """
        Create a new resource.

        Raises:
            ValidationError: Empty name, unknown category, non-positive capacity
                or malformed operating hours
        """
        resource = Resource(
            name=validate_name(name),
            category=validate_category(category),
            capacity=validate_capacity(capacity),
            description=description,
            location=location,
            operating_hours=validate_operating_hours(operating_hours),
        )

        with self.database.transaction() as db:
            db.add(resource)
            db.flush()
            self.logger.info(f"Created resource {resource.id} ({resource.category}: {resource.name})")

        return resource

    def update_resource(self, resource_id: uuid.UUID, patch: ResourcePatch) -> Resource:
        """
        Apply a partial update to a resource.

        Raises:
            NotFoundError: Resource does not exist
            ValidationError: A provided field is invalid
        """
        changes = patch.provided()
        if "name" in changes:
            changes["name"] = validate_name(changes["name"])
        if "category" in changes:
            changes["category"] = validate_category(changes["category"])
        if "capacity" in changes:
            changes["capacity"] = validate_capacity(changes["capacity"])
        if "operating_hours" in changes:
            changes["operating_hours"] = validate_operating_hours(changes["operating_hours"])

        with self.database.transaction() as db:
            resource = db.query(Resource).filter(Resource.id == resource_id).with_for_update().first()
            if resource is None:
                raise NotFoundError("Resource not found.")

            for field_name, value in changes.items():
                setattr(resource, field_name, value)

            if changes:
                self.logger.info(f"Updated resource {resource_id}: {', '.join(sorted(changes))}")

        return resource

    def delete_resource(self, resource_id: uuid.UUID) -> None:
        """
        Delete a resource together with its time slots and bookings.

        Raises:
            NotFoundError: Resource does not exist
        """
        with self.database.transaction() as db:
            resource = db.query(Resource).filter(Resource.id == resource_id).first()
            if resource is None:
                raise NotFoundError("Resource not found.")
            db.delete(resource)
            self.logger.info(f"Deleted resource {resource_id}")
