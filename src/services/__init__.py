"""
Services package for booking business logic.

Each service is constructed with the Database handle (and optionally a
logger) and opens its own sessions and transactions.
"""

from .availability_service import AvailabilityService
from .booking_service import BookingService
from .conflict_service import ConflictCheckResult, ConflictService
from .query_service import QueryService
from .resource_service import ResourcePatch, ResourceService
from .time_slot_service import TimeSlotService
from .user_service import UserService

__all__ = [
    "AvailabilityService",
    "BookingService",
    "ConflictCheckResult",
    "ConflictService",
    "QueryService",
    "ResourcePatch",
    "ResourceService",
    "TimeSlotService",
    "UserService",
]
