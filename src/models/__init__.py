# Package initialization
# Import all models to ensure relationships are properly established
from .user import User
from .resource import Resource
from .time_slot import TimeSlot
from .booking import Booking

__all__ = [
    "User",
    "Resource",
    "TimeSlot",
    "Booking",
]
