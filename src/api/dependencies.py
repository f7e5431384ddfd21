"""
FastAPI dependencies shared by the API routers.

Services are built once per application and stored on app.state; these
dependencies hand them to the endpoints.
"""

import uuid
from typing import Optional

from fastapi import Header, HTTPException, Request, status

from core.constants import USER_ID_HEADER
from services import (
    AvailabilityService,
    BookingService,
    QueryService,
    ResourceService,
    TimeSlotService,
    UserService,
)


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_availability_service(request: Request) -> AvailabilityService:
    return request.app.state.availability_service


def get_query_service(request: Request) -> QueryService:
    return request.app.state.query_service


def get_resource_service(request: Request) -> ResourceService:
    return request.app.state.resource_service


def get_time_slot_service(request: Request) -> TimeSlotService:
    return request.app.state.time_slot_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER)
) -> uuid.UUID:
    """
    Resolve the caller's user ID.

    The upstream authentication layer is expected to put the authenticated
    user's ID in the X-User-ID header.

    Raises:
        HTTPException: 401 if the header is missing or not a UUID
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user identity",
        )
    try:
        return uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user identity",
        )
