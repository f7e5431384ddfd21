"""
Booking API endpoints.

Endpoints are plain (sync) functions so FastAPI runs each request on its own
worker thread; concurrent requests coordinate only through the store.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_booking_service, get_current_user_id, get_query_service
from api.responses import (
    BookingCreateRequest,
    BookingResponse,
    ConflictCheckRequest,
    ConflictCheckResponse,
)
from services import BookingService, QueryService

router = APIRouter()


@router.get("", summary="List the caller's bookings")
def list_user_bookings(
    user_id: uuid.UUID = Depends(get_current_user_id),
    query_service: QueryService = Depends(get_query_service)
) -> List[BookingResponse]:
    """Get all bookings of the current user, newest first."""
    bookings = query_service.list_user_bookings(user_id)
    return [BookingResponse.model_validate(booking) for booking in bookings]


@router.post("", summary="Create a booking", status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreateRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service)
) -> BookingResponse:
    """Book a time slot for the current user."""
    booking = booking_service.create_booking(
        user_id=user_id,
        resource_id=request.resource_id,
        time_slot_id=request.time_slot_id,
        notes=request.notes,
    )
    return BookingResponse.model_validate(booking)


@router.post("/check-conflicts", summary="Check a proposed window for conflicts")
def check_conflicts(
    request: ConflictCheckRequest,
    booking_service: BookingService = Depends(get_booking_service)
) -> ConflictCheckResponse:
    """Advisory check; does not reserve anything."""
    result = booking_service.check_conflicts(request.resource_id, request.start_time, request.end_time)
    return ConflictCheckResponse(
        has_conflicts=result.has_conflicts,
        conflicting_booking_ids=result.conflicting_booking_ids,
    )


@router.get("/{booking_id}", summary="Get a booking by ID")
def get_booking(
    booking_id: uuid.UUID,
    query_service: QueryService = Depends(get_query_service)
) -> BookingResponse:
    return BookingResponse.model_validate(query_service.get_booking(booking_id))


@router.put(
    "/{booking_id}/cancel",
    summary="Cancel a booking",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def cancel_booking(
    booking_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    booking_service: BookingService = Depends(get_booking_service)
) -> Response:
    """Cancel one of the current user's bookings."""
    booking_service.cancel_booking(booking_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
