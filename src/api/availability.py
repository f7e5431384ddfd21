"""
Availability API endpoints: slot availability reads and slot administration.
"""

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_availability_service, get_time_slot_service
from api.responses import (
    AvailabilityResponse,
    TimeSlotAvailabilityRequest,
    TimeSlotCreateRequest,
    TimeSlotResponse,
)
from services import AvailabilityService, TimeSlotService

router = APIRouter()


@router.get("/{resource_id}", summary="Get available time slots for a resource")
def get_availability(
    resource_id: uuid.UUID,
    start_date: datetime = Query(..., description="Range start, RFC 3339"),
    end_date: datetime = Query(..., description="Range end, RFC 3339"),
    availability_service: AvailabilityService = Depends(get_availability_service)
) -> AvailabilityResponse:
    """Slots of the resource within the range that can still take a booking."""
    slots = availability_service.get_available_slots(resource_id, start_date, end_date)
    return AvailabilityResponse(
        time_slots=[TimeSlotResponse.model_validate(slot) for slot in slots]
    )


@router.post("/{resource_id}", summary="Create a time slot", status_code=status.HTTP_201_CREATED)
def create_time_slot(
    resource_id: uuid.UUID,
    request: TimeSlotCreateRequest,
    time_slot_service: TimeSlotService = Depends(get_time_slot_service)
) -> TimeSlotResponse:
    time_slot = time_slot_service.create_time_slot(
        resource_id=resource_id,
        start_time=request.start_time,
        end_time=request.end_time,
        capacity=request.capacity,
        price=request.price,
    )
    return TimeSlotResponse.model_validate(time_slot)


@router.put("/slot/{time_slot_id}/availability", summary="Open or close a time slot")
def set_time_slot_availability(
    time_slot_id: uuid.UUID,
    request: TimeSlotAvailabilityRequest,
    time_slot_service: TimeSlotService = Depends(get_time_slot_service)
) -> TimeSlotResponse:
    time_slot = time_slot_service.set_availability(time_slot_id, request.is_available)
    return TimeSlotResponse.model_validate(time_slot)


@router.get("/slot/{time_slot_id}", summary="Get a time slot by ID")
def get_time_slot(
    time_slot_id: uuid.UUID,
    time_slot_service: TimeSlotService = Depends(get_time_slot_service)
) -> TimeSlotResponse:
    return TimeSlotResponse.model_validate(time_slot_service.get_time_slot(time_slot_id))
