"""
Shared request and response models for API endpoints.

Response models read straight from ORM objects (from_attributes), so the
endpoints stay thin.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.constants import MAX_NOTES_LENGTH, MAX_STRING_LENGTH


class ResourceResponse(BaseModel):
    """Response model for a resource."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    category: str
    description: Optional[str] = None
    location: Optional[str] = None
    capacity: int
    operating_hours: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class ResourceCreateRequest(BaseModel):
    """Request model for creating a resource."""
    name: str = Field(..., min_length=1, max_length=MAX_STRING_LENGTH)
    category: str
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=MAX_STRING_LENGTH)
    capacity: int = Field(1, ge=1)
    operating_hours: Optional[Dict[str, Any]] = None


class ResourceUpdateRequest(BaseModel):
    """
    Request model for patching a resource.

    Fields absent from the request body are left unchanged.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=MAX_STRING_LENGTH)
    category: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=MAX_STRING_LENGTH)
    capacity: Optional[int] = Field(None, ge=1)
    operating_hours: Optional[Dict[str, Any]] = None


class TimeSlotResponse(BaseModel):
    """Response model for a time slot."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    resource_id: uuid.UUID
    start_time: datetime
    end_time: datetime
    capacity: int
    is_available: bool
    price: Optional[Decimal] = None
    created_at: datetime


class TimeSlotCreateRequest(BaseModel):
    """Request model for creating a time slot."""
    start_time: datetime
    end_time: datetime
    capacity: int = 1
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class TimeSlotAvailabilityRequest(BaseModel):
    """Request model for opening or closing a time slot."""
    is_available: bool


class AvailabilityResponse(BaseModel):
    """Response model for an availability query."""
    time_slots: List[TimeSlotResponse]


class BookingResponse(BaseModel):
    """Response model for a booking."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    resource_id: uuid.UUID
    time_slot_id: uuid.UUID
    status: str
    notes: Optional[str] = None
    total_amount: Optional[Decimal] = None
    created_at: datetime
    updated_at: datetime


class BookingCreateRequest(BaseModel):
    """Request model for creating a booking."""
    resource_id: uuid.UUID
    time_slot_id: uuid.UUID
    notes: Optional[str] = Field(None, max_length=MAX_NOTES_LENGTH)


class ConflictCheckRequest(BaseModel):
    """Request model for an advisory conflict check."""
    resource_id: uuid.UUID
    start_time: datetime
    end_time: datetime


class ConflictCheckResponse(BaseModel):
    """Response model for an advisory conflict check."""
    has_conflicts: bool
    conflicting_booking_ids: List[uuid.UUID] = []


class UserCreateRequest(BaseModel):
    """Request model for creating a user."""
    email: str = Field(..., min_length=3, max_length=MAX_STRING_LENGTH)
    name: str = Field(..., min_length=1, max_length=MAX_STRING_LENGTH)
    role: str = "customer"
    phone: Optional[str] = Field(None, max_length=50)


class UserResponse(BaseModel):
    """Response model for a user."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: str
    role: str
    phone: Optional[str] = None
    created_at: datetime


class ErrorResponse(BaseModel):
    """Body of every error response."""
    detail: str
    type: str
