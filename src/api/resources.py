"""
Resource API endpoints.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_query_service, get_resource_service
from api.responses import (
    ResourceCreateRequest,
    ResourceResponse,
    ResourceUpdateRequest,
    TimeSlotResponse,
)
from services import QueryService, ResourcePatch, ResourceService

router = APIRouter()


@router.get("", summary="List resources")
def list_resources(
    category: Optional[str] = Query(None, description="doctor, court or facility"),
    query_service: QueryService = Depends(get_query_service)
) -> List[ResourceResponse]:
    resources = query_service.list_resources(category=category)
    return [ResourceResponse.model_validate(resource) for resource in resources]


@router.post("", summary="Create a resource", status_code=status.HTTP_201_CREATED)
def create_resource(
    request: ResourceCreateRequest,
    resource_service: ResourceService = Depends(get_resource_service)
) -> ResourceResponse:
    resource = resource_service.create_resource(
        name=request.name,
        category=request.category,
        capacity=request.capacity,
        description=request.description,
        location=request.location,
        operating_hours=request.operating_hours,
    )
    return ResourceResponse.model_validate(resource)


@router.get("/{resource_id}", summary="Get a resource by ID")
def get_resource(
    resource_id: uuid.UUID,
    query_service: QueryService = Depends(get_query_service)
) -> ResourceResponse:
    return ResourceResponse.model_validate(query_service.get_resource(resource_id))


@router.get("/{resource_id}/time-slots", summary="List all time slots of a resource")
def list_resource_time_slots(
    resource_id: uuid.UUID,
    query_service: QueryService = Depends(get_query_service)
) -> List[TimeSlotResponse]:
    query_service.get_resource(resource_id)
    slots = query_service.list_resource_time_slots(resource_id)
    return [TimeSlotResponse.model_validate(slot) for slot in slots]


@router.put("/{resource_id}", summary="Update a resource")
def update_resource(
    resource_id: uuid.UUID,
    request: ResourceUpdateRequest,
    resource_service: ResourceService = Depends(get_resource_service)
) -> ResourceResponse:
    """Only the fields present in the request body are changed."""
    patch = ResourcePatch(**request.model_dump(exclude_unset=True))
    resource = resource_service.update_resource(resource_id, patch)
    return ResourceResponse.model_validate(resource)


@router.delete(
    "/{resource_id}",
    summary="Delete a resource",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_resource(
    resource_id: uuid.UUID,
    resource_service: ResourceService = Depends(get_resource_service)
) -> Response:
    resource_service.delete_resource(resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
