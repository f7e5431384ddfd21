"""
User API endpoints.
"""

import uuid

from fastapi import APIRouter, Depends, status

from api.dependencies import get_user_service
from api.responses import UserCreateRequest, UserResponse
from services import UserService

router = APIRouter()


@router.post("", summary="Create a user", status_code=status.HTTP_201_CREATED)
def create_user(
    request: UserCreateRequest,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = user_service.create_user(
        email=request.email,
        name=request.name,
        role=request.role,
        phone=request.phone,
    )
    return UserResponse.model_validate(user)


@router.get("/{user_id}", summary="Get a user by ID")
def get_user(
    user_id: uuid.UUID,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    return UserResponse.model_validate(user_service.get_user(user_id))
