"""Registered-user endpoints: registration, dashboard views, edit and delete."""

from fastapi import APIRouter, Depends, Query, Response, status

from recordhub.application.schemas.user import (
    UserCreate,
    UserResponse,
    UserStatsResponse,
    UserUpdate,
)
from recordhub.application.services import UserService
from recordhub.config import Settings
from recordhub.infrastructure.dependencies import get_settings_from_app, get_user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """Every registered user in registration order (management table)."""
    users = await service.list_users()
    return [UserResponse.model_validate(u, from_attributes=True) for u in users]


@router.get("/recent", response_model=list[UserResponse])
async def recent_users(
    limit: int | None = Query(None, ge=1, le=100, description="Defaults to RECENT_USERS_LIMIT"),
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings_from_app),
) -> list[UserResponse]:
    """Most recent registrations, newest first."""
    users = await service.recent_users(limit or settings.recent_users_limit)
    return [UserResponse.model_validate(u, from_attributes=True) for u in users]


@router.get("/stats", response_model=UserStatsResponse)
async def user_stats(
    service: UserService = Depends(get_user_service),
) -> UserStatsResponse:
    stats = await service.stats()
    return UserStatsResponse.model_validate(stats, from_attributes=True)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await service.get_user(user_id)
    return UserResponse.model_validate(user, from_attributes=True)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    data: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await service.register(data)
    return UserResponse.model_validate(user, from_attributes=True)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Edit a user; only the fields sent are validated and changed."""
    user = await service.update_user(user_id, data)
    return UserResponse.model_validate(user, from_attributes=True)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
