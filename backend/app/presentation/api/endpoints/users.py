"""Administrative user management endpoints."""

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas.auth import RoleResponse, UserCreate, UserResponse, UserUpdate
from app.application.services import UserService
from app.domain.entities import User
from app.infrastructure.dependencies import get_user_service, require_admin
from app.presentation.api.errors import DOMAIN_ERRORS, http_error

router = APIRouter(prefix="/users", tags=["Users"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[UserResponse])
async def list_users(
    user_status: str | None = Query(None, alias="status", description="pending, approved or inactive"),
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    try:
        users = await service.list_users(user_status)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/roles", response_model=list[RoleResponse])
async def list_roles(service: UserService = Depends(get_user_service)) -> list[RoleResponse]:
    return [RoleResponse.model_validate(r) for r in await service.list_roles()]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await service.get_user(user_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return UserResponse.model_validate(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a user that is approved immediately."""
    try:
        user = await service.create_user(data, approver_id=admin.id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Partial update; omitted fields keep their value."""
    try:
        user = await service.update_user(user_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> None:
    try:
        await service.delete_user(user_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.post("/{user_id}/approve", response_model=UserResponse)
async def approve_user(
    user_id: int,
    admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await service.approve_user(user_id, admin.id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return UserResponse.model_validate(user)


@router.post("/{user_id}/reject", response_model=UserResponse)
async def reject_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await service.reject_user(user_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return UserResponse.model_validate(user)
