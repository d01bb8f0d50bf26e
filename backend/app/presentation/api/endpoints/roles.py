"""Role CRUD and per-role section permission endpoints."""

from fastapi import APIRouter, Depends, status

from app.application.schemas.auth import (
    RolePermissionsResponse,
    RolePermissionsUpdate,
    RoleResponse,
    RoleWrite,
    SectionPermissionSchema,
)
from app.application.services import RoleService
from app.domain.entities import Role, SectionPermission, User
from app.infrastructure.dependencies import get_current_user, get_role_service, require_admin
from app.presentation.api.errors import DOMAIN_ERRORS, http_error

router = APIRouter(prefix="/roles", tags=["Roles"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[RoleResponse])
async def list_roles(service: RoleService = Depends(get_role_service)) -> list[RoleResponse]:
    return [RoleResponse.model_validate(r) for r in await service.list_roles()]


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(role_id: int, service: RoleService = Depends(get_role_service)) -> RoleResponse:
    try:
        role = await service.get_role(role_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return RoleResponse.model_validate(role)


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(data: RoleWrite, service: RoleService = Depends(get_role_service)) -> RoleResponse:
    try:
        role = await service.create_role(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return RoleResponse.model_validate(role)


@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: int,
    data: RoleWrite,
    service: RoleService = Depends(get_role_service),
) -> RoleResponse:
    try:
        role = await service.update_role(role_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return RoleResponse.model_validate(role)


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(role_id: int, service: RoleService = Depends(get_role_service)) -> None:
    """Delete a role; refused while users are still assigned to it."""
    try:
        await service.delete_role(role_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


# ── Permissions ──────────────────────────────────────────────────────

permissions_router = APIRouter(prefix="/role-permissions", tags=["Role Permissions"])


def _permissions_response(role: Role, matrix: list[SectionPermission]) -> RolePermissionsResponse:
    return RolePermissionsResponse(
        role_id=role.id,
        role_name=role.name,
        permissions=[SectionPermissionSchema.model_validate(p) for p in matrix],
    )


@permissions_router.get("/{role_id}", response_model=RolePermissionsResponse)
async def get_permissions(
    role_id: int,
    user: User = Depends(get_current_user),
    service: RoleService = Depends(get_role_service),
) -> RolePermissionsResponse:
    """Section matrix of a role; readable by admins and by members of that role."""
    try:
        role, matrix = await service.get_permissions(role_id, user)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return _permissions_response(role, matrix)


@permissions_router.put(
    "/{role_id}",
    response_model=RolePermissionsResponse,
    dependencies=[Depends(require_admin)],
)
async def save_permissions(
    role_id: int,
    data: RolePermissionsUpdate,
    service: RoleService = Depends(get_role_service),
) -> RolePermissionsResponse:
    try:
        role, matrix = await service.save_permissions(role_id, data.permissions)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return _permissions_response(role, matrix)


@permissions_router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def reset_permissions(role_id: int, service: RoleService = Depends(get_role_service)) -> None:
    """Drop stored permissions so every section falls back to full access."""
    try:
        await service.reset_permissions(role_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
