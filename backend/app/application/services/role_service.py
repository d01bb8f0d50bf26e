"""Roles and their per-section permission matrix."""

import logging

from app.application.interfaces import RoleRepository, UserRepository
from app.application.schemas.auth import RoleWrite, SectionPermissionSchema
from app.domain.entities import DEFAULT_ROLES, PERMISSION_SECTIONS, Role, SectionPermission, User
from app.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidReferenceError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)


class RoleService:
    def __init__(self, roles: RoleRepository, users: UserRepository):
        self._roles = roles
        self._users = users

    async def list_roles(self) -> list[Role]:
        return await self._roles.get_all()

    async def get_role(self, role_id: int) -> Role:
        role = await self._roles.get_by_id(role_id)
        if role is None:
            raise EntityNotFoundError("Role", role_id)
        return role

    async def create_role(self, data: RoleWrite) -> Role:
        name = data.name.strip().lower()
        if await self._roles.get_by_name(name) is not None:
            raise DuplicateEntityError("Role", "name", name)
        return await self._roles.create(Role(name=name, description=data.description))

    async def update_role(self, role_id: int, data: RoleWrite) -> Role:
        role = await self.get_role(role_id)
        name = data.name.strip().lower()
        other = await self._roles.get_by_name(name)
        if other is not None and other.id != role.id:
            raise DuplicateEntityError("Role", "name", name)
        role.name = name
        role.description = data.description
        return await self._roles.update(role)

    async def delete_role(self, role_id: int) -> bool:
        await self.get_role(role_id)
        assigned = await self._users.count_by_role(role_id)
        if assigned:
            raise InvalidReferenceError(f"Role is assigned to {assigned} user(s)")
        await self._roles.delete_permissions(role_id)
        return await self._roles.delete(role_id)

    async def ensure_default_roles(self) -> None:
        for name, description in DEFAULT_ROLES.items():
            if await self._roles.get_by_name(name) is None:
                await self._roles.create(Role(name=name, description=description))
                logger.info("Seeded role '%s'", name)

    async def get_permissions(self, role_id: int, caller: User) -> tuple[Role, list[SectionPermission]]:
        """Full section matrix of a role; sections never saved default to all-true."""
        if not caller.is_admin and caller.role_id != role_id:
            raise PermissionDeniedError("Insufficient permissions")
        role = await self.get_role(role_id)
        stored = {p.section: p for p in await self._roles.get_permissions(role_id)}
        return role, [stored.get(section) or SectionPermission(section) for section in PERMISSION_SECTIONS]

    async def save_permissions(
        self, role_id: int, permissions: list[SectionPermissionSchema]
    ) -> tuple[Role, list[SectionPermission]]:
        role = await self.get_role(role_id)
        unknown = sorted({p.section for p in permissions} - set(PERMISSION_SECTIONS))
        if unknown:
            raise InvalidReferenceError(f"Unknown sections: {unknown}")

        provided = {p.section: p for p in permissions}
        matrix = []
        for section in PERMISSION_SECTIONS:
            item = provided.get(section)
            matrix.append(
                SectionPermission(**item.model_dump()) if item else SectionPermission(section)
            )
        await self._roles.save_permissions(role_id, matrix)
        logger.info("Saved permissions for role %s", role.name)
        return role, matrix

    async def reset_permissions(self, role_id: int) -> int:
        await self.get_role(role_id)
        return await self._roles.delete_permissions(role_id)
