"""Concrete repository implementations for users, roles and permissions."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import RoleRepository, UserRepository
from app.domain.entities import Role, SectionPermission, User
from app.infrastructure.database.models import RoleModel, RolePermissionModel, UserModel

_PROFILE_FIELDS = (
    "email",
    "password_hash",
    "full_name",
    "first_name",
    "last_name",
    "middle_name",
    "date_of_birth",
    "photo_url",
    "phone_number",
    "is_employee",
    "employment_start_date",
    "employment_end_date",
    "role_id",
    "is_active",
    "is_approved",
    "approved_at",
    "approved_by_user_id",
    "updated_at",
)


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, row) -> User:
        model, role_name = row
        user = User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            full_name=model.full_name,
            role_id=model.role_id,
            role_name=role_name,
            created_at=model.created_at,
        )
        for name in _PROFILE_FIELDS:
            setattr(user, name, getattr(model, name))
        return user

    @staticmethod
    def _select():
        return select(UserModel, RoleModel.name).join(RoleModel, RoleModel.id == UserModel.role_id)

    async def get_by_id(self, user_id: int) -> User | None:
        result = await self._session.execute(self._select().where(UserModel.id == user_id))
        row = result.first()
        return self._to_entity(row) if row else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            self._select().where(func.lower(UserModel.email) == email.strip().lower())
        )
        row = result.first()
        return self._to_entity(row) if row else None

    async def get_all(self, *, status: str | None = None) -> list[User]:
        stmt = self._select()
        key = (status or "").strip().lower()
        if key == "pending":
            stmt = stmt.where(UserModel.is_approved.is_(False), UserModel.is_active.is_(True))
        elif key == "approved":
            stmt = stmt.where(UserModel.is_approved.is_(True), UserModel.is_active.is_(True))
        elif key == "inactive":
            stmt = stmt.where(UserModel.is_active.is_(False))
        stmt = stmt.order_by(UserModel.created_at.desc(), UserModel.id.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.all()]

    async def list_responsibles(self) -> list[User]:
        result = await self._session.execute(
            self._select()
            .where(
                UserModel.is_active.is_(True),
                UserModel.is_approved.is_(True),
                UserModel.is_employee.is_(True),
            )
            .order_by(UserModel.full_name.asc())
        )
        return [self._to_entity(row) for row in result.all()]

    async def count_by_role(self, role_id: int) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(UserModel).where(UserModel.role_id == role_id)
        )
        return result.scalar_one()

    async def create(self, user: User) -> User:
        model = UserModel(created_at=user.created_at)
        for name in _PROFILE_FIELDS:
            setattr(model, name, getattr(user, name))
        self._session.add(model)
        await self._session.flush()
        return await self.get_by_id(model.id)

    async def update(self, user: User) -> User:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            raise ValueError(f"User {user.id} not found in database")
        for name in _PROFILE_FIELDS:
            setattr(model, name, getattr(user, name))
        await self._session.flush()
        return await self.get_by_id(model.id)

    async def delete(self, user_id: int) -> bool:
        model = await self._session.get(UserModel, user_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True


class SQLAlchemyRoleRepository(RoleRepository):
    """Implements the RoleRepository port, permissions included."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: RoleModel) -> Role:
        return Role(
            id=model.id,
            name=model.name,
            description=model.description,
            created_at=model.created_at,
        )

    async def get_by_id(self, role_id: int) -> Role | None:
        model = await self._session.get(RoleModel, role_id)
        return self._to_entity(model) if model else None

    async def get_by_name(self, name: str) -> Role | None:
        result = await self._session.execute(
            select(RoleModel).where(func.lower(RoleModel.name) == name.strip().lower())
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Role]:
        result = await self._session.execute(select(RoleModel).order_by(RoleModel.name))
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, role: Role) -> Role:
        model = RoleModel(name=role.name, description=role.description, created_at=role.created_at)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, role: Role) -> Role:
        model = await self._session.get(RoleModel, role.id)
        if model is None:
            raise ValueError(f"Role {role.id} not found in database")
        model.name = role.name
        model.description = role.description
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, role_id: int) -> bool:
        model = await self._session.get(RoleModel, role_id)
        if model is None:
            return False
        await self.delete_permissions(role_id)
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def get_permissions(self, role_id: int) -> list[SectionPermission]:
        result = await self._session.execute(
            select(RolePermissionModel).where(RolePermissionModel.role_id == role_id)
        )
        return [
            SectionPermission(
                section=row.section,
                can_view=row.can_view,
                can_create=row.can_create,
                can_edit=row.can_edit,
                can_delete=row.can_delete,
                can_export=row.can_export,
                can_view_analytics=row.can_view_analytics,
            )
            for row in result.scalars().all()
        ]

    async def save_permissions(self, role_id: int, permissions: list[SectionPermission]) -> None:
        result = await self._session.execute(
            select(RolePermissionModel).where(RolePermissionModel.role_id == role_id)
        )
        existing = {row.section: row for row in result.scalars().all()}
        for permission in permissions:
            model = existing.get(permission.section)
            if model is None:
                model = RolePermissionModel(role_id=role_id, section=permission.section)
                self._session.add(model)
            model.can_view = permission.can_view
            model.can_create = permission.can_create
            model.can_edit = permission.can_edit
            model.can_delete = permission.can_delete
            model.can_export = permission.can_export
            model.can_view_analytics = permission.can_view_analytics
        await self._session.flush()

    async def delete_permissions(self, role_id: int) -> int:
        result = await self._session.execute(
            delete(RolePermissionModel).where(RolePermissionModel.role_id == role_id)
        )
        return result.rowcount or 0
