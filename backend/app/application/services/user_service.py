"""Administrative user management."""

import logging
from datetime import date

from app.application.interfaces import PasswordHasher, RoleRepository, UserRepository
from app.application.schemas.auth import UserCreate, UserUpdate
from app.domain.entities import ADMIN_ROLE, Role, User, normalize_email
from app.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidReferenceError,
)

logger = logging.getLogger(__name__)

USER_STATUSES = ("pending", "approved", "inactive")
_REQUIRED_FIELDS = frozenset({"email", "full_name", "role_id", "is_employee", "is_active", "is_approved"})


class UserService:
    def __init__(self, users: UserRepository, roles: RoleRepository, hasher: PasswordHasher):
        self._users = users
        self._roles = roles
        self._hasher = hasher

    async def list_users(self, status: str | None = None) -> list[User]:
        key = (status or "").strip().lower() or None
        if key is not None and key not in USER_STATUSES:
            raise InvalidReferenceError(f"Unknown status filter '{status}'")
        return await self._users.get_all(status=key)

    async def get_user(self, user_id: int) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def list_roles(self) -> list[Role]:
        return await self._roles.get_all()

    async def create_user(self, data: UserCreate, approver_id: int | None = None) -> User:
        email = normalize_email(data.email)
        if await self._users.get_by_email(email) is not None:
            raise DuplicateEntityError("User", "email", email)
        await self._require_role(data.role_id)
        _check_dates(data.date_of_birth, data.employment_start_date, data.employment_end_date)

        user = User(
            email=email,
            password_hash=self._hasher.hash(data.password),
            full_name=data.full_name.strip(),
            role_id=data.role_id,
            first_name=data.first_name,
            last_name=data.last_name,
            middle_name=data.middle_name,
            date_of_birth=data.date_of_birth,
            photo_url=data.photo_url,
            phone_number=data.phone_number,
            is_employee=data.is_employee,
            employment_start_date=data.employment_start_date,
            employment_end_date=data.employment_end_date,
        )
        user.approve(approver_id)
        user.is_active = data.is_active
        created = await self._users.create(user)
        logger.info("Admin created user %s (%s)", created.id, email)
        return created

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True)

        if "email" in changes and changes["email"] is not None:
            email = normalize_email(changes.pop("email"))
            other = await self._users.get_by_email(email)
            if other is not None and other.id != user.id:
                raise DuplicateEntityError("User", "email", email)
            user.email = email
        if changes.get("role_id") is not None:
            await self._require_role(changes["role_id"])
        password = changes.pop("password", None)
        if password:
            user.password_hash = self._hasher.hash(password)

        for name, value in changes.items():
            if value is None and name in _REQUIRED_FIELDS:
                continue
            setattr(user, name, value)

        _check_dates(user.date_of_birth, user.employment_start_date, user.employment_end_date)
        user.touch()
        return await self._users.update(user)

    async def delete_user(self, user_id: int) -> bool:
        await self.get_user(user_id)
        return await self._users.delete(user_id)

    async def approve_user(self, user_id: int, approver_id: int) -> User:
        user = await self.get_user(user_id)
        user.approve(approver_id)
        logger.info("User %s approved by %s", user_id, approver_id)
        return await self._users.update(user)

    async def reject_user(self, user_id: int) -> User:
        user = await self.get_user(user_id)
        user.reject()
        logger.info("User %s rejected", user_id)
        return await self._users.update(user)

    async def ensure_admin(self, email: str, password: str, full_name: str) -> User | None:
        """Create the bootstrap administrator unless that email is taken."""
        email = normalize_email(email)
        if not email or await self._users.get_by_email(email) is not None:
            return None
        role = await self._roles.get_by_name(ADMIN_ROLE)
        if role is None:
            raise InvalidReferenceError(f"Role '{ADMIN_ROLE}' is missing")
        user = User(
            email=email,
            password_hash=self._hasher.hash(password),
            full_name=full_name,
            role_id=role.id,
            is_employee=True,
        )
        user.approve(None)
        created = await self._users.create(user)
        logger.info("Seeded administrator %s", email)
        return created

    async def _require_role(self, role_id: int) -> None:
        if await self._roles.get_by_id(role_id) is None:
            raise InvalidReferenceError(f"Unknown RoleId {role_id}")


def _check_dates(
    date_of_birth: date | None,
    employment_start: date | None,
    employment_end: date | None,
) -> None:
    if date_of_birth is not None and date_of_birth > date.today():
        raise InvalidReferenceError("Date of birth cannot be in the future")
    if employment_start and employment_end and employment_end < employment_start:
        raise InvalidReferenceError("Employment end date precedes the start date")
