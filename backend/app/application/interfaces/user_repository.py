"""Abstract repository interfaces (ports) for users, roles and permissions."""

from abc import ABC, abstractmethod

from app.domain.entities import Role, SectionPermission, User


class UserRepository(ABC):
    """Port for user persistence. Returned users carry ``role_name``."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Lookup by normalized (lower-case) email."""
        ...

    @abstractmethod
    async def get_all(self, *, status: str | None = None) -> list[User]:
        """All users, optionally filtered by ``pending``/``approved``/``inactive``."""
        ...

    @abstractmethod
    async def list_responsibles(self) -> list[User]:
        """Active, approved employees."""
        ...

    @abstractmethod
    async def count_by_role(self, role_id: int) -> int:
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        ...

    @abstractmethod
    async def update(self, user: User) -> User:
        ...

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        ...


class RoleRepository(ABC):
    """Port for roles and their per-section permission matrix."""

    @abstractmethod
    async def get_by_id(self, role_id: int) -> Role | None:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Role | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Role]:
        ...

    @abstractmethod
    async def create(self, role: Role) -> Role:
        ...

    @abstractmethod
    async def update(self, role: Role) -> Role:
        ...

    @abstractmethod
    async def delete(self, role_id: int) -> bool:
        ...

    @abstractmethod
    async def get_permissions(self, role_id: int) -> list[SectionPermission]:
        ...

    @abstractmethod
    async def save_permissions(self, role_id: int, permissions: list[SectionPermission]) -> None:
        """Upsert one row per section."""
        ...

    @abstractmethod
    async def delete_permissions(self, role_id: int) -> int:
        ...
