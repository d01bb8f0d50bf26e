"""Abstract repository interface (port) for the activity audit log."""

from abc import ABC, abstractmethod

from app.domain.entities import ActivityQuery, Page, PageRequest, UserActivityLog


class UserActivityRepository(ABC):
    """Port for the append-only activity log."""

    @abstractmethod
    async def create(self, entry: UserActivityLog) -> UserActivityLog:
        ...

    @abstractmethod
    async def search(self, query: ActivityQuery, page: PageRequest) -> Page[UserActivityLog]:
        """Entries newest first."""
        ...

    @abstractmethod
    async def distinct_values(self) -> dict[str, list[str]]:
        """Distinct categories, actions, sections, methods and statuses."""
        ...

    @abstractmethod
    async def actors(self) -> list[dict]:
        """Distinct ``{userId, email, fullName}`` of logged users."""
        ...
