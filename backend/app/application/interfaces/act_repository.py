"""Abstract repository interface (port) for acts."""

from abc import ABC, abstractmethod

from app.domain.entities import Act, ActQuery, Page, PageRequest


class ActRepository(ABC):
    """Port for act persistence."""

    @abstractmethod
    async def get_by_id(self, act_id: int) -> Act | None:
        ...

    @abstractmethod
    async def search(self, query: ActQuery, page: PageRequest | None = None) -> Page[Act]:
        ...

    @abstractmethod
    async def create(self, act: Act) -> Act:
        ...

    @abstractmethod
    async def update(self, act: Act) -> Act:
        ...

    @abstractmethod
    async def delete(self, act_id: int) -> bool:
        ...

    @abstractmethod
    async def latest_by_invoice_numbers(self, numbers: list[str]) -> dict[str, Act]:
        """Most recent act per invoice number."""
        ...

    @abstractmethod
    async def invoice_numbers_for_responsible(self, responsible_id: int) -> list[str]:
        ...
