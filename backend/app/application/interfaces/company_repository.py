"""Abstract repository interface (port) for companies."""

from abc import ABC, abstractmethod

from app.domain.entities import Company, CompanyQuery, Page, PageRequest


class CompanyRepository(ABC):
    """Port for company persistence, members included."""

    @abstractmethod
    async def get_by_id(self, company_id: int) -> Company | None:
        ...

    @abstractmethod
    async def search(self, query: CompanyQuery, page: PageRequest | None = None) -> Page[Company]:
        ...

    @abstractmethod
    async def create(self, company: Company) -> Company:
        ...

    @abstractmethod
    async def update(self, company: Company) -> Company:
        """Persist scalar fields and replace the member links."""
        ...

    @abstractmethod
    async def delete(self, company_id: int) -> bool:
        ...
