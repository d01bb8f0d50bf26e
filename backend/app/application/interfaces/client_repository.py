"""Abstract repository interfaces (ports) for clients and their cases."""

from abc import ABC, abstractmethod

from app.domain.entities import (
    CaseQuery,
    Client,
    ClientBrief,
    ClientCase,
    ClientQuery,
    Page,
    PageRequest,
)


class ClientRepository(ABC):
    """Port for client persistence."""

    @abstractmethod
    async def get_by_id(self, client_id: int, *, with_cases: bool = False) -> Client | None:
        ...

    @abstractmethod
    async def search(self, query: ClientQuery, page: PageRequest | None = None) -> Page[Client]:
        ...

    @abstractmethod
    async def get_names(self, client_ids: set[int]) -> dict[int, str]:
        """Map client ids to display names."""
        ...

    @abstractmethod
    async def get_briefs(self, client_ids: set[int]) -> dict[int, ClientBrief]:
        """Map client ids to name and client status."""
        ...

    @abstractmethod
    async def create(self, client: Client) -> Client:
        ...

    @abstractmethod
    async def update(self, client: Client) -> Client:
        ...

    @abstractmethod
    async def delete(self, client_id: int) -> bool:
        ...


class CaseRepository(ABC):
    """Port for client case persistence."""

    @abstractmethod
    async def get_by_id(self, case_id: int) -> ClientCase | None:
        ...

    @abstractmethod
    async def search(self, query: CaseQuery, page: PageRequest | None = None) -> Page[ClientCase]:
        ...

    @abstractmethod
    async def create(self, case: ClientCase) -> ClientCase:
        ...

    @abstractmethod
    async def update(self, case: ClientCase) -> ClientCase:
        ...

    @abstractmethod
    async def delete(self, case_id: int) -> bool:
        ...

    @abstractmethod
    async def delete_by_client(self, client_id: int) -> int:
        ...
