"""Abstract repository interface (port) for contracts."""

from abc import ABC, abstractmethod

from app.domain.entities import Contract, ContractQuery, Page, PageRequest


class ContractRepository(ABC):
    """Port for contract persistence, client links included."""

    @abstractmethod
    async def get_by_id(self, contract_id: int) -> Contract | None:
        ...

    @abstractmethod
    async def search(self, query: ContractQuery, page: PageRequest | None = None) -> Page[Contract]:
        ...

    @abstractmethod
    async def create(self, contract: Contract) -> Contract:
        ...

    @abstractmethod
    async def update(self, contract: Contract) -> Contract:
        ...

    @abstractmethod
    async def delete(self, contract_id: int) -> bool:
        ...
