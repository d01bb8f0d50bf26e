"""Abstract repository interface (port) for legal entities."""

from abc import ABC, abstractmethod

from app.domain.entities import LegalEntity


class LegalEntityRepository(ABC):
    """Port for legal entity persistence, client links included."""

    @abstractmethod
    async def get_by_id(self, legal_entity_id: int) -> LegalEntity | None:
        ...

    @abstractmethod
    async def search(self, search: str | None = None) -> list[LegalEntity]:
        ...

    @abstractmethod
    async def create(self, legal_entity: LegalEntity, client_ids: list[int]) -> LegalEntity:
        ...

    @abstractmethod
    async def update(self, legal_entity: LegalEntity, client_ids: list[int]) -> LegalEntity:
        """Persist fields and make ``client_ids`` the exact set of linked clients."""
        ...

    @abstractmethod
    async def delete(self, legal_entity_id: int) -> bool:
        """Delete the entity after unlinking its clients."""
        ...
