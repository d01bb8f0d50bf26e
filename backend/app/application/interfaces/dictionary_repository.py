"""Abstract repository interface (port) for lookup dictionaries."""

from abc import ABC, abstractmethod

from app.domain.entities import DictionaryEntry, DictionaryKind, PaymentType


class DictionaryRepository(ABC):
    """Port for the four dictionaries, addressed by :class:`DictionaryKind`."""

    @abstractmethod
    async def get(self, kind: DictionaryKind, entry_id: int) -> DictionaryEntry | None:
        ...

    @abstractmethod
    async def find_by_name(self, kind: DictionaryKind, name: str) -> DictionaryEntry | None:
        ...

    @abstractmethod
    async def get_all(
        self,
        kind: DictionaryKind,
        *,
        payment_type: PaymentType | None = None,
        is_active: bool | None = None,
    ) -> list[DictionaryEntry]:
        """Entries ordered by name."""
        ...

    @abstractmethod
    async def create(self, entry: DictionaryEntry) -> DictionaryEntry:
        ...

    @abstractmethod
    async def update(self, entry: DictionaryEntry) -> DictionaryEntry:
        ...

    @abstractmethod
    async def delete(self, kind: DictionaryKind, entry_id: int) -> bool:
        ...
