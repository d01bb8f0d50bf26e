"""Application service for the lookup dictionaries."""

import logging

from app.application.interfaces import DictionaryRepository
from app.application.schemas.dictionary import DictionaryWrite
from app.domain.entities import DictionaryEntry, DictionaryKind, PaymentType
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError

logger = logging.getLogger(__name__)


class DictionaryService:
    """CRUD and activation toggling for deal types, income types, sources and statuses."""

    def __init__(self, repository: DictionaryRepository):
        self._repository = repository

    async def list_entries(
        self,
        kind: DictionaryKind,
        *,
        payment_type: PaymentType | None = None,
        is_active: bool | None = None,
    ) -> list[DictionaryEntry]:
        return await self._repository.get_all(kind, payment_type=payment_type, is_active=is_active)

    async def get_entry(self, kind: DictionaryKind, entry_id: int) -> DictionaryEntry:
        entry = await self._repository.get(kind, entry_id)
        if entry is None:
            raise EntityNotFoundError(kind.label, entry_id)
        return entry

    async def create_entry(self, kind: DictionaryKind, data: DictionaryWrite) -> DictionaryEntry:
        entry = DictionaryEntry(
            kind=kind,
            name=data.name.strip(),
            description=data.description,
            color_hex=data.color_hex,
            is_active=data.is_active,
            payment_type=self._payment_type_for(kind, data.payment_type),
        )
        created = await self._repository.create(entry)
        logger.info("Created %s %s (%s)", kind.label, created.id, created.name)
        return created

    async def update_entry(
        self, kind: DictionaryKind, entry_id: int, data: DictionaryWrite
    ) -> DictionaryEntry:
        entry = await self.get_entry(kind, entry_id)
        entry.name = data.name.strip()
        entry.description = data.description
        entry.color_hex = data.color_hex or kind.default_color
        entry.is_active = data.is_active
        entry.payment_type = self._payment_type_for(kind, data.payment_type)
        return await self._repository.update(entry)

    async def delete_entry(self, kind: DictionaryKind, entry_id: int) -> bool:
        await self.get_entry(kind, entry_id)
        return await self._repository.delete(kind, entry_id)

    async def toggle_active(self, kind: DictionaryKind, entry_id: int) -> DictionaryEntry:
        entry = await self.get_entry(kind, entry_id)
        entry.toggle_active()
        return await self._repository.update(entry)

    @staticmethod
    def _payment_type_for(kind: DictionaryKind, payment_type: PaymentType | None) -> PaymentType | None:
        if kind == DictionaryKind.INCOME_TYPES:
            if payment_type is None:
                raise InvalidReferenceError("IncomeType requires a paymentType")
            return payment_type
        if kind == DictionaryKind.PAYMENT_SOURCES:
            return payment_type
        return None
