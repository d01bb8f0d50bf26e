"""Concrete repository implementation for the lookup dictionaries."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import DictionaryRepository
from app.domain.entities import DictionaryEntry, DictionaryKind, PaymentType
from app.infrastructure.database.models import DICTIONARY_MODELS


class SQLAlchemyDictionaryRepository(DictionaryRepository):
    """Implements the DictionaryRepository port over the dictionary tables."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, kind: DictionaryKind, model) -> DictionaryEntry:
        raw_type = getattr(model, "payment_type", None)
        return DictionaryEntry(
            kind=kind,
            id=model.id,
            name=model.name,
            description=model.description,
            color_hex=model.color_hex,
            is_active=model.is_active,
            payment_type=PaymentType(raw_type) if raw_type else None,
            created_at=model.created_at,
        )

    @staticmethod
    def _copy(model, entry: DictionaryEntry) -> None:
        model.name = entry.name
        model.description = entry.description
        model.color_hex = entry.color_hex
        model.is_active = entry.is_active
        if hasattr(model, "payment_type"):
            if entry.kind == DictionaryKind.INCOME_TYPES:
                model.payment_type = (entry.payment_type or PaymentType.INCOME).value
            else:
                model.payment_type = entry.payment_type.value if entry.payment_type else None

    async def get(self, kind: DictionaryKind, entry_id: int) -> DictionaryEntry | None:
        model = await self._session.get(DICTIONARY_MODELS[kind], entry_id)
        return self._to_entity(kind, model) if model else None

    async def find_by_name(self, kind: DictionaryKind, name: str) -> DictionaryEntry | None:
        model_cls = DICTIONARY_MODELS[kind]
        result = await self._session.execute(
            select(model_cls).where(func.lower(model_cls.name) == name.strip().lower()).limit(1)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(kind, model) if model else None

    async def get_all(
        self,
        kind: DictionaryKind,
        *,
        payment_type: PaymentType | None = None,
        is_active: bool | None = None,
    ) -> list[DictionaryEntry]:
        model_cls = DICTIONARY_MODELS[kind]
        stmt = select(model_cls)
        if payment_type is not None and hasattr(model_cls, "payment_type"):
            stmt = stmt.where(model_cls.payment_type == payment_type.value)
        if is_active is not None:
            stmt = stmt.where(model_cls.is_active.is_(is_active))
        stmt = stmt.order_by(model_cls.name.asc())
        result = await self._session.execute(stmt)
        return [self._to_entity(kind, row) for row in result.scalars().all()]

    async def create(self, entry: DictionaryEntry) -> DictionaryEntry:
        model = DICTIONARY_MODELS[entry.kind](created_at=entry.created_at)
        self._copy(model, entry)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(entry.kind, model)

    async def update(self, entry: DictionaryEntry) -> DictionaryEntry:
        model = await self._session.get(DICTIONARY_MODELS[entry.kind], entry.id)
        if model is None:
            raise ValueError(f"{entry.kind.label} {entry.id} not found in database")
        self._copy(model, entry)
        await self._session.flush()
        return self._to_entity(entry.kind, model)

    async def delete(self, kind: DictionaryKind, entry_id: int) -> bool:
        model = await self._session.get(DICTIONARY_MODELS[kind], entry_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
