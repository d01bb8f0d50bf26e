"""Concrete repository implementation for LegalEntity backed by SQLAlchemy."""

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import LegalEntityRepository
from app.domain.entities import LegalEntity, LegalEntityClient
from app.infrastructure.database.models import ClientModel, LegalEntityModel
from app.infrastructure.database.repositories.paging import like_pattern

_SCALAR_FIELDS = (
    "short_name",
    "full_name",
    "inn",
    "kpp",
    "ogrn",
    "address",
    "phone",
    "email",
    "director",
    "notes",
    "updated_at",
)


class SQLAlchemyLegalEntityRepository(LegalEntityRepository):
    """Implements the LegalEntityRepository port; links live on 'clients.legal_entity_id'."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: LegalEntityModel) -> LegalEntity:
        entity = LegalEntity(id=model.id, short_name=model.short_name, created_at=model.created_at)
        for name in _SCALAR_FIELDS[1:]:
            setattr(entity, name, getattr(model, name))
        return entity

    async def _load_clients(self, entities: list[LegalEntity]) -> None:
        ids = [entity.id for entity in entities]
        if not ids:
            return
        result = await self._session.execute(
            select(ClientModel)
            .where(ClientModel.legal_entity_id.in_(ids))
            .order_by(ClientModel.name, ClientModel.id)
            .execution_options(populate_existing=True)
        )
        by_id = {entity.id: entity for entity in entities}
        for client in result.scalars().all():
            by_id[client.legal_entity_id].clients.append(
                LegalEntityClient(
                    id=client.id,
                    name=client.name,
                    phone=client.phone,
                    email=client.email,
                    is_active=client.is_active,
                )
            )

    async def get_by_id(self, legal_entity_id: int) -> LegalEntity | None:
        model = await self._session.get(LegalEntityModel, legal_entity_id)
        if model is None:
            return None
        entity = self._to_entity(model)
        await self._load_clients([entity])
        return entity

    async def search(self, search: str | None = None) -> list[LegalEntity]:
        stmt = select(LegalEntityModel)
        if search and search.strip():
            pattern = like_pattern(search)
            stmt = stmt.where(
                or_(
                    LegalEntityModel.short_name.ilike(pattern),
                    LegalEntityModel.full_name.ilike(pattern),
                    LegalEntityModel.inn.ilike(pattern),
                    LegalEntityModel.kpp.ilike(pattern),
                    LegalEntityModel.ogrn.ilike(pattern),
                )
            )
        stmt = stmt.order_by(LegalEntityModel.short_name.asc(), LegalEntityModel.id.asc())
        result = await self._session.execute(stmt)
        entities = [self._to_entity(row) for row in result.scalars().all()]
        await self._load_clients(entities)
        return entities

    async def create(self, legal_entity: LegalEntity, client_ids: list[int]) -> LegalEntity:
        model = LegalEntityModel(created_at=legal_entity.created_at)
        for name in _SCALAR_FIELDS:
            setattr(model, name, getattr(legal_entity, name))
        self._session.add(model)
        await self._session.flush()
        await self._link_clients(model.id, client_ids)
        return await self.get_by_id(model.id)

    async def update(self, legal_entity: LegalEntity, client_ids: list[int]) -> LegalEntity:
        model = await self._session.get(LegalEntityModel, legal_entity.id)
        if model is None:
            raise ValueError(f"LegalEntity {legal_entity.id} not found in database")
        for name in _SCALAR_FIELDS:
            setattr(model, name, getattr(legal_entity, name))
        unlink = update(ClientModel).where(ClientModel.legal_entity_id == model.id)
        if client_ids:
            unlink = unlink.where(ClientModel.id.not_in(client_ids))
        await self._session.execute(
            unlink.values(legal_entity_id=None).execution_options(synchronize_session=False)
        )
        await self._link_clients(model.id, client_ids)
        return await self.get_by_id(model.id)

    async def delete(self, legal_entity_id: int) -> bool:
        model = await self._session.get(LegalEntityModel, legal_entity_id)
        if model is None:
            return False
        await self._session.execute(
            update(ClientModel)
            .where(ClientModel.legal_entity_id == legal_entity_id)
            .values(legal_entity_id=None)
            .execution_options(synchronize_session=False)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _link_clients(self, legal_entity_id: int, client_ids: list[int]) -> None:
        if client_ids:
            await self._session.execute(
                update(ClientModel)
                .where(ClientModel.id.in_(set(client_ids)))
                .values(legal_entity_id=legal_entity_id)
                .execution_options(synchronize_session=False)
            )
        await self._session.flush()
