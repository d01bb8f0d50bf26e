"""Concrete repository implementations for clients and cases backed by SQLAlchemy."""

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import CaseRepository, ClientRepository
from app.domain.entities import (
    CaseQuery,
    Client,
    ClientBrief,
    ClientCase,
    ClientCaseStatus,
    ClientQuery,
    Page,
    PageRequest,
)
from app.infrastructure.database.models import ClientCaseModel, ClientModel, ClientStatusModel
from app.infrastructure.database.repositories.paging import fetch_page, like_pattern

_CLIENT_SORTS = {
    "name": ClientModel.name,
    "createdat": ClientModel.created_at,
}

_CASE_SORTS = {
    "title": ClientCaseModel.title,
    "status": ClientCaseModel.status,
    "createdat": ClientCaseModel.created_at,
}


def _case_to_entity(model: ClientCaseModel) -> ClientCase:
    return ClientCase(
        id=model.id,
        client_id=model.client_id,
        title=model.title,
        description=model.description,
        status=ClientCaseStatus(model.status),
        created_at=model.created_at,
    )


class SQLAlchemyClientRepository(ClientRepository):
    """Implements the ClientRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ClientModel) -> Client:
        return Client(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            company=model.company,
            address=model.address,
            notes=model.notes,
            is_active=model.is_active,
            client_status_id=model.client_status_id,
            legal_entity_id=model.legal_entity_id,
            created_at=model.created_at,
        )

    async def get_by_id(self, client_id: int, *, with_cases: bool = False) -> Client | None:
        model = await self._session.get(ClientModel, client_id)
        if model is None:
            return None
        client = self._to_entity(model)
        if with_cases:
            result = await self._session.execute(
                select(ClientCaseModel)
                .where(ClientCaseModel.client_id == client_id)
                .order_by(ClientCaseModel.created_at.desc())
            )
            client.cases = [_case_to_entity(row) for row in result.scalars().all()]
        return client

    async def search(self, query: ClientQuery, page: PageRequest | None = None) -> Page[Client]:
        stmt = select(ClientModel)
        if query.is_active is not None:
            stmt = stmt.where(ClientModel.is_active.is_(query.is_active))
        if query.search and query.search.strip():
            pattern = like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    ClientModel.name.ilike(pattern),
                    ClientModel.email.ilike(pattern),
                    ClientModel.phone.ilike(pattern),
                    ClientModel.company.ilike(pattern),
                    ClientModel.address.ilike(pattern),
                )
            )
        column = _CLIENT_SORTS.get(query.sort.field, ClientModel.name)
        order = column.desc() if query.sort.descending else column.asc()
        stmt = stmt.order_by(order, ClientModel.id.asc())
        return await fetch_page(self._session, stmt, page, self._to_entity)

    async def get_names(self, client_ids: set[int]) -> dict[int, str]:
        if not client_ids:
            return {}
        result = await self._session.execute(
            select(ClientModel.id, ClientModel.name).where(ClientModel.id.in_(client_ids))
        )
        return {row.id: row.name for row in result.all()}

    async def get_briefs(self, client_ids: set[int]) -> dict[int, ClientBrief]:
        if not client_ids:
            return {}
        result = await self._session.execute(
            select(
                ClientModel.id,
                ClientModel.name,
                ClientModel.client_status_id,
                ClientStatusModel.name.label("status_name"),
                ClientStatusModel.color_hex.label("status_color"),
            )
            .outerjoin(ClientStatusModel, ClientStatusModel.id == ClientModel.client_status_id)
            .where(ClientModel.id.in_(client_ids))
        )
        return {
            row.id: ClientBrief(
                id=row.id,
                name=row.name,
                client_status_id=row.client_status_id,
                client_status_name=row.status_name,
                client_status_color_hex=row.status_color,
            )
            for row in result.all()
        }

    async def create(self, client: Client) -> Client:
        model = ClientModel(
            name=client.name,
            email=client.email,
            phone=client.phone,
            company=client.company,
            address=client.address,
            notes=client.notes,
            is_active=client.is_active,
            client_status_id=client.client_status_id,
            legal_entity_id=client.legal_entity_id,
            created_at=client.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, client: Client) -> Client:
        model = await self._session.get(ClientModel, client.id)
        if model is None:
            raise ValueError(f"Client {client.id} not found in database")
        model.name = client.name
        model.email = client.email
        model.phone = client.phone
        model.company = client.company
        model.address = client.address
        model.notes = client.notes
        model.is_active = client.is_active
        model.client_status_id = client.client_status_id
        model.legal_entity_id = client.legal_entity_id
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, client_id: int) -> bool:
        model = await self._session.get(ClientModel, client_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True


class SQLAlchemyCaseRepository(CaseRepository):
    """Implements the CaseRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, case_id: int) -> ClientCase | None:
        model = await self._session.get(ClientCaseModel, case_id)
        return _case_to_entity(model) if model else None

    async def search(self, query: CaseQuery, page: PageRequest | None = None) -> Page[ClientCase]:
        stmt = select(ClientCaseModel)
        if query.client_id is not None:
            stmt = stmt.where(ClientCaseModel.client_id == query.client_id)
        if query.status:
            stmt = stmt.where(ClientCaseModel.status == query.status)
        if query.search and query.search.strip():
            pattern = like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    ClientCaseModel.title.ilike(pattern),
                    ClientCaseModel.description.ilike(pattern),
                )
            )
        column = _CASE_SORTS.get(query.sort.field, ClientCaseModel.created_at)
        order = column.desc() if query.sort.descending else column.asc()
        stmt = stmt.order_by(order, ClientCaseModel.id.asc())
        return await fetch_page(self._session, stmt, page, _case_to_entity)

    async def create(self, case: ClientCase) -> ClientCase:
        model = ClientCaseModel(
            client_id=case.client_id,
            title=case.title,
            description=case.description,
            status=case.status.value,
            created_at=case.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return _case_to_entity(model)

    async def update(self, case: ClientCase) -> ClientCase:
        model = await self._session.get(ClientCaseModel, case.id)
        if model is None:
            raise ValueError(f"ClientCase {case.id} not found in database")
        model.client_id = case.client_id
        model.title = case.title
        model.description = case.description
        model.status = case.status.value
        await self._session.flush()
        return _case_to_entity(model)

    async def delete(self, case_id: int) -> bool:
        model = await self._session.get(ClientCaseModel, case_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_by_client(self, client_id: int) -> int:
        result = await self._session.execute(
            delete(ClientCaseModel).where(ClientCaseModel.client_id == client_id)
        )
        return result.rowcount or 0
