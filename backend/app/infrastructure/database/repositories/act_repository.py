"""Concrete repository implementation for Act backed by SQLAlchemy."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import ActRepository
from app.domain.entities import Act, ActQuery, ActStatus, Page, PageRequest
from app.infrastructure.database.models import ActModel, ClientModel, UserModel
from app.infrastructure.database.repositories.paging import fetch_page, like_pattern

_ACT_SORTS = {
    "number": ActModel.number,
    "amount": ActModel.amount,
    "invoicenumber": ActModel.invoice_number,
    "status": ActModel.status,
    "client": ClientModel.name,
    "inn": ActModel.counterparty_inn,
    "responsible": UserModel.full_name,
    "createdat": ActModel.created_at,
    "date": ActModel.date,
}


def _joined_select():
    return (
        select(ActModel, ClientModel.name, UserModel.full_name)
        .outerjoin(ClientModel, ClientModel.id == ActModel.client_id)
        .outerjoin(UserModel, UserModel.id == ActModel.responsible_id)
    )


class SQLAlchemyActRepository(ActRepository):
    """Implements the ActRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, row) -> Act:
        model, client_name, responsible_name = row
        return Act(
            id=model.id,
            number=model.number,
            title=model.title,
            date=model.date,
            amount=model.amount,
            invoice_number=model.invoice_number,
            counterparty_inn=model.counterparty_inn,
            status=ActStatus(model.status),
            client_id=model.client_id,
            client_name=client_name,
            responsible_id=model.responsible_id,
            responsible_name=responsible_name,
            comment=model.comment,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, act_id: int) -> Act | None:
        result = await self._session.execute(_joined_select().where(ActModel.id == act_id))
        row = result.first()
        return self._to_entity(row) if row else None

    async def search(self, query: ActQuery, page: PageRequest | None = None) -> Page[Act]:
        stmt = _joined_select()
        if query.from_date is not None:
            stmt = stmt.where(ActModel.date >= query.from_date)
        if query.to_date is not None:
            stmt = stmt.where(ActModel.date <= query.to_date)
        if query.status:
            stmt = stmt.where(ActModel.status == query.status)
        if query.client_id is not None:
            stmt = stmt.where(ActModel.client_id == query.client_id)
        if query.responsible_id is not None:
            stmt = stmt.where(ActModel.responsible_id == query.responsible_id)
        if query.search and query.search.strip():
            pattern = like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    ActModel.number.ilike(pattern),
                    ActModel.title.ilike(pattern),
                    ActModel.invoice_number.ilike(pattern),
                    ActModel.counterparty_inn.ilike(pattern),
                    ActModel.comment.ilike(pattern),
                    ClientModel.name.ilike(pattern),
                )
            )
        column = _ACT_SORTS.get(query.sort.field, ActModel.date)
        order = column.desc() if query.sort.descending else column.asc()
        stmt = stmt.order_by(order, ActModel.id.desc())
        return await fetch_page(self._session, stmt, page, self._to_entity, scalars=False)

    async def create(self, act: Act) -> Act:
        model = ActModel(created_at=act.created_at)
        self._copy(model, act)
        self._session.add(model)
        await self._session.flush()
        return await self.get_by_id(model.id)

    async def update(self, act: Act) -> Act:
        model = await self._session.get(ActModel, act.id)
        if model is None:
            raise ValueError(f"Act {act.id} not found in database")
        self._copy(model, act)
        await self._session.flush()
        return await self.get_by_id(model.id)

    async def delete(self, act_id: int) -> bool:
        model = await self._session.get(ActModel, act_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def latest_by_invoice_numbers(self, numbers: list[str]) -> dict[str, Act]:
        if not numbers:
            return {}
        result = await self._session.execute(
            _joined_select()
            .where(ActModel.invoice_number.in_(numbers))
            .order_by(ActModel.date.asc(), ActModel.id.asc())
        )
        latest: dict[str, Act] = {}
        for row in result.all():
            act = self._to_entity(row)
            latest[act.invoice_number] = act
        return latest

    async def invoice_numbers_for_responsible(self, responsible_id: int) -> list[str]:
        result = await self._session.execute(
            select(ActModel.invoice_number)
            .where(
                ActModel.responsible_id == responsible_id,
                ActModel.invoice_number.is_not(None),
            )
            .distinct()
        )
        return [number for number in result.scalars().all() if number]

    @staticmethod
    def _copy(model: ActModel, act: Act) -> None:
        model.number = act.number
        model.title = act.title
        model.date = act.date
        model.amount = act.amount
        model.invoice_number = act.invoice_number
        model.counterparty_inn = act.counterparty_inn
        model.status = act.status.value
        model.client_id = act.client_id
        model.responsible_id = act.responsible_id
        model.comment = act.comment
        model.updated_at = act.updated_at
