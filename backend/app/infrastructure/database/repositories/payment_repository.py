"""Concrete repository implementation for Payment backed by SQLAlchemy."""

from datetime import date

from sqlalchemy import Select, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import PaymentRepository
from app.domain.entities import (
    AccountQuery,
    AccountReference,
    InvoiceQuery,
    Page,
    PageRequest,
    Payment,
    PaymentQuery,
    PaymentStatus,
    PaymentTimelineEntry,
    PaymentType,
)
from app.infrastructure.database.models import ClientModel, PaymentModel
from app.infrastructure.database.repositories.paging import fetch_page, like_pattern

_PAYMENT_SORTS = {
    "date": PaymentModel.date,
    "amount": PaymentModel.amount,
    "createdat": PaymentModel.created_at,
}

_INVOICE_SORTS = {
    "number": PaymentModel.account,
    "amount": PaymentModel.amount,
    "status": PaymentModel.status,
    "client": ClientModel.name,
    "duedate": PaymentModel.date,
    "createdat": PaymentModel.created_at,
    "date": func.coalesce(PaymentModel.account_date, PaymentModel.date),
}


class SQLAlchemyPaymentRepository(PaymentRepository):
    """Implements the PaymentRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: PaymentModel) -> Payment:
        """Map ORM model → domain entity."""
        return Payment(
            id=model.id,
            amount=model.amount,
            paid_amount=model.paid_amount,
            date=model.date,
            initial_date=model.initial_date,
            paid_date=model.paid_date,
            last_payment_date=model.last_payment_date,
            is_paid=model.is_paid,
            status=PaymentStatus(model.status),
            type=PaymentType(model.type),
            description=model.description,
            notes=model.notes,
            system_notes=model.system_notes,
            reschedule_count=model.reschedule_count,
            timeline=[PaymentTimelineEntry.from_dict(raw) for raw in model.timeline or []],
            account=model.account,
            account_date=model.account_date,
            client_id=model.client_id,
            client_case_id=model.client_case_id,
            deal_type_id=model.deal_type_id,
            income_type_id=model.income_type_id,
            payment_source_id=model.payment_source_id,
            payment_status_id=model.payment_status_id,
            created_at=model.created_at,
        )

    def _apply(self, model: PaymentModel, entity: Payment) -> PaymentModel:
        """Copy every mutable field of ``entity`` onto ``model``."""
        model.amount = entity.amount
        model.paid_amount = entity.paid_amount
        model.date = entity.date
        model.initial_date = entity.initial_date
        model.paid_date = entity.paid_date
        model.last_payment_date = entity.last_payment_date
        model.is_paid = entity.is_paid
        model.status = entity.status.value
        model.type = entity.type.value
        model.description = entity.description
        model.notes = entity.notes
        model.system_notes = entity.system_notes
        model.reschedule_count = entity.reschedule_count
        model.timeline = [entry.to_dict() for entry in entity.timeline]
        model.account = entity.account
        model.account_date = entity.account_date
        model.client_id = entity.client_id
        model.client_case_id = entity.client_case_id
        model.deal_type_id = entity.deal_type_id
        model.income_type_id = entity.income_type_id
        model.payment_source_id = entity.payment_source_id
        model.payment_status_id = entity.payment_status_id
        return model

    async def get_by_id(self, payment_id: int) -> Payment | None:
        result = await self._session.get(PaymentModel, payment_id)
        return self._to_entity(result) if result else None

    async def search(
        self, query: PaymentQuery, page: PageRequest | None = None
    ) -> Page[Payment]:
        stmt = select(PaymentModel)

        if query.from_date is not None:
            stmt = stmt.where(PaymentModel.date >= query.from_date)
        if query.to_date is not None:
            stmt = stmt.where(PaymentModel.date <= query.to_date)
        if query.client_id is not None:
            stmt = stmt.where(PaymentModel.client_id == query.client_id)
        if query.case_id is not None:
            stmt = stmt.where(PaymentModel.client_case_id == query.case_id)
        if query.type:
            stmt = stmt.where(PaymentModel.type == query.type)
        if query.status:
            stmt = stmt.where(PaymentModel.status == query.status)
        if query.search and query.search.strip():
            pattern = like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    PaymentModel.description.ilike(pattern),
                    PaymentModel.notes.ilike(pattern),
                    PaymentModel.account.ilike(pattern),
                )
            )

        column = _PAYMENT_SORTS.get(query.sort.field, PaymentModel.date)
        order = column.desc() if query.sort.descending else column.asc()
        stmt = stmt.order_by(order, PaymentModel.id.asc())
        return await fetch_page(self._session, stmt, page, self._to_entity)

    async def list_invoices(
        self, query: InvoiceQuery, page: PageRequest | None = None
    ) -> Page[Payment]:
        invoice_date = func.coalesce(PaymentModel.account_date, PaymentModel.date)
        stmt = (
            select(PaymentModel)
            .outerjoin(ClientModel, ClientModel.id == PaymentModel.client_id)
            .where(PaymentModel.account.is_not(None), PaymentModel.account != "")
        )

        if query.from_date is not None:
            stmt = stmt.where(invoice_date >= query.from_date)
        if query.to_date is not None:
            stmt = stmt.where(invoice_date <= query.to_date)
        if query.status:
            stmt = stmt.where(PaymentModel.status == query.status)
        if query.type:
            stmt = stmt.where(PaymentModel.type == query.type)
        if query.client_id is not None:
            stmt = stmt.where(PaymentModel.client_id == query.client_id)
        if query.invoice_numbers is not None:
            stmt = stmt.where(PaymentModel.account.in_(query.invoice_numbers))
        if query.search and query.search.strip():
            pattern = like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    PaymentModel.account.ilike(pattern),
                    PaymentModel.description.ilike(pattern),
                    PaymentModel.notes.ilike(pattern),
                    ClientModel.name.ilike(pattern),
                )
            )

        column = _INVOICE_SORTS.get(query.sort.field, invoice_date)
        order = column.desc() if query.sort.descending else column.asc()
        stmt = stmt.order_by(order, PaymentModel.id.desc())
        return await fetch_page(self._session, stmt, page, self._to_entity)

    @staticmethod
    def _account_filters(stmt: Select, query: AccountQuery) -> Select:
        stmt = stmt.where(PaymentModel.account.is_not(None), PaymentModel.account != "")
        if query.client_id is not None:
            stmt = stmt.where(PaymentModel.client_id == query.client_id)
        if query.case_id is not None:
            stmt = stmt.where(PaymentModel.client_case_id == query.case_id)
        if query.search and query.search.strip():
            stmt = stmt.where(PaymentModel.account.ilike(like_pattern(query.search)))
        return stmt

    async def list_accounts(self, query: AccountQuery) -> list[str]:
        uses = func.count(PaymentModel.id)
        stmt = self._account_filters(select(PaymentModel.account), query)
        stmt = (
            stmt.group_by(PaymentModel.account)
            .order_by(uses.desc(), PaymentModel.account.asc())
            .limit(query.take)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_account_references(
        self, query: AccountQuery, *, distinct: bool = False
    ) -> list[AccountReference]:
        sort_date = func.coalesce(PaymentModel.account_date, PaymentModel.date)
        if distinct:
            stmt = select(
                PaymentModel.account,
                PaymentModel.account_date,
                func.max(sort_date).label("sort_date"),
            ).group_by(PaymentModel.account, PaymentModel.account_date)
        else:
            stmt = select(
                PaymentModel.account,
                PaymentModel.account_date,
                sort_date.label("sort_date"),
            )
        stmt = self._account_filters(stmt, query)
        stmt = stmt.order_by(desc("sort_date"), PaymentModel.account.asc()).limit(query.take)
        result = await self._session.execute(stmt)
        return [
            AccountReference(account=row.account, account_date=row.account_date)
            for row in result.all()
        ]

    async def create(self, payment: Payment) -> Payment:
        model = self._apply(PaymentModel(created_at=payment.created_at), payment)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, payment: Payment) -> Payment:
        model = await self._session.get(PaymentModel, payment.id)
        if model is None:
            raise ValueError(f"Payment {payment.id} not found in database")
        self._apply(model, payment)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, payment_id: int) -> bool:
        model = await self._session.get(PaymentModel, payment_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def detach_client(self, client_id: int) -> int:
        result = await self._session.execute(
            update(PaymentModel)
            .where(PaymentModel.client_id == client_id)
            .values(client_id=None, client_case_id=None)
        )
        return result.rowcount or 0

    async def detach_case(self, case_id: int) -> int:
        result = await self._session.execute(
            update(PaymentModel)
            .where(PaymentModel.client_case_id == case_id)
            .values(client_case_id=None)
        )
        return result.rowcount or 0

    async def mark_overdue(self, today: date, payment_status_id: int | None = None) -> int:
        values: dict = {"status": PaymentStatus.OVERDUE.value}
        if payment_status_id is not None:
            values["payment_status_id"] = payment_status_id
        result = await self._session.execute(
            update(PaymentModel)
            .where(
                PaymentModel.is_paid.is_(False),
                PaymentModel.status == PaymentStatus.PENDING.value,
                PaymentModel.date < today,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
