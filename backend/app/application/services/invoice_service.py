"""Invoices: payments that carry an invoice (account) number.

An invoice has no table of its own. Writes map the request onto a payment
and run it through the payment lifecycle; reads project payments joined
with the most recent act sharing the invoice number.
"""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from app.application.interfaces import (
    ActRepository,
    ClientRepository,
    PaymentRepository,
)
from app.application.schemas.invoice import (
    InvoiceResponse,
    InvoiceSummaryBucket,
    InvoiceSummaryResponse,
    InvoiceWrite,
)
from app.application.services import payment_lifecycle
from app.application.services.payment_service import PaymentReferenceValidator, utc_now
from app.domain.entities import (
    InvoiceQuery,
    Page,
    PageRequest,
    Payment,
    PaymentStatus,
)
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError

_ZERO = Decimal("0")


def apply_paid_flags(payment: Payment, paid_date) -> None:
    """Translate the invoice status/paid date into payment paid fields.

    ``Completed`` or an explicit paid date settles the whole amount;
    ``Pending``/``Overdue`` clear any recorded payment.
    """
    if payment.status == PaymentStatus.COMPLETED or paid_date is not None:
        payment.is_paid = True
        payment.paid_amount = payment.amount
        payment.paid_date = paid_date or payment.paid_date or payment.last_payment_date
        payment.last_payment_date = payment.paid_date
        return

    payment.is_paid = False
    if payment.status in (PaymentStatus.PENDING, PaymentStatus.OVERDUE):
        payment.paid_amount = _ZERO
    else:
        payment.paid_amount = min(payment.paid_amount, payment.amount)
    if payment.paid_amount <= 0:
        payment.paid_date = None
        payment.last_payment_date = None


class InvoiceService:
    def __init__(
        self,
        payments: PaymentRepository,
        acts: ActRepository,
        clients: ClientRepository,
        validator: PaymentReferenceValidator,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._payments = payments
        self._acts = acts
        self._clients = clients
        self._validator = validator
        self._clock = clock

    async def list_invoices(
        self,
        query: InvoiceQuery,
        page: PageRequest | None,
        responsible_id: int | None = None,
    ) -> Page[InvoiceResponse]:
        await self._restrict_to_responsible(query, responsible_id)
        result = await self._payments.list_invoices(query, page)
        return Page(
            items=await self._project(result.items),
            total=result.total,
            page=result.page,
            page_size=result.page_size,
        )

    async def summary(
        self, query: InvoiceQuery, responsible_id: int | None = None
    ) -> InvoiceSummaryResponse:
        await self._restrict_to_responsible(query, responsible_id)
        invoices = (await self._payments.list_invoices(query)).items

        def bucket(rows: list[Payment]) -> InvoiceSummaryBucket:
            return InvoiceSummaryBucket(
                amount=sum((p.amount for p in rows), _ZERO), count=len(rows)
            )

        def with_status(status: PaymentStatus) -> list[Payment]:
            return [p for p in invoices if p.status == status]

        return InvoiceSummaryResponse(
            total=bucket(invoices),
            pending=bucket(with_status(PaymentStatus.PENDING)),
            paid=bucket(with_status(PaymentStatus.COMPLETED)),
            overdue=bucket(with_status(PaymentStatus.OVERDUE)),
        )

    async def get_invoice(self, invoice_id: int) -> InvoiceResponse:
        payment = await self._payments.get_by_id(invoice_id)
        if payment is None or not payment.account:
            raise EntityNotFoundError("Invoice", invoice_id)
        return (await self._project([payment]))[0]

    async def create_invoice(self, data: InvoiceWrite) -> InvoiceResponse:
        payment = self._to_payment(data)
        await self._validator.validate(payment)
        apply_paid_flags(payment, data.paid_date)
        payment_lifecycle.prepare_for_create(payment, self._clock())
        created = await self._payments.create(payment)
        return (await self._project([created]))[0]

    async def update_invoice(self, invoice_id: int, data: InvoiceWrite) -> InvoiceResponse:
        existing = await self._payments.get_by_id(invoice_id)
        if existing is None or not existing.account:
            raise EntityNotFoundError("Invoice", invoice_id)

        incoming = self._to_payment(data)
        incoming.paid_amount = existing.paid_amount
        incoming.paid_date = existing.paid_date
        incoming.last_payment_date = existing.last_payment_date
        await self._validator.validate(incoming)
        apply_paid_flags(incoming, data.paid_date)
        payment_lifecycle.apply_update(existing, incoming, self._clock())
        updated = await self._payments.update(existing)
        return (await self._project([updated]))[0]

    async def delete_invoice(self, invoice_id: int) -> bool:
        existing = await self._payments.get_by_id(invoice_id)
        if existing is None or not existing.account:
            raise EntityNotFoundError("Invoice", invoice_id)
        return await self._payments.delete(invoice_id)

    async def _restrict_to_responsible(
        self, query: InvoiceQuery, responsible_id: int | None
    ) -> None:
        if responsible_id is not None:
            query.invoice_numbers = await self._acts.invoice_numbers_for_responsible(responsible_id)

    @staticmethod
    def _to_payment(data: InvoiceWrite) -> Payment:
        number = (data.number or "").strip()
        if not number:
            raise InvalidReferenceError("Invoice number is required")
        act_reference = (data.act_reference or "").strip()
        return Payment(
            amount=data.amount,
            date=data.due_date or data.date,
            type=data.type,
            status=data.status,
            account=number,
            account_date=data.date,
            description=data.description.strip(),
            notes=act_reference,
            client_id=data.client_id,
            client_case_id=data.client_case_id,
            deal_type_id=data.deal_type_id,
            income_type_id=data.income_type_id,
            payment_source_id=data.payment_source_id,
            payment_status_id=data.payment_status_entity_id,
        )

    async def _project(self, payments: list[Payment]) -> list[InvoiceResponse]:
        numbers = sorted({p.account for p in payments if p.account})
        acts = await self._acts.latest_by_invoice_numbers(numbers) if numbers else {}
        client_ids = {p.client_id for p in payments if p.client_id is not None}
        briefs = await self._clients.get_briefs(client_ids) if client_ids else {}

        items = []
        for payment in payments:
            act = acts.get(payment.account or "")
            brief = briefs.get(payment.client_id)
            items.append(
                InvoiceResponse(
                    id=payment.id,
                    number=payment.account or "",
                    date=payment.account_date or payment.date,
                    due_date=payment.date,
                    amount=payment.amount,
                    paid_amount=payment.paid_amount,
                    status=payment.status,
                    type=payment.type,
                    paid_date=payment.paid_date,
                    is_paid=payment.is_paid,
                    client_id=payment.client_id,
                    client_name=brief.name if brief else None,
                    client_status_id=brief.client_status_id if brief else None,
                    client_status_name=brief.client_status_name if brief else None,
                    client_status_color_hex=brief.client_status_color_hex if brief else None,
                    client_case_id=payment.client_case_id,
                    description=payment.description,
                    act_reference=payment.notes or None,
                    act_id=act.id if act else None,
                    act_number=act.number if act else None,
                    act_status=act.status if act else None,
                    responsible_id=act.responsible_id if act else None,
                    responsible_name=act.responsible_name if act else None,
                    payment_source_id=payment.payment_source_id,
                    income_type_id=payment.income_type_id,
                    deal_type_id=payment.deal_type_id,
                    payment_status_entity_id=payment.payment_status_id,
                    created_at=payment.created_at,
                )
            )
        return items
