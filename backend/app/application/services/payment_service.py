"""Application service (use case) for Payment operations."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from app.application.interfaces import (
    CaseRepository,
    ClientRepository,
    DictionaryRepository,
    PaymentRepository,
)
from app.application.schemas.payment import PaymentWrite
from app.application.services import payment_lifecycle
from app.domain.entities import (
    AccountQuery,
    AccountReference,
    DictionaryKind,
    Page,
    PageRequest,
    Payment,
    PaymentQuery,
)
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PaymentReferenceValidator:
    """Rejects payments pointing at unknown or incompatible related rows."""

    def __init__(
        self,
        clients: ClientRepository,
        cases: CaseRepository,
        dictionaries: DictionaryRepository,
    ):
        self._clients = clients
        self._cases = cases
        self._dictionaries = dictionaries

    async def validate(self, payment: Payment) -> None:
        if payment.client_id is not None:
            if await self._clients.get_by_id(payment.client_id) is None:
                raise InvalidReferenceError(f"Unknown ClientId {payment.client_id}")
        if payment.client_case_id is not None:
            case = await self._cases.get_by_id(payment.client_case_id)
            if case is None:
                raise InvalidReferenceError(f"Unknown ClientCaseId {payment.client_case_id}")
            if payment.client_id is not None and case.client_id != payment.client_id:
                raise InvalidReferenceError("ClientCase does not belong to the client")

        if payment.income_type_id is not None:
            income_type = await self._dictionaries.get(
                DictionaryKind.INCOME_TYPES, payment.income_type_id
            )
            if income_type is None:
                raise InvalidReferenceError("Unknown IncomeTypeId")
            if income_type.payment_type is not None and income_type.payment_type != payment.type:
                raise InvalidReferenceError("IncomeType.PaymentType mismatches payment.Type")

        if payment.payment_source_id is not None:
            source = await self._dictionaries.get(
                DictionaryKind.PAYMENT_SOURCES, payment.payment_source_id
            )
            if source is None:
                raise InvalidReferenceError("Unknown PaymentSourceId")
            if source.payment_type is not None and source.payment_type != payment.type:
                raise InvalidReferenceError("PaymentSource.PaymentType mismatches payment.Type")

        if payment.deal_type_id is not None:
            if await self._dictionaries.get(DictionaryKind.DEAL_TYPES, payment.deal_type_id) is None:
                raise InvalidReferenceError("Unknown DealTypeId")

        if payment.payment_status_id is not None:
            status = await self._dictionaries.get(
                DictionaryKind.PAYMENT_STATUSES, payment.payment_status_id
            )
            if status is None:
                raise InvalidReferenceError("Unknown PaymentStatusId")


def payment_from_write(data: PaymentWrite) -> Payment:
    """Build an unsaved Payment from a request body."""
    return Payment(
        amount=data.amount,
        date=data.date,
        type=data.type,
        status=data.status,
        paid_amount=data.paid_amount,
        is_paid=data.is_paid,
        paid_date=data.paid_date,
        initial_date=data.initial_date,
        reschedule_count=data.reschedule_count,
        description=data.description,
        notes=data.notes,
        account=data.account,
        account_date=data.account_date,
        client_id=data.client_id,
        client_case_id=data.client_case_id,
        deal_type_id=data.deal_type_id,
        income_type_id=data.income_type_id,
        payment_source_id=data.payment_source_id,
        payment_status_id=data.payment_status_id,
    )


class PaymentService:
    """Orchestrates payment CRUD; every write goes through the payment lifecycle."""

    def __init__(
        self,
        repository: PaymentRepository,
        validator: PaymentReferenceValidator,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repository = repository
        self._validator = validator
        self._clock = clock

    async def get_payment(self, payment_id: int) -> Payment:
        payment = await self._repository.get_by_id(payment_id)
        if payment is None:
            raise EntityNotFoundError("Payment", payment_id)
        return payment

    async def list_payments(
        self, query: PaymentQuery, page: PageRequest | None = None
    ) -> Page[Payment]:
        return await self._repository.search(query, page)

    async def create_payment(self, data: PaymentWrite) -> Payment:
        payment = payment_from_write(data)
        await self._validator.validate(payment)
        payment_lifecycle.prepare_for_create(payment, self._clock())
        created = await self._repository.create(payment)
        logger.info("Created payment %s (%s, %s)", created.id, created.type.value, created.status.value)
        return created

    async def update_payment(self, payment_id: int, data: PaymentWrite) -> Payment:
        payment = await self.get_payment(payment_id)
        incoming = payment_from_write(data)
        await self._validator.validate(incoming)
        payment_lifecycle.apply_update(payment, incoming, self._clock())
        return await self._repository.update(payment)

    async def delete_payment(self, payment_id: int) -> bool:
        exists = await self._repository.get_by_id(payment_id)
        if exists is None:
            raise EntityNotFoundError("Payment", payment_id)
        return await self._repository.delete(payment_id)

    async def lookup_accounts(
        self,
        query: AccountQuery,
        *,
        with_date: bool = False,
        dedupe: bool = False,
    ) -> list[str] | list[AccountReference]:
        """Invoice numbers used on payments, for autocompletion.

        Without ``with_date`` the distinct numbers come back most used first;
        with it every use is listed with its invoice date, newest first, and
        ``dedupe`` collapses repeated (number, date) pairs.
        """
        if with_date:
            return await self._repository.list_account_references(query, distinct=dedupe)
        return await self._repository.list_accounts(query)
