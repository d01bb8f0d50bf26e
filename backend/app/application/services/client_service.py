"""Application services for clients and client cases."""

import logging
from decimal import Decimal

from app.application.interfaces import (
    CaseRepository,
    ClientRepository,
    DictionaryRepository,
    LegalEntityRepository,
    PaymentRepository,
)
from app.application.schemas.client import CaseWrite, ClientStatsResponse, ClientWrite
from app.application.schemas.payment import PaymentResponse
from app.domain.entities import (
    CaseQuery,
    Client,
    ClientCase,
    ClientQuery,
    DictionaryKind,
    Page,
    PageRequest,
    Payment,
    PaymentQuery,
    PaymentStatus,
    PaymentType,
    Sort,
)
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError

logger = logging.getLogger(__name__)

RECENT_PAYMENTS = 10
_ZERO = Decimal("0")


class ClientService:
    """Client CRUD plus per-client payment totals."""

    def __init__(
        self,
        clients: ClientRepository,
        cases: CaseRepository,
        payments: PaymentRepository,
        dictionaries: DictionaryRepository,
        legal_entities: LegalEntityRepository,
    ):
        self._clients = clients
        self._cases = cases
        self._payments = payments
        self._dictionaries = dictionaries
        self._legal_entities = legal_entities

    async def get_client(self, client_id: int, *, with_cases: bool = False) -> Client:
        client = await self._clients.get_by_id(client_id, with_cases=with_cases)
        if client is None:
            raise EntityNotFoundError("Client", client_id)
        return client

    async def list_clients(self, query: ClientQuery, page: PageRequest | None = None) -> Page[Client]:
        return await self._clients.search(query, page)

    async def create_client(self, data: ClientWrite) -> Client:
        await self._check_references(data)
        return await self._clients.create(Client(**data.model_dump()))

    async def update_client(self, client_id: int, data: ClientWrite) -> Client:
        client = await self.get_client(client_id)
        await self._check_references(data)
        for name, value in data.model_dump().items():
            setattr(client, name, value)
        return await self._clients.update(client)

    async def delete_client(self, client_id: int) -> bool:
        await self.get_client(client_id)
        detached = await self._payments.detach_client(client_id)
        await self._cases.delete_by_client(client_id)
        logger.info("Deleting client %s; detached %d payments", client_id, detached)
        return await self._clients.delete(client_id)

    async def _check_references(self, data: ClientWrite) -> None:
        if data.client_status_id is not None and await self._dictionaries.get(
            DictionaryKind.CLIENT_STATUSES, data.client_status_id
        ) is None:
            raise InvalidReferenceError(f"Unknown ClientStatusId {data.client_status_id}")
        if data.legal_entity_id is not None and await self._legal_entities.get_by_id(
            data.legal_entity_id
        ) is None:
            raise InvalidReferenceError(f"Unknown LegalEntityId {data.legal_entity_id}")

    async def get_stats(self, client_id: int, case_id: int | None = None) -> ClientStatsResponse:
        await self.get_client(client_id)
        page = await self._payments.search(
            PaymentQuery(client_id=client_id, case_id=case_id, sort=Sort("date", descending=True))
        )
        payments = page.items

        def paid_sum(kind: PaymentType) -> Decimal:
            return sum((p.paid_amount for p in payments if p.type == kind), _ZERO)

        def outstanding_sum(kind: PaymentType) -> Decimal:
            return sum(
                (p.outstanding_amount for p in payments if p.type == kind and _is_open(p)),
                _ZERO,
            )

        total_income = paid_sum(PaymentType.INCOME)
        total_expenses = paid_sum(PaymentType.EXPENSE)
        paid_dates = [p.paid_date or p.last_payment_date for p in payments if p.paid_amount > 0]
        paid_dates = [d for d in paid_dates if d is not None]

        return ClientStatsResponse(
            client_id=client_id,
            case_id=case_id,
            total_income=total_income,
            total_expenses=total_expenses,
            net_amount=total_income - total_expenses,
            outstanding_income=outstanding_sum(PaymentType.INCOME),
            outstanding_expenses=outstanding_sum(PaymentType.EXPENSE),
            total_payments=len(payments),
            paid_payments=sum(1 for p in payments if p.is_paid),
            pending_payments=sum(1 for p in payments if p.status == PaymentStatus.PENDING),
            overdue_payments=sum(1 for p in payments if p.status == PaymentStatus.OVERDUE),
            last_payment_date=max(paid_dates) if paid_dates else None,
            recent_payments=[
                PaymentResponse.model_validate(p, from_attributes=True)
                for p in payments[:RECENT_PAYMENTS]
            ],
        )


def _is_open(payment: Payment) -> bool:
    return payment.status in (PaymentStatus.PENDING, PaymentStatus.OVERDUE)


class CaseService:
    """Client case CRUD; deleting a case detaches its payments first."""

    def __init__(
        self,
        cases: CaseRepository,
        clients: ClientRepository,
        payments: PaymentRepository,
    ):
        self._cases = cases
        self._clients = clients
        self._payments = payments

    async def get_case(self, case_id: int) -> ClientCase:
        case = await self._cases.get_by_id(case_id)
        if case is None:
            raise EntityNotFoundError("ClientCase", case_id)
        return case

    async def get_case_payments(self, case_id: int) -> list[Payment]:
        page = await self._payments.search(PaymentQuery(case_id=case_id))
        return page.items

    async def list_cases(self, query: CaseQuery, page: PageRequest | None = None) -> Page[ClientCase]:
        return await self._cases.search(query, page)

    async def create_case(self, data: CaseWrite) -> ClientCase:
        await self._require_client(data.client_id)
        return await self._cases.create(ClientCase(**data.model_dump()))

    async def update_case(self, case_id: int, data: CaseWrite) -> ClientCase:
        case = await self.get_case(case_id)
        await self._require_client(data.client_id)
        for name, value in data.model_dump().items():
            setattr(case, name, value)
        return await self._cases.update(case)

    async def delete_case(self, case_id: int) -> bool:
        await self.get_case(case_id)
        await self._payments.detach_case(case_id)
        return await self._cases.delete(case_id)

    async def _require_client(self, client_id: int) -> None:
        if await self._clients.get_by_id(client_id) is None:
            raise InvalidReferenceError(f"Unknown ClientId {client_id}")
