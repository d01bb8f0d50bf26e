"""Unit tests for ClientService and CaseService."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from app.application.schemas.client import CaseWrite, ClientWrite
from app.application.services import CaseService, ClientService
from app.application.services.payment_lifecycle import prepare_for_create
from app.domain.entities import (
    ClientCase,
    DictionaryEntry,
    DictionaryKind,
    LegalEntity,
    Payment,
    PaymentType,
)
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError

NOW = datetime(2024, 6, 15, tzinfo=timezone.utc)


@pytest.fixture
def client_service(clients, cases, payments, dictionaries, legal_entities) -> ClientService:
    return ClientService(clients, cases, payments, dictionaries, legal_entities)


@pytest.fixture
def case_service(cases, clients, payments) -> CaseService:
    return CaseService(cases, clients, payments)


async def _add_payment(payments, **values) -> Payment:
    payment = Payment(**values)
    prepare_for_create(payment, NOW)
    return await payments.create(payment)


@pytest.mark.asyncio
async def test_create_and_update_client(client_service: ClientService):
    client = await client_service.create_client(ClientWrite(name="Acme", email="a@acme.test"))

    updated = await client_service.update_client(client.id, ClientWrite(name="Acme Ltd"))

    assert updated.name == "Acme Ltd"
    assert updated.email == ""


@pytest.mark.asyncio
async def test_client_links_status_and_legal_entity(
    client_service: ClientService, dictionaries, legal_entities
):
    vip = await dictionaries.create(
        DictionaryEntry(kind=DictionaryKind.CLIENT_STATUSES, name="VIP")
    )
    entity = await legal_entities.create(LegalEntity(short_name="Acme LLC"), [])

    client = await client_service.create_client(
        ClientWrite(name="Acme", client_status_id=vip.id, legal_entity_id=entity.id)
    )

    assert client.client_status_id == vip.id
    assert client.legal_entity_id == entity.id
    assert vip.color_hex == "#2563EB"


@pytest.mark.asyncio
async def test_client_rejects_unknown_status_and_legal_entity(
    client_service: ClientService, dictionaries
):
    deal_type = await dictionaries.create(
        DictionaryEntry(kind=DictionaryKind.DEAL_TYPES, name="Retainer")
    )

    with pytest.raises(InvalidReferenceError, match="ClientStatusId"):
        await client_service.create_client(ClientWrite(name="Acme", client_status_id=deal_type.id))
    with pytest.raises(InvalidReferenceError, match="LegalEntityId"):
        await client_service.create_client(ClientWrite(name="Acme", legal_entity_id=42))

    client = await client_service.create_client(ClientWrite(name="Acme"))
    with pytest.raises(InvalidReferenceError):
        await client_service.update_client(client.id, ClientWrite(name="Acme", legal_entity_id=42))


@pytest.mark.asyncio
async def test_delete_client_detaches_payments_and_removes_cases(
    client_service: ClientService, clients, cases, payments
):
    client = await client_service.create_client(ClientWrite(name="Acme"))
    case = await cases.create(ClientCase(client_id=client.id, title="Audit"))
    payment = await _add_payment(
        payments,
        amount=Decimal("100"),
        date=date(2024, 7, 1),
        client_id=client.id,
        client_case_id=case.id,
    )

    assert await client_service.delete_client(client.id) is True

    assert client.id not in clients.clients
    assert case.id not in cases.cases
    assert payments.payments[payment.id].client_id is None
    assert payments.payments[payment.id].client_case_id is None


@pytest.mark.asyncio
async def test_delete_missing_client_raises(client_service: ClientService):
    with pytest.raises(EntityNotFoundError):
        await client_service.delete_client(5)


@pytest.mark.asyncio
async def test_client_stats_totals(client_service: ClientService, payments):
    client = await client_service.create_client(ClientWrite(name="Acme"))
    await _add_payment(
        payments, amount=Decimal("1000"), date=date(2024, 6, 1), client_id=client.id, is_paid=True
    )
    await _add_payment(
        payments,
        amount=Decimal("400"),
        date=date(2024, 6, 1),
        client_id=client.id,
        paid_amount=Decimal("100"),
    )
    await _add_payment(
        payments,
        amount=Decimal("300"),
        date=date(2024, 8, 1),
        client_id=client.id,
        type=PaymentType.EXPENSE,
    )

    stats = await client_service.get_stats(client.id)

    assert stats.total_income == 1100
    assert stats.total_expenses == 0
    assert stats.net_amount == 1100
    assert stats.outstanding_income == 300
    assert stats.outstanding_expenses == 300
    assert stats.total_payments == 3
    assert stats.paid_payments == 1
    assert stats.pending_payments == 1
    assert stats.overdue_payments == 1
    assert len(stats.recent_payments) == 3


@pytest.mark.asyncio
async def test_case_requires_existing_client(case_service: CaseService):
    with pytest.raises(InvalidReferenceError):
        await case_service.create_case(CaseWrite(client_id=99, title="Orphan"))


@pytest.mark.asyncio
async def test_delete_case_keeps_payments(case_service: CaseService, client_service, payments):
    client = await client_service.create_client(ClientWrite(name="Acme"))
    case = await case_service.create_case(CaseWrite(client_id=client.id, title="Audit"))
    payment = await _add_payment(
        payments,
        amount=Decimal("50"),
        date=date(2024, 7, 1),
        client_id=client.id,
        client_case_id=case.id,
    )

    await case_service.delete_case(case.id)

    assert payments.payments[payment.id].client_id == client.id
    assert payments.payments[payment.id].client_case_id is None
