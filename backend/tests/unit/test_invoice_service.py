"""Unit tests for InvoiceService: invoices are payments with an invoice number."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio

from app.application.schemas.invoice import InvoiceWrite
from app.application.services import InvoiceService, PaymentReferenceValidator
from app.domain.entities import (
    Act,
    ActStatus,
    Client,
    DictionaryEntry,
    DictionaryKind,
    InvoiceQuery,
    PaymentStatus,
    PaymentType,
)
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(payments, acts, clients, cases, dictionaries) -> InvoiceService:
    validator = PaymentReferenceValidator(clients, cases, dictionaries)
    return InvoiceService(payments, acts, clients, validator, clock=lambda: NOW)


@pytest_asyncio.fixture
async def client(clients, dictionaries) -> Client:
    status = await dictionaries.create(
        DictionaryEntry(kind=DictionaryKind.CLIENT_STATUSES, name="Regular", color_hex="#112233")
    )
    return await clients.create(Client(name="Acme", client_status_id=status.id))


def _write(client_id: int, **overrides) -> InvoiceWrite:
    values = {
        "number": "INV-1",
        "date": date(2024, 6, 1),
        "due_date": date(2024, 7, 1),
        "amount": Decimal("1200"),
        "client_id": client_id,
    }
    values.update(overrides)
    return InvoiceWrite(**values)


@pytest.mark.asyncio
async def test_invoice_is_stored_as_payment(service: InvoiceService, payments, client):
    invoice = await service.create_invoice(
        _write(client.id, number=" INV-1 ", act_reference=" ACT-5 ", description=" Audit ")
    )

    stored = payments.payments[invoice.id]
    assert stored.account == "INV-1"
    assert stored.account_date == date(2024, 6, 1)
    assert stored.date == date(2024, 7, 1)
    assert stored.notes == "ACT-5"
    assert stored.type == PaymentType.INCOME
    assert stored.status == PaymentStatus.PENDING
    assert invoice.number == "INV-1"
    assert invoice.due_date == date(2024, 7, 1)
    assert invoice.client_name == "Acme"
    assert invoice.client_status_name == "Regular"
    assert invoice.client_status_color_hex == "#112233"


@pytest.mark.asyncio
async def test_completed_invoice_is_fully_paid(service: InvoiceService, client):
    invoice = await service.create_invoice(
        _write(client.id, status=PaymentStatus.COMPLETED, paid_date=date(2024, 6, 10))
    )

    assert invoice.is_paid is True
    assert invoice.paid_amount == 1200
    assert invoice.paid_date == date(2024, 6, 10)
    assert invoice.status == PaymentStatus.COMPLETED


@pytest.mark.asyncio
async def test_number_and_client_are_required(service: InvoiceService, client):
    with pytest.raises(InvalidReferenceError, match="number is required"):
        await service.create_invoice(_write(client.id, number="  "))
    with pytest.raises(InvalidReferenceError, match="ClientId"):
        await service.create_invoice(_write(client.id + 100))


@pytest.mark.asyncio
async def test_reopening_invoice_clears_paid_fields(service: InvoiceService, client):
    invoice = await service.create_invoice(
        _write(client.id, status=PaymentStatus.COMPLETED, paid_date=date(2024, 6, 10))
    )

    reopened = await service.update_invoice(
        invoice.id, _write(client.id, status=PaymentStatus.PENDING)
    )

    assert reopened.is_paid is False
    assert reopened.paid_amount == 0
    assert reopened.paid_date is None


@pytest.mark.asyncio
async def test_latest_act_is_joined_by_number(service: InvoiceService, acts, client):
    invoice = await service.create_invoice(_write(client.id))
    await acts.create(
        Act(number="A-1", date=date(2024, 6, 2), amount=Decimal("1"), invoice_number="INV-1")
    )
    latest = await acts.create(
        Act(
            number="A-2",
            date=date(2024, 6, 5),
            amount=Decimal("1"),
            invoice_number="INV-1",
            status=ActStatus.SIGNED,
            responsible_id=7,
            responsible_name="Jane Roe",
        )
    )

    fetched = await service.get_invoice(invoice.id)

    assert fetched.act_id == latest.id
    assert fetched.act_number == "A-2"
    assert fetched.act_status == ActStatus.SIGNED
    assert fetched.responsible_name == "Jane Roe"


@pytest.mark.asyncio
async def test_summary_buckets_by_status(service: InvoiceService, client):
    await service.create_invoice(_write(client.id, number="I-1", amount=Decimal("100")))
    await service.create_invoice(
        _write(client.id, number="I-2", amount=Decimal("250"), status=PaymentStatus.COMPLETED)
    )
    await service.create_invoice(
        _write(client.id, number="I-3", amount=Decimal("50"), due_date=date(2024, 6, 1))
    )

    summary = await service.summary(InvoiceQuery())

    assert (summary.total.count, summary.total.amount) == (3, 400)
    assert (summary.pending.count, summary.pending.amount) == (1, 100)
    assert (summary.paid.count, summary.paid.amount) == (1, 250)
    assert (summary.overdue.count, summary.overdue.amount) == (1, 50)


@pytest.mark.asyncio
async def test_payment_without_number_is_not_an_invoice(service: InvoiceService, payments):
    with pytest.raises(EntityNotFoundError):
        await service.get_invoice(404)
