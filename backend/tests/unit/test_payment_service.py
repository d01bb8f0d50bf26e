"""Unit tests for PaymentService and payment reference validation."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from app.application.schemas.payment import PaymentWrite
from app.application.services import PaymentReferenceValidator, PaymentService
from app.domain.entities import (
    AccountQuery,
    Client,
    ClientCase,
    DictionaryEntry,
    DictionaryKind,
    PaymentQuery,
    PaymentStatus,
    PaymentType,
)
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(payments, clients, cases, dictionaries) -> PaymentService:
    validator = PaymentReferenceValidator(clients, cases, dictionaries)
    return PaymentService(payments, validator, clock=lambda: NOW)


def _write(**overrides) -> PaymentWrite:
    values = {"amount": Decimal("500"), "date": date(2024, 7, 1)}
    values.update(overrides)
    return PaymentWrite(**values)


@pytest.mark.asyncio
async def test_create_payment_derives_status(service: PaymentService):
    payment = await service.create_payment(_write(date=date(2024, 6, 1)))

    assert payment.id is not None
    assert payment.status == PaymentStatus.OVERDUE
    assert payment.initial_date == date(2024, 6, 1)


@pytest.mark.asyncio
async def test_update_payment_marks_completed(service: PaymentService):
    created = await service.create_payment(_write())

    updated = await service.update_payment(
        created.id, _write(paid_amount=Decimal("500"), paid_date=date(2024, 6, 20))
    )

    assert updated.status == PaymentStatus.COMPLETED
    assert updated.date == date(2024, 6, 20)
    assert "Payment completed 20.06.2024." in updated.system_notes


@pytest.mark.asyncio
async def test_get_missing_payment_raises(service: PaymentService):
    with pytest.raises(EntityNotFoundError):
        await service.get_payment(999)


@pytest.mark.asyncio
async def test_delete_missing_payment_raises(service: PaymentService):
    with pytest.raises(EntityNotFoundError):
        await service.delete_payment(42)


@pytest.mark.asyncio
async def test_list_payments_filters_by_type(service: PaymentService):
    await service.create_payment(_write(type=PaymentType.INCOME))
    await service.create_payment(_write(type=PaymentType.EXPENSE))

    page = await service.list_payments(PaymentQuery(type=PaymentType.EXPENSE.value))

    assert page.total == 1
    assert page.items[0].type == PaymentType.EXPENSE


@pytest.mark.asyncio
async def test_unknown_client_is_rejected(service: PaymentService):
    with pytest.raises(InvalidReferenceError, match="ClientId"):
        await service.create_payment(_write(client_id=7))


@pytest.mark.asyncio
async def test_case_of_another_client_is_rejected(service: PaymentService, clients, cases):
    first = await clients.create(Client(name="First"))
    second = await clients.create(Client(name="Second"))
    case = await cases.create(ClientCase(client_id=second.id, title="Lease"))

    with pytest.raises(InvalidReferenceError, match="does not belong"):
        await service.create_payment(_write(client_id=first.id, client_case_id=case.id))


@pytest.mark.asyncio
async def test_income_type_must_match_payment_type(service: PaymentService, dictionaries):
    income_type = await dictionaries.create(
        DictionaryEntry(
            kind=DictionaryKind.INCOME_TYPES, name="Consulting", payment_type=PaymentType.INCOME
        )
    )

    with pytest.raises(InvalidReferenceError, match="IncomeType.PaymentType mismatches"):
        await service.create_payment(
            _write(type=PaymentType.EXPENSE, income_type_id=income_type.id)
        )

    created = await service.create_payment(_write(income_type_id=income_type.id))
    assert created.income_type_id == income_type.id


@pytest.mark.asyncio
async def test_payment_source_without_type_accepts_any_payment(service: PaymentService, dictionaries):
    source = await dictionaries.create(
        DictionaryEntry(kind=DictionaryKind.PAYMENT_SOURCES, name="Cash")
    )

    created = await service.create_payment(
        _write(type=PaymentType.EXPENSE, payment_source_id=source.id)
    )

    assert created.payment_source_id == source.id


@pytest.mark.asyncio
async def test_unknown_dictionary_ids_are_rejected(service: PaymentService):
    with pytest.raises(InvalidReferenceError, match="Unknown DealTypeId"):
        await service.create_payment(_write(deal_type_id=3))
    with pytest.raises(InvalidReferenceError, match="Unknown PaymentStatusId"):
        await service.create_payment(_write(payment_status_id=3))


@pytest.mark.asyncio
async def test_update_validates_references(service: PaymentService):
    created = await service.create_payment(_write())

    with pytest.raises(InvalidReferenceError):
        await service.update_payment(created.id, _write(client_case_id=12))


@pytest.mark.asyncio
async def test_account_lookup_ranks_by_use_and_filters(service: PaymentService, clients):
    client = await clients.create(Client(name="Acme"))
    for account, day in (("INV-2", 1), ("INV-1", 2), ("INV-2", 3), ("OTHER", 4)):
        await service.create_payment(
            _write(account=account, date=date(2024, 7, day), client_id=client.id)
        )
    await service.create_payment(_write(account="INV-9"))

    ranked = await service.lookup_accounts(AccountQuery(client_id=client.id))
    matching = await service.lookup_accounts(AccountQuery(search="inv", take=2))

    assert ranked == ["INV-2", "INV-1", "OTHER"]
    assert matching == ["INV-2", "INV-1"]


@pytest.mark.asyncio
async def test_account_lookup_with_dates_newest_first(service: PaymentService):
    await service.create_payment(
        _write(account="A-1", account_date=date(2024, 5, 1), date=date(2024, 7, 1))
    )
    await service.create_payment(
        _write(account="A-1", account_date=date(2024, 5, 1), date=date(2024, 8, 1))
    )
    await service.create_payment(_write(account="A-2", date=date(2024, 6, 20)))

    every_use = await service.lookup_accounts(AccountQuery(search="A-"), with_date=True)
    distinct = await service.lookup_accounts(
        AccountQuery(search="A-"), with_date=True, dedupe=True
    )

    assert [(r.account, r.account_date) for r in every_use] == [
        ("A-2", None),
        ("A-1", date(2024, 5, 1)),
        ("A-1", date(2024, 5, 1)),
    ]
    assert [(r.account, r.account_date) for r in distinct] == [
        ("A-2", None),
        ("A-1", date(2024, 5, 1)),
    ]
