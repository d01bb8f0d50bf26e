"""Integration tests for the overdue sweeper against SQLite."""

from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient

from app.application.services import OverdueSweeper
from app.domain.entities import DictionaryEntry, DictionaryKind, Payment, PaymentStatus
from app.infrastructure.database.repositories import (
    SQLAlchemyDictionaryRepository,
    SQLAlchemyPaymentRepository,
)
from app.infrastructure.database.session import async_session_factory


async def _insert(payment: Payment) -> int:
    async with async_session_factory() as session:
        created = await SQLAlchemyPaymentRepository(session).create(payment)
        await session.commit()
        return created.id


async def _load(payment_id: int) -> Payment:
    async with async_session_factory() as session:
        return await SQLAlchemyPaymentRepository(session).get_by_id(payment_id)


@pytest.mark.asyncio
async def test_run_once_flags_only_unpaid_past_due_pending(client: AsyncClient):
    stale = await _insert(Payment(amount=Decimal("90"), date=date(2020, 1, 10)))
    future = await _insert(Payment(amount=Decimal("90"), date=date(2999, 1, 10)))
    cancelled = await _insert(
        Payment(amount=Decimal("90"), date=date(2020, 1, 10), status=PaymentStatus.CANCELLED)
    )
    async with async_session_factory() as session:
        overdue_status = await SQLAlchemyDictionaryRepository(session).create(
            DictionaryEntry(kind=DictionaryKind.PAYMENT_STATUSES, name="Overdue")
        )
        await session.commit()

    sweeper = OverdueSweeper(async_session_factory, today=lambda: date(2024, 1, 1))
    assert await sweeper.run_once() >= 1

    flagged = await _load(stale)
    assert flagged.status == PaymentStatus.OVERDUE
    assert flagged.payment_status_id == overdue_status.id
    assert (await _load(future)).status == PaymentStatus.PENDING
    assert (await _load(cancelled)).status == PaymentStatus.CANCELLED

    assert await sweeper.run_once() == 0


@pytest.mark.asyncio
async def test_sweep_endpoint_requires_admin(client: AsyncClient, admin_headers):
    anonymous = await client.post("/api/payments/sweep-overdue")
    assert anonymous.status_code == 401

    response = await client.post("/api/payments/sweep-overdue", headers=admin_headers)
    assert response.status_code == 200
    assert "updated" in response.json()
