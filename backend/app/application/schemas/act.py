"""Pydantic DTOs for acts."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from app.application.schemas.common import CamelModel
from app.domain.entities import ActStatus


class ActWrite(CamelModel):
    number: str = Field(..., min_length=1, max_length=100)
    date: date
    amount: Decimal = Field(..., ge=0)
    title: str = Field("", max_length=300)
    invoice_number: str | None = Field(None, max_length=120)
    counterparty_inn: str | None = Field(None, max_length=20)
    status: ActStatus = ActStatus.CREATED
    client_id: int | None = None
    responsible_id: int | None = None
    comment: str | None = None


class ActResponse(CamelModel):
    id: int
    number: str
    title: str
    date: date
    amount: float
    invoice_number: str | None
    counterparty_inn: str | None
    status: ActStatus
    client_id: int | None
    client_name: str | None
    responsible_id: int | None
    responsible_name: str | None
    comment: str | None
    created_at: datetime
    updated_at: datetime | None


class ActStatusTotals(CamelModel):
    status: ActStatus
    count: int
    amount: float


class ActSummaryResponse(CamelModel):
    total_count: int
    total_amount: float
    by_status: list[ActStatusTotals]


class ResponsibleResponse(CamelModel):
    id: int
    full_name: str
    email: str
