"""Pydantic DTOs for the Payment feature."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from app.application.schemas.common import CamelModel
from app.domain.entities import PaymentStatus, PaymentType


class PaymentWrite(CamelModel):
    """Body of POST and PUT: PUT replaces every editable field."""

    amount: Decimal = Field(..., ge=0, examples=[1000])
    date: date
    type: PaymentType = PaymentType.INCOME
    status: PaymentStatus = PaymentStatus.PENDING
    paid_amount: Decimal = Field(Decimal("0"), ge=0)
    is_paid: bool = False
    paid_date: date | None = None
    initial_date: date | None = None
    reschedule_count: int = 0
    description: str = Field("", max_length=500)
    notes: str = ""
    account: str | None = Field(None, max_length=120)
    account_date: date | None = None
    client_id: int | None = None
    client_case_id: int | None = None
    deal_type_id: int | None = None
    income_type_id: int | None = None
    payment_source_id: int | None = None
    payment_status_id: int | None = None


class TimelineEntryResponse(CamelModel):
    timestamp: datetime
    event_type: str
    amount_delta: float | None = None
    effective_date: date | None = None
    previous_date: date | None = None
    new_date: date | None = None
    previous_amount: float | None = None
    new_amount: float | None = None
    total_paid: float | None = None
    outstanding: float | None = None
    previous_status: PaymentStatus | None = None
    new_status: PaymentStatus | None = None
    comment: str | None = None


class PaymentResponse(CamelModel):
    """Schema returned to the client."""

    id: int
    amount: float
    paid_amount: float
    outstanding_amount: float
    date: date
    initial_date: date | None
    paid_date: date | None
    last_payment_date: date | None
    is_paid: bool
    status: PaymentStatus
    type: PaymentType
    description: str
    notes: str
    system_notes: str
    reschedule_count: int
    timeline: list[TimelineEntryResponse]
    account: str | None
    account_date: date | None
    client_id: int | None
    client_case_id: int | None
    deal_type_id: int | None
    income_type_id: int | None
    payment_source_id: int | None
    payment_status_id: int | None
    created_at: datetime


class AccountReferenceResponse(CamelModel):
    account: str
    account_date: date | None
