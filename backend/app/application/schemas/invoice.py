"""Pydantic DTOs for invoices (payments carrying an invoice number)."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from app.application.schemas.common import CamelModel
from app.domain.entities import ActStatus, PaymentStatus, PaymentType


class InvoiceWrite(CamelModel):
    number: str = Field(..., max_length=120)
    date: date
    due_date: date | None = None
    amount: Decimal = Field(..., ge=0)
    status: PaymentStatus = PaymentStatus.PENDING
    type: PaymentType = PaymentType.INCOME
    paid_date: date | None = None
    client_id: int
    client_case_id: int | None = None
    description: str = Field("", max_length=500)
    act_reference: str | None = None
    payment_source_id: int | None = None
    income_type_id: int | None = None
    deal_type_id: int | None = None
    payment_status_entity_id: int | None = None


class InvoiceResponse(CamelModel):
    id: int
    number: str
    date: date
    due_date: date
    amount: float
    paid_amount: float
    status: PaymentStatus
    type: PaymentType
    paid_date: date | None
    is_paid: bool
    client_id: int | None
    client_name: str | None
    client_status_id: int | None = None
    client_status_name: str | None = None
    client_status_color_hex: str | None = None
    client_case_id: int | None
    description: str
    act_reference: str | None
    act_id: int | None
    act_number: str | None
    act_status: ActStatus | None
    responsible_id: int | None
    responsible_name: str | None
    payment_source_id: int | None
    income_type_id: int | None
    deal_type_id: int | None
    payment_status_entity_id: int | None
    created_at: datetime


class InvoiceSummaryBucket(CamelModel):
    amount: float = 0
    count: int = 0


class InvoiceSummaryResponse(CamelModel):
    total: InvoiceSummaryBucket
    pending: InvoiceSummaryBucket
    paid: InvoiceSummaryBucket
    overdue: InvoiceSummaryBucket
