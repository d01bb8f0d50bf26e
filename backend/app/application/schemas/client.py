"""Pydantic DTOs for clients and cases."""

from datetime import date, datetime

from pydantic import Field

from app.application.schemas.common import CamelModel
from app.application.schemas.payment import PaymentResponse
from app.domain.entities import ClientCaseStatus


class ClientWrite(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field("", max_length=200)
    phone: str = Field("", max_length=50)
    company: str = Field("", max_length=200)
    address: str = Field("", max_length=500)
    notes: str = ""
    is_active: bool = True
    client_status_id: int | None = None
    legal_entity_id: int | None = None


class CaseWrite(CamelModel):
    client_id: int
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    status: ClientCaseStatus = ClientCaseStatus.OPEN


class CaseResponse(CamelModel):
    id: int
    client_id: int
    title: str
    description: str
    status: ClientCaseStatus
    created_at: datetime


class CaseDetailResponse(CaseResponse):
    payments: list[PaymentResponse] = []


class ClientResponse(CamelModel):
    id: int
    name: str
    email: str
    phone: str
    company: str
    address: str
    notes: str
    is_active: bool
    client_status_id: int | None = None
    legal_entity_id: int | None = None
    created_at: datetime


class ClientDetailResponse(ClientResponse):
    cases: list[CaseResponse] = []


class ClientStatsResponse(CamelModel):
    """Money and count totals of one client (optionally one case)."""

    client_id: int
    case_id: int | None = None
    total_income: float
    total_expenses: float
    net_amount: float
    outstanding_income: float
    outstanding_expenses: float
    total_payments: int
    paid_payments: int
    pending_payments: int
    overdue_payments: int
    last_payment_date: date | None = None
    recent_payments: list[PaymentResponse] = []
