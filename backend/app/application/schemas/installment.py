"""Pydantic DTOs for the installment calculator."""

from datetime import date
from decimal import Decimal

from pydantic import Field

from app.application.schemas.common import CamelModel
from app.domain.entities import RoundingMode


class InstallmentRequest(CamelModel):
    total: Decimal = Field(..., ge=0, examples=[100000])
    down_payment: Decimal = Field(Decimal("0"), ge=0)
    annual_rate: Decimal = Field(..., ge=0, le=1000, examples=[5.5])
    months: int = Field(..., examples=[60])
    start_date: date
    rounding_mode: RoundingMode = RoundingMode.NONE
    rounding_step: Decimal | None = Field(None, gt=0, examples=[100])


class InstallmentItemResponse(CamelModel):
    date: date
    principal: float
    interest: float
    payment: float
    balance: float


class InstallmentResponse(CamelModel):
    overpay: float
    to_pay: float
    items: list[InstallmentItemResponse]
