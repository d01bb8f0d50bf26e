"""Pydantic DTOs for contracts."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from app.application.schemas.common import CamelModel


class ContractWrite(CamelModel):
    number: str = Field(..., min_length=1, max_length=100)
    date: date
    title: str = Field("", max_length=300)
    description: str = ""
    amount: Decimal | None = Field(None, ge=0)
    valid_until: date | None = None
    client_ids: list[int] = []


class ContractClientResponse(CamelModel):
    id: int
    name: str
    client_status_id: int | None
    client_status_name: str | None
    client_status_color_hex: str | None


class ContractResponse(CamelModel):
    id: int
    number: str
    title: str
    date: date
    description: str
    amount: float | None
    valid_until: date | None
    client_ids: list[int]
    clients: list[ContractClientResponse] = []
    created_at: datetime
    updated_at: datetime | None
