"""Pydantic DTOs for lookup dictionaries."""

from datetime import datetime

from pydantic import Field

from app.application.schemas.common import CamelModel
from app.domain.entities import PaymentType


class DictionaryWrite(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    color_hex: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}([0-9A-Fa-f]{2})?$")
    is_active: bool = True
    payment_type: PaymentType | None = None


class DictionaryResponse(CamelModel):
    id: int
    name: str
    description: str
    color_hex: str
    is_active: bool
    payment_type: PaymentType | None = None
    created_at: datetime


class ToggleActiveResponse(CamelModel):
    id: int
    is_active: bool
