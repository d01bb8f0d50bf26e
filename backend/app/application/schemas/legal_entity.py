"""Pydantic DTOs for legal entities."""

from datetime import datetime

from pydantic import Field

from app.application.schemas.common import CamelModel


class LegalEntityWrite(CamelModel):
    short_name: str = Field(..., min_length=1, max_length=200)
    full_name: str | None = Field(None, max_length=500)
    inn: str | None = Field(None, max_length=20)
    kpp: str | None = Field(None, max_length=20)
    ogrn: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=500)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=200)
    director: str | None = Field(None, max_length=200)
    notes: str | None = None
    client_ids: list[int] = []


class LegalEntityClientResponse(CamelModel):
    id: int
    name: str
    phone: str
    email: str
    is_active: bool


class LegalEntityResponse(CamelModel):
    id: int
    short_name: str
    full_name: str | None
    inn: str | None
    kpp: str | None
    ogrn: str | None
    address: str | None
    phone: str | None
    email: str | None
    director: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime | None
    clients_count: int
    clients: list[LegalEntityClientResponse]
