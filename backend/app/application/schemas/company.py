"""Pydantic DTOs for companies."""

from datetime import datetime

from pydantic import Field

from app.application.schemas.common import CamelModel


class CompanyMemberWrite(CamelModel):
    client_id: int
    role: str = Field("", max_length=100)


class CompanyWrite(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    full_name: str = ""
    short_name: str = ""
    inn: str = Field("", max_length=20)
    kpp: str = Field("", max_length=20)
    email: str = ""
    phone: str = ""
    actual_address: str = ""
    legal_address: str = ""
    notes: str = ""
    is_active: bool = True
    members: list[CompanyMemberWrite] = []


class CompanyMemberResponse(CamelModel):
    client_id: int
    client_name: str | None
    role: str
    created_at: datetime


class CompanyResponse(CamelModel):
    id: int
    name: str
    full_name: str
    short_name: str
    inn: str
    kpp: str
    email: str
    phone: str
    actual_address: str
    legal_address: str
    notes: str
    is_active: bool
    created_at: datetime
    members: list[CompanyMemberResponse]
