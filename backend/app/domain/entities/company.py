"""Domain entities for companies and their client members."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class CompanyMembership:
    """Link between a company and a client, carrying the client's role label."""

    client_id: int
    role: str = ""
    company_id: int | None = None
    client_name: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Company:
    """An organisation with registration details and role-labelled client members."""

    name: str
    id: int | None = None
    full_name: str = ""
    short_name: str = ""
    inn: str = ""
    kpp: str = ""
    email: str = ""
    phone: str = ""
    actual_address: str = ""
    legal_address: str = ""
    notes: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    members: list[CompanyMembership] = field(default_factory=list)
