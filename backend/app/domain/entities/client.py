"""Domain entities for clients and their cases."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ClientCaseStatus(str, Enum):
    """Lifecycle of a client case."""

    OPEN = "Open"
    ON_HOLD = "OnHold"
    CLOSED = "Closed"


@dataclass
class ClientCase:
    """A matter grouping payments under a client."""

    client_id: int
    title: str
    id: int | None = None
    description: str = ""
    status: ClientCaseStatus = ClientCaseStatus.OPEN
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Client:
    """A counterparty (person or organisation) payments are booked against."""

    name: str
    id: int | None = None
    email: str = ""
    phone: str = ""
    company: str = ""
    address: str = ""
    notes: str = ""
    is_active: bool = True
    client_status_id: int | None = None
    legal_entity_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cases: list[ClientCase] = field(default_factory=list)


@dataclass
class ClientBrief:
    """A client reference carried by invoices and contracts, with its status colour."""

    id: int
    name: str
    client_status_id: int | None = None
    client_status_name: str | None = None
    client_status_color_hex: str | None = None
