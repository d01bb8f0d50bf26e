"""Domain entity for acts (certificates of completed work)."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum


class ActStatus(str, Enum):
    """Document flow state of an act."""

    CREATED = "Created"
    TRANSFERRED = "Transferred"
    SIGNED = "Signed"
    TERMINATED = "Terminated"


@dataclass
class Act:
    """An act of completed work, optionally tied to an invoice number."""

    number: str
    date: date
    amount: Decimal
    id: int | None = None
    title: str = ""
    invoice_number: str | None = None
    counterparty_inn: str | None = None
    status: ActStatus = ActStatus.CREATED
    client_id: int | None = None
    client_name: str | None = None
    responsible_id: int | None = None
    responsible_name: str | None = None
    comment: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
