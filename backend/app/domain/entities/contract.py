"""Domain entity for contracts."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from app.domain.entities.client import ClientBrief


@dataclass
class Contract:
    """A signed agreement linked to one or more clients."""

    number: str
    date: date
    id: int | None = None
    title: str = ""
    description: str = ""
    amount: Decimal | None = None
    valid_until: date | None = None
    client_ids: list[int] = field(default_factory=list)
    clients: list[ClientBrief] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
