"""Domain entity for legal entities (registered organisations clients act for)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class LegalEntityClient:
    """A client linked to a legal entity."""

    id: int
    name: str
    phone: str = ""
    email: str = ""
    is_active: bool = True


@dataclass
class LegalEntity:
    """Registration details of an organisation.

    A client belongs to at most one legal entity; the link lives on the
    client, so ``clients`` is always loaded from there.
    """

    short_name: str
    id: int | None = None
    full_name: str | None = None
    inn: str | None = None
    kpp: str | None = None
    ogrn: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    director: str | None = None
    notes: str | None = None
    clients: list[LegalEntityClient] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    @property
    def clients_count(self) -> int:
        return len(self.clients)

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
