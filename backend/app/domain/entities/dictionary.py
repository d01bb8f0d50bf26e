"""Domain entities for lookup dictionaries."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from app.domain.entities.payment import PaymentType


class DictionaryKind(str, Enum):
    """The lookup dictionaries, keyed by their URL segment."""

    DEAL_TYPES = "deal-types"
    INCOME_TYPES = "income-types"
    PAYMENT_SOURCES = "payment-sources"
    PAYMENT_STATUSES = "payment-statuses"
    CLIENT_STATUSES = "client-statuses"

    @property
    def default_color(self) -> str:
        return _DEFAULT_COLORS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_DEFAULT_COLORS = {
    DictionaryKind.DEAL_TYPES: "#3B82F6",
    DictionaryKind.INCOME_TYPES: "#10B981",
    DictionaryKind.PAYMENT_SOURCES: "#6B7280",
    DictionaryKind.PAYMENT_STATUSES: "#6B7280",
    DictionaryKind.CLIENT_STATUSES: "#2563EB",
}

_LABELS = {
    DictionaryKind.DEAL_TYPES: "DealType",
    DictionaryKind.INCOME_TYPES: "IncomeType",
    DictionaryKind.PAYMENT_SOURCES: "PaymentSource",
    DictionaryKind.PAYMENT_STATUSES: "PaymentStatus",
    DictionaryKind.CLIENT_STATUSES: "ClientStatus",
}


@dataclass
class DictionaryEntry:
    """A labelled, colourable, activatable lookup value.

    ``payment_type`` is mandatory for income types, optional for payment
    sources and unused by the other kinds.
    """

    kind: DictionaryKind
    name: str
    id: int | None = None
    description: str = ""
    color_hex: str | None = None
    is_active: bool = True
    payment_type: PaymentType | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.color_hex:
            self.color_hex = self.kind.default_color

    def toggle_active(self) -> bool:
        self.is_active = not self.is_active
        return self.is_active
