"""Domain value objects for filtered, sorted and paginated listings."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Generic, TypeVar

T = TypeVar("T")

MAX_PAGE_SIZE = 500
DEFAULT_PAGE_SIZE = 50


@dataclass
class PageRequest:
    """Offset pagination parameters, clamped on construction."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE
    min_page_size: int = 1

    def __post_init__(self) -> None:
        self.page = max(1, self.page or 1)
        size = self.page_size or DEFAULT_PAGE_SIZE
        self.page_size = min(max(size, self.min_page_size), self.max_page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class Page(Generic[T]):
    """One page of results plus the unpaginated total."""

    items: list[T]
    total: int
    page: int
    page_size: int


@dataclass
class Sort:
    """An allow-listed sort key and direction."""

    field: str
    descending: bool = False

    @classmethod
    def parse(
        cls,
        requested: str | None,
        direction: str | None,
        allowed: frozenset[str],
        default: str,
        default_descending: bool = False,
    ) -> "Sort":
        """Resolve a sort request against an allow-list (case-insensitive)."""
        key = (requested or "").strip().lower()
        if key not in allowed:
            key = default
        if direction is None or not direction.strip():
            return cls(field=key, descending=default_descending)
        return cls(field=key, descending=direction.strip().lower() == "desc")


@dataclass
class PaymentQuery:
    from_date: date | None = None
    to_date: date | None = None
    client_id: int | None = None
    case_id: int | None = None
    search: str | None = None
    type: str | None = None
    status: str | None = None
    sort: Sort = field(default_factory=lambda: Sort("date"))


@dataclass
class AccountQuery:
    """Invoice-number lookup over payments; ``take`` caps the number of rows."""

    client_id: int | None = None
    case_id: int | None = None
    search: str | None = None
    take: int = 50


@dataclass
class ClientQuery:
    search: str | None = None
    is_active: bool | None = None
    sort: Sort = field(default_factory=lambda: Sort("name"))


@dataclass
class CaseQuery:
    client_id: int | None = None
    status: str | None = None
    search: str | None = None
    sort: Sort = field(default_factory=lambda: Sort("createdat", descending=True))


@dataclass
class CompanyQuery:
    search: str | None = None
    is_active: bool | None = None


@dataclass
class ContractQuery:
    from_date: date | None = None
    to_date: date | None = None
    client_id: int | None = None
    search: str | None = None
    sort: Sort = field(default_factory=lambda: Sort("date", descending=True))


@dataclass
class ActQuery:
    from_date: date | None = None
    to_date: date | None = None
    status: str | None = None
    client_id: int | None = None
    responsible_id: int | None = None
    search: str | None = None
    sort: Sort = field(default_factory=lambda: Sort("date", descending=True))


@dataclass
class InvoiceQuery:
    from_date: date | None = None
    to_date: date | None = None
    status: str | None = None
    type: str | None = None
    client_id: int | None = None
    invoice_numbers: list[str] | None = None
    search: str | None = None
    sort: Sort = field(default_factory=lambda: Sort("date", descending=True))


@dataclass
class ActivityQuery:
    from_time: datetime | None = None
    to_time: datetime | None = None
    user_id: int | None = None
    category: str | None = None
    action: str | None = None
    section: str | None = None
    http_method: str | None = None
    status: str | None = None
    search: str | None = None
