"""Domain entities for payments: planned and received money movements."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum


class PaymentStatus(str, Enum):
    """Canonical stored status of a payment."""

    PENDING = "Pending"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"
    PROCESSING = "Processing"
    CANCELLED = "Cancelled"


class PaymentType(str, Enum):
    """Direction of the money movement."""

    INCOME = "Income"
    EXPENSE = "Expense"


class TimelineEventType(str, Enum):
    """Kinds of structured history entries kept on a payment."""

    CREATED = "created"
    PARTIAL_PAYMENT = "partialPayment"
    AMOUNT_ADJUSTED = "amountAdjusted"
    RESCHEDULED = "rescheduled"
    STATUS_CHANGED = "statusChanged"
    FINALIZED = "finalized"


@dataclass
class PaymentTimelineEntry:
    """One structured event in a payment's history."""

    event_type: TimelineEventType
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    amount_delta: Decimal | None = None
    effective_date: date | None = None
    previous_date: date | None = None
    new_date: date | None = None
    previous_amount: Decimal | None = None
    new_amount: Decimal | None = None
    total_paid: Decimal | None = None
    outstanding: Decimal | None = None
    previous_status: PaymentStatus | None = None
    new_status: PaymentStatus | None = None
    comment: str | None = None

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict (camelCase keys, str decimals)."""

        def _dec(value: Decimal | None) -> str | None:
            return None if value is None else str(value)

        def _day(value: date | None) -> str | None:
            return None if value is None else value.isoformat()

        return {
            "timestamp": self.timestamp.isoformat(),
            "eventType": self.event_type.value,
            "amountDelta": _dec(self.amount_delta),
            "effectiveDate": _day(self.effective_date),
            "previousDate": _day(self.previous_date),
            "newDate": _day(self.new_date),
            "previousAmount": _dec(self.previous_amount),
            "newAmount": _dec(self.new_amount),
            "totalPaid": _dec(self.total_paid),
            "outstanding": _dec(self.outstanding),
            "previousStatus": self.previous_status.value if self.previous_status else None,
            "newStatus": self.new_status.value if self.new_status else None,
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "PaymentTimelineEntry":
        """Inverse of :meth:`to_dict`; tolerates missing keys."""

        def _dec(key: str) -> Decimal | None:
            value = raw.get(key)
            return None if value is None else Decimal(str(value))

        def _day(key: str) -> date | None:
            value = raw.get(key)
            return None if value is None else date.fromisoformat(value)

        def _status(key: str) -> PaymentStatus | None:
            value = raw.get(key)
            return None if value is None else PaymentStatus(value)

        return cls(
            event_type=TimelineEventType(raw["eventType"]),
            timestamp=datetime.fromisoformat(raw["timestamp"]),
            amount_delta=_dec("amountDelta"),
            effective_date=_day("effectiveDate"),
            previous_date=_day("previousDate"),
            new_date=_day("newDate"),
            previous_amount=_dec("previousAmount"),
            new_amount=_dec("newAmount"),
            total_paid=_dec("totalPaid"),
            outstanding=_dec("outstanding"),
            previous_status=_status("previousStatus"),
            new_status=_status("newStatus"),
            comment=raw.get("comment"),
        )


@dataclass
class Payment:
    """A planned or received payment.

    ``status`` must stay consistent with ``is_paid``/``paid_amount`` vs
    ``amount``; that consistency is maintained by the functions in
    :mod:`app.application.services.payment_lifecycle`, not by the database.
    """

    amount: Decimal
    date: date
    type: PaymentType = PaymentType.INCOME
    status: PaymentStatus = PaymentStatus.PENDING
    id: int | None = None
    paid_amount: Decimal = Decimal("0")
    is_paid: bool = False
    paid_date: date | None = None
    last_payment_date: date | None = None
    initial_date: date | None = None
    reschedule_count: int = 0
    description: str = ""
    notes: str = ""
    system_notes: str = ""
    timeline: list[PaymentTimelineEntry] = field(default_factory=list)
    account: str | None = None
    account_date: date | None = None
    client_id: int | None = None
    client_case_id: int | None = None
    deal_type_id: int | None = None
    income_type_id: int | None = None
    payment_source_id: int | None = None
    payment_status_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def outstanding_amount(self) -> Decimal:
        remaining = self.amount - self.paid_amount
        return remaining if remaining > 0 else Decimal("0")


@dataclass
class AccountReference:
    """An invoice number as used on payments, with its invoice date when known."""

    account: str
    account_date: date | None = None
