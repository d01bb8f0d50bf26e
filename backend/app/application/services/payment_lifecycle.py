"""Payment status derivation and audit trail.

Every route that creates or edits a payment (V1, V2, invoices) funnels
through :func:`prepare_for_create` or :func:`apply_update`, so the rules
below are the only place a payment's ``status`` is derived:

* ``Cancelled`` / ``Processing`` requested explicitly are stored as-is and
  force the payment to unpaid.
* ``is_paid`` or ``paid_amount >= amount > 0`` marks the payment
  ``Completed``: it is fully paid and its due date moves to the paid date.
* Anything else is ``Overdue`` when the due date is before today (UTC),
  otherwise ``Pending``.

On update the previous and new state are diffed into human-readable system
notes (newest first) and structured timeline entries.
"""

import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from app.domain.entities import (
    Payment,
    PaymentStatus,
    PaymentTimelineEntry,
    TimelineEventType,
)

logger = logging.getLogger(__name__)

NOTES_LIMIT = 3900
TOLERANCE = Decimal("0.01")
_CENT = Decimal("0.01")
_ZERO = Decimal("0")
_EXPLICIT_STATUSES = (PaymentStatus.CANCELLED, PaymentStatus.PROCESSING)


def round_money(value: Decimal) -> Decimal:
    """Round to cents, midpoints away from zero."""
    return Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def normalize_amount(value: Decimal | None) -> Decimal:
    """Round the planned amount to cents so it matches what the column stores."""
    if value is None:
        return _ZERO
    return round_money(value)


def normalize_paid_amount(value: Decimal | None, amount: Decimal) -> Decimal:
    """Clamp ``value`` into ``[0, amount]`` and round it to cents."""
    if amount is None or amount <= 0:
        return _ZERO
    if value is None or value <= 0:
        return _ZERO
    return round_money(min(value, amount))


def prepare_for_create(payment: Payment, now: datetime) -> Payment:
    """Normalize a new payment in place and derive its status."""
    requested_status = payment.status
    if payment.initial_date is None:
        payment.initial_date = payment.date
    payment.reschedule_count = max(payment.reschedule_count or 0, 0)
    payment.system_notes = ""
    payment.timeline = []
    payment.account = _clean_account(payment.account)
    payment.amount = normalize_amount(payment.amount)
    payment.paid_amount = normalize_paid_amount(payment.paid_amount, payment.amount)

    if payment.status in _EXPLICIT_STATUSES:
        payment.is_paid = False
        payment.paid_date = None
    elif payment.is_paid or _covers_amount(payment):
        _mark_completed(payment, payment.paid_date, now)
    else:
        _mark_unpaid(payment, now)

    if payment.paid_amount > 0 and payment.last_payment_date is None:
        payment.last_payment_date = payment.paid_date or now.date()

    payment.timeline.append(
        PaymentTimelineEntry(
            event_type=TimelineEventType.CREATED,
            timestamp=now,
            effective_date=payment.date,
            new_date=payment.date,
            new_amount=payment.amount,
            total_paid=payment.paid_amount,
            outstanding=payment.outstanding_amount,
            new_status=payment.status,
        )
    )
    if payment.is_paid:
        payment.timeline.append(_finalized_entry(payment, payment.paid_amount, now))
    elif payment.paid_amount > 0:
        payment.timeline.append(_partial_entry(payment, payment.paid_amount, now))
    if payment.status != requested_status:
        payment.timeline.append(
            PaymentTimelineEntry(
                event_type=TimelineEventType.STATUS_CHANGED,
                timestamp=now,
                previous_status=requested_status,
                new_status=payment.status,
                comment="Status derived on create",
            )
        )
    return payment


def apply_update(entity: Payment, incoming: Payment, now: datetime) -> Payment:
    """Copy editable fields from ``incoming`` onto ``entity`` and re-derive state.

    ``reschedule_count`` grows by one only when the payment stays unpaid and
    the caller moved its due date; the due-date shift done by completion
    never counts as a reschedule.
    """
    previous_date = entity.date
    previous_amount = entity.amount
    previous_paid = entity.paid_amount
    previous_status = entity.status
    previous_is_paid = entity.is_paid
    previous_paid_date = entity.paid_date
    previous_initial = entity.initial_date
    previous_notes = entity.system_notes or ""
    previous_reschedules = entity.reschedule_count or 0

    entity.amount = normalize_amount(incoming.amount)
    entity.type = incoming.type
    entity.description = incoming.description or ""
    entity.notes = incoming.notes or ""
    entity.client_id = incoming.client_id
    entity.client_case_id = incoming.client_case_id
    entity.deal_type_id = incoming.deal_type_id
    entity.income_type_id = incoming.income_type_id
    entity.payment_source_id = incoming.payment_source_id
    entity.payment_status_id = incoming.payment_status_id
    entity.account = _clean_account(incoming.account)
    entity.account_date = incoming.account_date
    entity.initial_date = incoming.initial_date or previous_initial or previous_date
    entity.paid_amount = normalize_paid_amount(incoming.paid_amount, entity.amount)
    entity.date = incoming.date

    if incoming.status in _EXPLICIT_STATUSES:
        entity.status = incoming.status
        entity.is_paid = False
        entity.paid_date = None
    elif incoming.is_paid or _covers_amount(entity):
        _mark_completed(entity, incoming.paid_date or previous_paid_date, now)
    else:
        _mark_unpaid(entity, now)

    paid_delta = entity.paid_amount - previous_paid
    if paid_delta > 0:
        entity.last_payment_date = entity.paid_date or now.date()

    messages: list[str] = []
    if paid_delta > 0 and entity.paid_amount < entity.amount:
        messages.append(
            f"Received {_money(paid_delta)} (total {_money(entity.paid_amount)} "
            f"of {_money(entity.amount)}). Outstanding {_money(entity.outstanding_amount)} "
            f"due {_day(entity.date)}."
        )

    if not previous_is_paid and entity.is_paid:
        overdue_days = _overdue_days(entity.initial_date, entity.paid_date)
        suffix = f" Overdue by {overdue_days} days." if overdue_days else ""
        messages.append(f"Payment completed {_day(entity.paid_date)}.{suffix}")
        logger.info("Payment %s completed on %s", entity.id, entity.paid_date)

    rescheduled = not entity.is_paid and previous_date != entity.date
    if rescheduled:
        entity.reschedule_count = previous_reschedules + 1
        messages.append(
            f"Payment rescheduled: {_day(previous_date)} → {_day(entity.date)}. "
            f"Outstanding {_money(entity.outstanding_amount)}."
        )
    else:
        entity.reschedule_count = previous_reschedules

    if not messages and entity.status != previous_status:
        messages.append(
            f"Status changed: {previous_status.value} → {entity.status.value}."
        )

    if messages:
        entity.system_notes = _prepend_notes(previous_notes, messages, now)
    else:
        entity.system_notes = previous_notes

    _append_update_timeline(
        entity,
        now,
        previous_amount=previous_amount,
        previous_date=previous_date,
        previous_status=previous_status,
        previous_is_paid=previous_is_paid,
        paid_delta=paid_delta,
        rescheduled=rescheduled,
    )
    return entity


def refresh_overdue(payment: Payment, today: date) -> bool:
    """Flip an unpaid, past-due ``Pending`` payment to ``Overdue``."""
    if payment.is_paid or payment.status != PaymentStatus.PENDING:
        return False
    if payment.date >= today:
        return False
    payment.status = PaymentStatus.OVERDUE
    return True


def _covers_amount(payment: Payment) -> bool:
    return payment.amount > 0 and payment.paid_amount >= payment.amount


def _mark_completed(payment: Payment, paid_date: date | None, now: datetime) -> None:
    payment.paid_amount = payment.amount if payment.amount > 0 else _ZERO
    payment.is_paid = True
    payment.status = PaymentStatus.COMPLETED
    payment.paid_date = paid_date or now.date()
    payment.date = payment.paid_date


def _mark_unpaid(payment: Payment, now: datetime) -> None:
    payment.is_paid = False
    payment.paid_date = None
    if payment.date < now.date():
        payment.status = PaymentStatus.OVERDUE
    else:
        payment.status = PaymentStatus.PENDING


def _clean_account(account: str | None) -> str | None:
    if account is None or not account.strip():
        return None
    return account.strip()


def _overdue_days(initial: date | None, paid: date | None) -> int:
    if initial is None or paid is None:
        return 0
    return max((paid - initial).days, 0)


def _prepend_notes(previous: str, messages: list[str], now: datetime) -> str:
    stamp = now.strftime("[%d.%m.%Y %H:%M]")
    # Later messages end up on top, matching the order they were appended.
    lines = [f"{stamp} {message}" for message in reversed(messages)]
    if previous.strip():
        lines.append(previous.strip())
    return "\n".join(lines).strip()[:NOTES_LIMIT]


def _money(value: Decimal) -> str:
    return f"{round_money(value):,.2f}"


def _day(value: date | None) -> str:
    return value.strftime("%d.%m.%Y") if value else "?"


def _partial_entry(payment: Payment, delta: Decimal, now: datetime) -> PaymentTimelineEntry:
    return PaymentTimelineEntry(
        event_type=TimelineEventType.PARTIAL_PAYMENT,
        timestamp=now,
        amount_delta=delta,
        effective_date=payment.last_payment_date or now.date(),
        total_paid=payment.paid_amount,
        outstanding=payment.outstanding_amount,
    )


def _finalized_entry(payment: Payment, delta: Decimal, now: datetime) -> PaymentTimelineEntry:
    return PaymentTimelineEntry(
        event_type=TimelineEventType.FINALIZED,
        timestamp=now,
        amount_delta=delta,
        effective_date=payment.paid_date,
        total_paid=payment.paid_amount,
        outstanding=payment.outstanding_amount,
        comment="Payment fully settled",
    )


def _append_update_timeline(
    entity: Payment,
    now: datetime,
    *,
    previous_amount: Decimal,
    previous_date: date,
    previous_status: PaymentStatus,
    previous_is_paid: bool,
    paid_delta: Decimal,
    rescheduled: bool,
) -> None:
    if abs(entity.amount - previous_amount) > TOLERANCE:
        entity.timeline.append(
            PaymentTimelineEntry(
                event_type=TimelineEventType.AMOUNT_ADJUSTED,
                timestamp=now,
                previous_amount=previous_amount,
                new_amount=entity.amount,
                total_paid=entity.paid_amount,
                outstanding=entity.outstanding_amount,
            )
        )

    finalized = not previous_is_paid and entity.is_paid
    if abs(paid_delta) > TOLERANCE and not finalized:
        entry = _partial_entry(entity, paid_delta, now)
        if paid_delta < 0:
            entry.comment = "Correction"
        entity.timeline.append(entry)

    if rescheduled:
        entity.timeline.append(
            PaymentTimelineEntry(
                event_type=TimelineEventType.RESCHEDULED,
                timestamp=now,
                previous_date=previous_date,
                new_date=entity.date,
                outstanding=entity.outstanding_amount,
            )
        )

    if entity.status != previous_status:
        entity.timeline.append(
            PaymentTimelineEntry(
                event_type=TimelineEventType.STATUS_CHANGED,
                timestamp=now,
                previous_status=previous_status,
                new_status=entity.status,
            )
        )

    if finalized:
        entity.timeline.append(_finalized_entry(entity, paid_delta, now))
