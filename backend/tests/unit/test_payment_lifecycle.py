"""Unit tests for payment status derivation and the update audit trail."""

from datetime import date, datetime, timezone
from decimal import Decimal

from app.application.services.payment_lifecycle import (
    NOTES_LIMIT,
    apply_update,
    normalize_amount,
    normalize_paid_amount,
    prepare_for_create,
    refresh_overdue,
    round_money,
)
from app.domain.entities import Payment, PaymentStatus, TimelineEventType

NOW = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)


def _payment(**overrides) -> Payment:
    values = {"amount": Decimal("1000"), "date": date(2024, 6, 20)}
    values.update(overrides)
    return Payment(**values)


def _copy(payment: Payment, **overrides) -> Payment:
    incoming = _payment(
        amount=payment.amount,
        date=payment.date,
        type=payment.type,
        paid_amount=payment.paid_amount,
        is_paid=payment.is_paid,
        paid_date=payment.paid_date,
        initial_date=payment.initial_date,
    )
    for name, value in overrides.items():
        setattr(incoming, name, value)
    return incoming


def test_round_money_rounds_midpoints_away_from_zero():
    assert round_money(Decimal("2.345")) == Decimal("2.35")
    assert round_money(Decimal("-2.345")) == Decimal("-2.35")


def test_normalize_paid_amount_clamps_into_range():
    assert normalize_paid_amount(Decimal("-5"), Decimal("100")) == Decimal("0")
    assert normalize_paid_amount(Decimal("150"), Decimal("100")) == Decimal("100.00")
    assert normalize_paid_amount(Decimal("10"), Decimal("0")) == Decimal("0")
    assert normalize_paid_amount(None, Decimal("100")) == Decimal("0")


def test_normalize_amount_rounds_to_cents():
    assert normalize_amount(Decimal("100.004")) == Decimal("100.00")
    assert normalize_amount(Decimal("0.005")) == Decimal("0.01")
    assert normalize_amount(None) == Decimal("0")


def test_sub_cent_amount_paid_in_full_is_completed():
    payment = prepare_for_create(
        _payment(amount=Decimal("100.004"), paid_amount=Decimal("100.004")), NOW
    )

    assert payment.amount == Decimal("100.00")
    assert payment.paid_amount == payment.amount
    assert payment.status == PaymentStatus.COMPLETED
    assert payment.is_paid is True
    assert payment.outstanding_amount == 0


def test_update_rounds_amount_before_settling():
    payment = prepare_for_create(_payment(), NOW)

    apply_update(
        payment,
        _copy(payment, amount=Decimal("250.005"), paid_amount=Decimal("250.01")),
        NOW,
    )

    assert payment.amount == Decimal("250.01")
    assert payment.paid_amount == Decimal("250.01")
    assert payment.status == PaymentStatus.COMPLETED
    assert payment.is_paid is True


def test_create_future_unpaid_payment_is_pending():
    payment = prepare_for_create(_payment(), NOW)

    assert payment.status == PaymentStatus.PENDING
    assert payment.initial_date == date(2024, 6, 20)
    assert payment.timeline[0].event_type == TimelineEventType.CREATED


def test_create_past_due_payment_is_overdue():
    payment = prepare_for_create(_payment(date=date(2024, 6, 1)), NOW)
    assert payment.status == PaymentStatus.OVERDUE


def test_create_fully_covered_payment_is_completed_on_paid_date():
    payment = prepare_for_create(
        _payment(paid_amount=Decimal("1000"), paid_date=date(2024, 6, 10)), NOW
    )

    assert payment.status == PaymentStatus.COMPLETED
    assert payment.is_paid is True
    assert payment.date == date(2024, 6, 10)
    assert payment.initial_date == date(2024, 6, 20)
    assert payment.timeline[-1].event_type in (
        TimelineEventType.FINALIZED,
        TimelineEventType.STATUS_CHANGED,
    )


def test_create_is_paid_without_date_uses_today():
    payment = prepare_for_create(_payment(is_paid=True), NOW)

    assert payment.paid_amount == Decimal("1000")
    assert payment.paid_date == NOW.date()


def test_explicit_cancelled_status_is_kept_and_unpaid():
    payment = prepare_for_create(
        _payment(status=PaymentStatus.CANCELLED, is_paid=True, paid_date=date(2024, 6, 1)), NOW
    )

    assert payment.status == PaymentStatus.CANCELLED
    assert payment.is_paid is False
    assert payment.paid_date is None


def test_blank_account_is_stored_as_none():
    payment = prepare_for_create(_payment(account="   "), NOW)
    assert payment.account is None


def test_partial_payment_adds_note_and_timeline_entry():
    payment = prepare_for_create(_payment(), NOW)

    apply_update(payment, _copy(payment, paid_amount=Decimal("250")), NOW)

    assert payment.status == PaymentStatus.PENDING
    assert payment.paid_amount == Decimal("250.00")
    assert payment.last_payment_date == NOW.date()
    assert payment.system_notes.startswith("[15.06.2024 10:30] Received 250.00")
    assert any(e.event_type == TimelineEventType.PARTIAL_PAYMENT for e in payment.timeline)


def test_moving_due_date_of_unpaid_payment_counts_reschedule():
    payment = prepare_for_create(_payment(), NOW)

    apply_update(payment, _copy(payment, date=date(2024, 7, 1)), NOW)

    assert payment.reschedule_count == 1
    assert "rescheduled" in payment.system_notes
    assert payment.timeline[-1].event_type == TimelineEventType.RESCHEDULED


def test_completing_payment_does_not_count_as_reschedule():
    payment = prepare_for_create(_payment(), NOW)

    apply_update(
        payment,
        _copy(payment, is_paid=True, paid_date=date(2024, 6, 25)),
        NOW,
    )

    assert payment.status == PaymentStatus.COMPLETED
    assert payment.date == date(2024, 6, 25)
    assert payment.reschedule_count == 0
    assert "Payment completed 25.06.2024. Overdue by 5 days." in payment.system_notes
    assert payment.timeline[-1].event_type == TimelineEventType.FINALIZED


def test_newest_notes_come_first():
    payment = prepare_for_create(_payment(), NOW)
    apply_update(payment, _copy(payment, paid_amount=Decimal("100")), NOW)
    later = datetime(2024, 6, 16, 9, 0, tzinfo=timezone.utc)

    apply_update(payment, _copy(payment, paid_amount=Decimal("300")), later)

    lines = payment.system_notes.splitlines()
    assert lines[0].startswith("[16.06.2024 09:00]")
    assert lines[1].startswith("[15.06.2024 10:30]")


def test_system_notes_are_capped_dropping_the_oldest_text():
    payment = prepare_for_create(_payment(), NOW)
    payment.system_notes = "old-history " * 400

    apply_update(payment, _copy(payment, paid_amount=Decimal("100")), NOW)

    assert len(payment.system_notes) == NOTES_LIMIT
    assert payment.system_notes.startswith("[15.06.2024 10:30] Received 100.00")
    assert "old-history" in payment.system_notes
    assert payment.system_notes.count("old-history") < 400


def test_reducing_paid_amount_is_recorded_as_correction():
    payment = prepare_for_create(_payment(paid_amount=Decimal("400")), NOW)

    apply_update(payment, _copy(payment, paid_amount=Decimal("100")), NOW)

    corrections = [e for e in payment.timeline if e.comment == "Correction"]
    assert corrections and corrections[0].amount_delta == Decimal("-300.00")


def test_refresh_overdue_only_touches_past_due_pending():
    pending = _payment(date=date(2024, 6, 1))
    assert refresh_overdue(pending, date(2024, 6, 15)) is True
    assert pending.status == PaymentStatus.OVERDUE

    future = _payment(date=date(2024, 7, 1))
    assert refresh_overdue(future, date(2024, 6, 15)) is False

    cancelled = _payment(date=date(2024, 6, 1), status=PaymentStatus.CANCELLED)
    assert refresh_overdue(cancelled, date(2024, 6, 15)) is False
