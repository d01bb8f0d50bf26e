"""Installment calculator: equal-payment (annuity) amortization schedule."""

import calendar
from datetime import date
from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal

from app.domain.entities import (
    InstallmentItem,
    InstallmentPlan,
    InstallmentSchedule,
    RoundingMode,
)

MAX_MONTHS = 600
MAX_ANNUAL_RATE = Decimal("1000")
_CENT = Decimal("0.01")
_ZERO = Decimal("0")
_SNAP = {
    RoundingMode.NEAREST: ROUND_HALF_UP,
    RoundingMode.UP: ROUND_CEILING,
    RoundingMode.DOWN: ROUND_FLOOR,
}


def _round2(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def add_months(start: date, months: int) -> date:
    """Shift ``start`` by whole months, clamping to the target month's last day."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class InstallmentService:
    """Builds month-by-month schedules for an installment plan.

    The monthly payment is fixed in cents (optionally snapped to a
    ``rounding_step``); the final installment absorbs whatever residual is
    left so that the principal portions always sum to the financed amount.
    """

    def calculate(self, plan: InstallmentPlan) -> InstallmentSchedule:
        if plan.months <= 0:
            raise ValueError("months must be greater than zero")
        if plan.months > MAX_MONTHS:
            raise ValueError(f"months must not exceed {MAX_MONTHS}")
        if plan.annual_rate < 0 or plan.annual_rate > MAX_ANNUAL_RATE:
            raise ValueError("annual_rate must be within 0..1000")
        if plan.total < 0 or plan.down_payment < 0:
            raise ValueError("total and down_payment must not be negative")

        loan = max(plan.total - plan.down_payment, _ZERO)
        monthly_rate = plan.annual_rate / Decimal(100) / Decimal(12)
        payment = self._base_payment(loan, monthly_rate, plan.months)
        payment = self._apply_rounding(plan, payment, _round2(loan * monthly_rate))

        items: list[InstallmentItem] = []
        balance = loan
        for index in range(plan.months):
            interest = _round2(balance * monthly_rate)
            is_last = index == plan.months - 1
            if is_last:
                principal = _round2(balance)
            else:
                principal = _round2(payment - interest)
                if principal >= balance:
                    # Step rounding can pay the loan off early.
                    principal = _round2(balance)
                    is_last = loan > 0
            this_payment = _round2(principal + interest) if is_last else payment
            balance = max(_round2(balance - principal), _ZERO)
            items.append(
                InstallmentItem(
                    date=add_months(plan.start_date, index),
                    principal=principal,
                    interest=interest,
                    payment=this_payment,
                    balance=balance,
                )
            )
            if is_last:
                break

        total_payments = _round2(sum((item.payment for item in items), _ZERO))
        return InstallmentSchedule(
            overpay=_round2(total_payments - loan),
            to_pay=_round2(total_payments + plan.down_payment),
            items=items,
        )

    @staticmethod
    def _base_payment(loan: Decimal, monthly_rate: Decimal, months: int) -> Decimal:
        if loan == 0:
            return _ZERO
        if monthly_rate == 0:
            return _round2(loan / months)
        growth = (1 + monthly_rate) ** months
        return _round2(loan * monthly_rate * growth / (growth - 1))

    @staticmethod
    def _apply_rounding(
        plan: InstallmentPlan, payment: Decimal, first_interest: Decimal
    ) -> Decimal:
        step = plan.rounding_step
        if plan.rounding_mode == RoundingMode.NONE or not step or step <= 0 or payment == 0:
            return payment
        snapped = (payment / step).quantize(Decimal(1), rounding=_SNAP[plan.rounding_mode]) * step
        if snapped <= first_interest:
            # Rounding down must still amortize the loan.
            snapped = (payment / step).quantize(Decimal(1), rounding=ROUND_CEILING) * step
        return _round2(snapped)
