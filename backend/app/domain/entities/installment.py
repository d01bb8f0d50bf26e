"""Domain entities for the installment (annuity) calculator."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class RoundingMode(str, Enum):
    """How the monthly payment is snapped to ``rounding_step``."""

    NONE = "none"
    NEAREST = "nearest"
    UP = "up"
    DOWN = "down"


@dataclass
class InstallmentPlan:
    """Input parameters of a schedule calculation."""

    total: Decimal
    annual_rate: Decimal
    months: int
    start_date: date
    down_payment: Decimal = Decimal("0")
    rounding_mode: RoundingMode = RoundingMode.NONE
    rounding_step: Decimal | None = None


@dataclass
class InstallmentItem:
    """One month of the amortization schedule."""

    date: date
    principal: Decimal
    interest: Decimal
    payment: Decimal
    balance: Decimal


@dataclass
class InstallmentSchedule:
    """Calculated schedule with aggregate figures."""

    overpay: Decimal
    to_pay: Decimal
    items: list[InstallmentItem] = field(default_factory=list)
