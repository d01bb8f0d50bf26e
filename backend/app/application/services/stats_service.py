"""Reporting aggregates over payments."""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal

from app.application.interfaces import PaymentRepository
from app.application.schemas.stats import (
    MonthsResponse,
    MonthStats,
    StatusBucket,
    StatusCounts,
    SummaryResponse,
    YearMonth,
)
from app.application.services.installment_service import add_months
from app.application.services.period import resolve_period
from app.domain.entities import Payment, PaymentQuery, PaymentStatus, PaymentType

_ZERO = Decimal("0")
MAX_MONTHS_SPAN = 120


def summary_amount(payment: Payment) -> Decimal:
    """Completed rows count what was paid, open rows what is still owed."""
    if payment.status == PaymentStatus.COMPLETED:
        return payment.paid_amount if payment.paid_amount > 0 else payment.amount
    return payment.outstanding_amount


def _bucket(payments: list[Payment]) -> StatusBucket:
    totals: dict[PaymentStatus, tuple[Decimal, int]] = {}
    for status in (PaymentStatus.COMPLETED, PaymentStatus.PENDING, PaymentStatus.OVERDUE):
        rows = [p for p in payments if p.status == status]
        totals[status] = (sum((summary_amount(p) for p in rows), _ZERO), len(rows))

    completed_amount, completed_count = totals[PaymentStatus.COMPLETED]
    pending_amount, pending_count = totals[PaymentStatus.PENDING]
    overdue_amount, overdue_count = totals[PaymentStatus.OVERDUE]
    return StatusBucket(
        collected_amount=sum((p.paid_amount for p in payments), _ZERO),
        completed_amount=completed_amount,
        completed_count=completed_count,
        pending_amount=pending_amount,
        pending_count=pending_count,
        overdue_amount=overdue_amount,
        overdue_count=overdue_count,
        remaining_amount=pending_amount + overdue_amount,
        total_amount=completed_amount + pending_amount + overdue_amount,
        total_count=completed_count + pending_count + overdue_count,
    )


class StatsService:
    def __init__(self, payments: PaymentRepository):
        self._payments = payments

    async def summary(
        self,
        today: date,
        *,
        client_id: int | None = None,
        case_id: int | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
        period: str | None = None,
        type: PaymentType | None = None,
        status: PaymentStatus | None = None,
        q: str | None = None,
    ) -> SummaryResponse:
        start, end = resolve_period(today, period, from_date, to_date)
        page = await self._payments.search(
            PaymentQuery(
                from_date=start,
                to_date=end,
                client_id=client_id,
                case_id=case_id,
                type=type.value if type else None,
                status=status.value if status else None,
                search=q,
            )
        )
        by_type = {
            kind: [p for p in page.items if p.type == kind]
            for kind in (PaymentType.INCOME, PaymentType.EXPENSE)
        }
        income = _bucket(by_type[PaymentType.INCOME])
        expense = _bucket(by_type[PaymentType.EXPENSE])
        return SummaryResponse(
            from_date=start,
            to_date=end,
            client_id=client_id,
            case_id=case_id,
            income=income,
            expense=expense,
            profit=income.completed_amount - expense.completed_amount,
        )

    async def months(
        self, start_year: int, start_month: int, end_year: int, end_month: int
    ) -> MonthsResponse:
        start = date(start_year, start_month, 1)
        end = date(end_year, end_month, 1)
        if end < start:
            start, end = end, start
        span = (end.year - start.year) * 12 + end.month - start.month + 1
        if span > MAX_MONTHS_SPAN:
            raise ValueError(f"Month range is limited to {MAX_MONTHS_SPAN} months, got {span}")

        page = await self._payments.search(
            PaymentQuery(from_date=start, to_date=add_months(end, 1) - timedelta(days=1))
        )
        by_month: dict[tuple[int, int], list[Payment]] = defaultdict(list)
        for payment in page.items:
            by_month[(payment.date.year, payment.date.month)].append(payment)

        items = [
            self._month(first_day, by_month[(first_day.year, first_day.month)])
            for first_day in (add_months(start, k) for k in range(span))
        ]

        return MonthsResponse(
            start=YearMonth(year=start.year, month=start.month),
            end=YearMonth(year=end.year, month=end.month),
            items=items,
        )

    @staticmethod
    def _month(first_day: date, payments: list[Payment]) -> MonthStats:
        def paid(kind: PaymentType) -> Decimal:
            return sum((p.paid_amount for p in payments if p.type == kind), _ZERO)

        def with_status(status: PaymentStatus) -> list[Payment]:
            return [p for p in payments if p.status == status]

        income = paid(PaymentType.INCOME)
        expense = paid(PaymentType.EXPENSE)
        completed = with_status(PaymentStatus.COMPLETED)
        pending = with_status(PaymentStatus.PENDING)
        overdue = with_status(PaymentStatus.OVERDUE)
        total = len(payments)

        return MonthStats(
            year=first_day.year,
            month=first_day.month,
            period=f"{first_day.year:04d}-{first_day.month:02d}",
            income=income,
            expense=expense,
            profit=income - expense,
            completion_rate=round(len(completed) / total * 100, 1) if total else 0,
            counts=StatusCounts(
                completed=len(completed),
                pending=sum(1 for p in pending if p.outstanding_amount > 0),
                overdue=sum(1 for p in overdue if p.outstanding_amount > 0),
                total=total,
            ),
            completed_amount=sum((p.paid_amount for p in completed), _ZERO),
            pending_amount=sum((p.outstanding_amount for p in pending), _ZERO),
            overdue_amount=sum((p.outstanding_amount for p in overdue), _ZERO),
        )
