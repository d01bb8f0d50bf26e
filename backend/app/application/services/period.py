"""Reporting period resolution for the stats endpoints."""

from datetime import date, timedelta


def _month_start(day: date) -> date:
    return day.replace(day=1)


def _month_end(day: date) -> date:
    next_month = (day.replace(day=28) + timedelta(days=4)).replace(day=1)
    return next_month - timedelta(days=1)


def _quarter_start(day: date) -> date:
    return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)


def _shift_months(day: date, months: int) -> date:
    index = day.month - 1 + months
    return date(day.year + index // 12, index % 12 + 1, 1)


def resolve_period(
    today: date,
    preset: str | None = None,
    from_date: date | None = None,
    to_date: date | None = None,
) -> tuple[date, date]:
    """Return the inclusive ``(start, end)`` dates of a reporting period.

    Explicit bounds win over ``preset``: both bounds are swapped if
    reversed, a single bound selects that one day. Unknown presets fall
    back to the current month.
    """
    if from_date and to_date:
        return (from_date, to_date) if from_date <= to_date else (to_date, from_date)
    if from_date or to_date:
        single = from_date or to_date
        return single, single

    key = (preset or "this-month").strip().lower()
    if key == "today":
        return today, today
    if key == "yesterday":
        day = today - timedelta(days=1)
        return day, day
    if key == "last-7d":
        return today - timedelta(days=6), today
    if key == "last-30d":
        return today - timedelta(days=29), today
    if key == "this-week":
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    if key == "last-week":
        start = today - timedelta(days=today.weekday() + 7)
        return start, start + timedelta(days=6)
    if key in ("last-month", "previous-month"):
        start = _shift_months(today, -1)
        return start, _month_end(start)
    if key == "this-quarter":
        start = _quarter_start(today)
        return start, _month_end(_shift_months(start, 2))
    if key == "last-quarter":
        start = _shift_months(_quarter_start(today), -3)
        return start, _month_end(_shift_months(start, 2))
    if key == "qtd":
        return _quarter_start(today), today
    if key == "this-year":
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if key == "ytd":
        return date(today.year, 1, 1), today
    return _month_start(today), _month_end(today)
