"""Pydantic DTOs for the reporting endpoints."""

from datetime import date

from pydantic import Field

from app.application.schemas.common import CamelModel


class StatusBucket(CamelModel):
    collected_amount: float = 0
    completed_amount: float = 0
    completed_count: int = 0
    pending_amount: float = 0
    pending_count: int = 0
    overdue_amount: float = 0
    overdue_count: int = 0
    remaining_amount: float = 0
    total_amount: float = 0
    total_count: int = 0


class SummaryResponse(CamelModel):
    from_date: date = Field(alias="from")
    to_date: date = Field(alias="to")
    client_id: int | None = None
    case_id: int | None = None
    income: StatusBucket
    expense: StatusBucket
    profit: float


class StatusCounts(CamelModel):
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    total: int = 0


class MonthStats(CamelModel):
    year: int
    month: int
    period: str
    income: float
    expense: float
    profit: float
    completion_rate: float
    counts: StatusCounts
    completed_amount: float
    pending_amount: float
    overdue_amount: float


class YearMonth(CamelModel):
    year: int
    month: int


class MonthsResponse(CamelModel):
    start: YearMonth
    end: YearMonth
    items: list[MonthStats]
