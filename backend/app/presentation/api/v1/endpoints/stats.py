"""Payment summary statistics."""

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, Query

from app.application.schemas.stats import SummaryResponse
from app.application.services import StatsService
from app.domain.entities import PaymentStatus, PaymentType
from app.infrastructure.dependencies import get_current_user, get_stats_service

router = APIRouter(prefix="/stats", tags=["Stats"], dependencies=[Depends(get_current_user)])


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    client_id: int | None = Query(None, alias="clientId"),
    case_id: int | None = Query(None, alias="caseId"),
    from_date: date | None = Query(None, alias="from"),
    to_date: date | None = Query(None, alias="to"),
    period: str | None = Query(None, description="Preset such as this-month, last-7d, ytd"),
    type: PaymentType | None = Query(None),
    status: PaymentStatus | None = Query(None),
    q: str | None = Query(None, description="Matches description, notes and account"),
    service: StatsService = Depends(get_stats_service),
) -> SummaryResponse:
    """Income and expense buckets (completed, pending, overdue) for a period."""
    return await service.summary(
        datetime.now(timezone.utc).date(),
        client_id=client_id,
        case_id=case_id,
        from_date=from_date,
        to_date=to_date,
        period=period,
        type=type,
        status=status,
        q=q,
    )
