"""Reporting endpoints (v2): period summary and month-by-month breakdown."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.application.schemas.stats import MonthsResponse, SummaryResponse
from app.application.services import StatsService
from app.infrastructure.dependencies import get_current_user, get_stats_service
from app.presentation.api.v1.endpoints.stats import get_summary

router = APIRouter(prefix="/stats", tags=["Stats"], dependencies=[Depends(get_current_user)])
router.add_api_route("/summary", get_summary, methods=["GET"], response_model=SummaryResponse)


@router.get("/months", response_model=MonthsResponse)
async def get_months(
    start_year: int = Query(..., alias="startYear", ge=1, le=9998),
    start_month: int = Query(..., alias="startMonth", ge=1, le=12),
    end_year: int = Query(..., alias="endYear", ge=1, le=9998),
    end_month: int = Query(..., alias="endMonth", ge=1, le=12),
    service: StatsService = Depends(get_stats_service),
) -> MonthsResponse:
    """Per-month income, expense, profit and completion figures (range swapped if reversed)."""
    try:
        return await service.months(start_year, start_month, end_year, end_month)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
