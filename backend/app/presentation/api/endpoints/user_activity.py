"""Activity audit log endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request, status

from app.application.schemas.common import PageResponse
from app.application.schemas.user_activity import (
    ActivityCreate,
    ActivityFiltersResponse,
    ActivityResponse,
)
from app.application.services import UserActivityService
from app.application.services.user_activity_service import activity_page
from app.domain.entities import ActivityQuery, User
from app.infrastructure.dependencies import get_current_user, get_user_activity_service, require_admin
from app.presentation.api.params import to_page_response

router = APIRouter(prefix="/user-activity", tags=["User Activity"])


@router.get("", response_model=PageResponse[ActivityResponse], dependencies=[Depends(require_admin)])
async def list_activity(
    from_time: datetime | None = Query(None, alias="from"),
    to_time: datetime | None = Query(None, alias="to"),
    user_id: int | None = Query(None, alias="userId"),
    category: str | None = Query(None),
    action: str | None = Query(None),
    section: str | None = Query(None),
    http_method: str | None = Query(None, alias="httpMethod"),
    activity_status: str | None = Query(None, alias="status"),
    search: str | None = Query(None),
    page: int = Query(1),
    page_size: int = Query(50, alias="pageSize", description="Clamped to [10, 200]"),
    service: UserActivityService = Depends(get_user_activity_service),
) -> PageResponse[ActivityResponse]:
    """Newest-first audit entries."""
    query = ActivityQuery(
        from_time=from_time,
        to_time=to_time,
        user_id=user_id,
        category=category,
        action=action,
        section=section,
        http_method=http_method,
        status=activity_status,
        search=search,
    )
    result = await service.list_entries(query, activity_page(page, page_size))
    return to_page_response(result, ActivityResponse.model_validate)


@router.get("/filters", response_model=ActivityFiltersResponse, dependencies=[Depends(require_admin)])
async def activity_filters(
    service: UserActivityService = Depends(get_user_activity_service),
) -> ActivityFiltersResponse:
    """Distinct values for the filter dropdowns of the audit screen."""
    return await service.filters()


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def record_activity(
    data: ActivityCreate,
    request: Request,
    user: User = Depends(get_current_user),
    service: UserActivityService = Depends(get_user_activity_service),
) -> ActivityResponse:
    """Record a client-side action of the current user."""
    entry = await service.record(
        data,
        user,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return ActivityResponse.model_validate(entry)
