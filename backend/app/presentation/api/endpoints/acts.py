"""Act endpoints: certificates of completed work."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas.act import ActResponse, ActSummaryResponse, ActWrite, ResponsibleResponse
from app.application.schemas.common import PageResponse
from app.application.services import ActService
from app.domain.entities import ActQuery, ActStatus, PageRequest, Sort
from app.infrastructure.dependencies import get_act_service, get_current_user
from app.presentation.api.errors import DOMAIN_ERRORS, http_error
from app.presentation.api.params import page_request, to_page_response

router = APIRouter(prefix="/acts", tags=["Acts"], dependencies=[Depends(get_current_user)])

ACT_SORTS = frozenset(
    {"number", "amount", "invoicenumber", "status", "client", "inn", "responsible", "createdat", "date"}
)


def act_query(
    from_date: date | None = Query(None, alias="from"),
    to_date: date | None = Query(None, alias="to"),
    act_status: ActStatus | None = Query(None, alias="status"),
    client_id: int | None = Query(None, alias="clientId"),
    responsible_id: int | None = Query(None, alias="responsibleId"),
    search: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
) -> ActQuery:
    return ActQuery(
        from_date=from_date,
        to_date=to_date,
        status=act_status.value if act_status else None,
        client_id=client_id,
        responsible_id=responsible_id,
        search=search,
        sort=Sort.parse(sort_by, sort_dir, ACT_SORTS, "date", default_descending=True),
    )


@router.get("", response_model=PageResponse[ActResponse])
async def list_acts(
    query: ActQuery = Depends(act_query),
    page: PageRequest = Depends(page_request),
    service: ActService = Depends(get_act_service),
) -> PageResponse[ActResponse]:
    result = await service.list_acts(query, page)
    return to_page_response(result, ActResponse.model_validate)


@router.get("/summary", response_model=ActSummaryResponse)
async def act_summary(
    query: ActQuery = Depends(act_query),
    service: ActService = Depends(get_act_service),
) -> ActSummaryResponse:
    return await service.summary(query)


@router.get("/responsibles", response_model=list[ResponsibleResponse])
async def list_responsibles(service: ActService = Depends(get_act_service)) -> list[ResponsibleResponse]:
    """Active, approved employees who can be assigned to an act."""
    return [ResponsibleResponse.model_validate(u) for u in await service.list_responsibles()]


@router.get("/{act_id}", response_model=ActResponse)
async def get_act(act_id: int, service: ActService = Depends(get_act_service)) -> ActResponse:
    try:
        act = await service.get_act(act_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ActResponse.model_validate(act)


@router.post("", response_model=ActResponse, status_code=status.HTTP_201_CREATED)
async def create_act(data: ActWrite, service: ActService = Depends(get_act_service)) -> ActResponse:
    try:
        act = await service.create_act(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ActResponse.model_validate(act)


@router.put("/{act_id}", response_model=ActResponse)
async def update_act(
    act_id: int,
    data: ActWrite,
    service: ActService = Depends(get_act_service),
) -> ActResponse:
    try:
        act = await service.update_act(act_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ActResponse.model_validate(act)


@router.delete("/{act_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_act(act_id: int, service: ActService = Depends(get_act_service)) -> None:
    try:
        await service.delete_act(act_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
