"""Client and case endpoints (v2: paginated lists)."""

from fastapi import APIRouter, Depends

from app.application.schemas.client import CaseResponse, ClientResponse
from app.application.schemas.common import PageResponse
from app.application.services import CaseService, ClientService
from app.domain.entities import CaseQuery, ClientQuery, PageRequest
from app.infrastructure.dependencies import get_case_service, get_client_service, get_current_user
from app.presentation.api.params import page_request, to_page_response
from app.presentation.api.v1.endpoints.clients import (
    case_item_router,
    case_query,
    client_item_router,
    client_query,
)

clients_router = APIRouter(tags=["Clients"], dependencies=[Depends(get_current_user)])


@clients_router.get("/clients", response_model=PageResponse[ClientResponse])
async def list_clients(
    query: ClientQuery = Depends(client_query),
    page: PageRequest = Depends(page_request),
    service: ClientService = Depends(get_client_service),
) -> PageResponse[ClientResponse]:
    result = await service.list_clients(query, page)
    return to_page_response(result, ClientResponse.model_validate)


clients_router.include_router(client_item_router, prefix="/clients")


cases_router = APIRouter(tags=["Cases"], dependencies=[Depends(get_current_user)])


@cases_router.get("/cases", response_model=PageResponse[CaseResponse])
async def list_cases(
    query: CaseQuery = Depends(case_query),
    page: PageRequest = Depends(page_request),
    service: CaseService = Depends(get_case_service),
) -> PageResponse[CaseResponse]:
    result = await service.list_cases(query, page)
    return to_page_response(result, CaseResponse.model_validate)


cases_router.include_router(case_item_router, prefix="/cases")
