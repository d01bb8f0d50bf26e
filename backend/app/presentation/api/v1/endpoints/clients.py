"""Client and client-case CRUD endpoints (v1: unpaginated lists)."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.application.schemas.client import (
    CaseDetailResponse,
    CaseResponse,
    CaseWrite,
    ClientDetailResponse,
    ClientResponse,
    ClientStatsResponse,
    ClientWrite,
)
from app.application.schemas.payment import PaymentResponse
from app.application.services import CaseService, ClientService
from app.domain.entities import CaseQuery, ClientCaseStatus, ClientQuery, Sort
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError
from app.infrastructure.dependencies import get_case_service, get_client_service, get_current_user

CLIENT_SORTS = frozenset({"name", "createdat"})
CASE_SORTS = frozenset({"title", "status", "createdat"})


def client_query(
    search: str | None = Query(None, description="Matches name, email, phone, company and address"),
    is_active: bool | None = Query(None, alias="isActive"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
) -> ClientQuery:
    return ClientQuery(
        search=search,
        is_active=is_active,
        sort=Sort.parse(sort_by, sort_dir, CLIENT_SORTS, "name"),
    )


def case_query(
    client_id: int | None = Query(None, alias="clientId"),
    status: ClientCaseStatus | None = Query(None),
    search: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
) -> CaseQuery:
    return CaseQuery(
        client_id=client_id,
        status=status.value if status else None,
        search=search,
        sort=Sort.parse(sort_by, sort_dir, CASE_SORTS, "createdat", default_descending=True),
    )


# ── Clients ──────────────────────────────────────────────────────────

client_item_router = APIRouter(dependencies=[Depends(get_current_user)])


@client_item_router.get("/{client_id}", response_model=ClientDetailResponse)
async def get_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
) -> ClientDetailResponse:
    """Retrieve a client together with its cases."""
    try:
        client = await service.get_client(client_id, with_cases=True)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ClientDetailResponse.model_validate(client)


@client_item_router.get("/{client_id}/stats", response_model=ClientStatsResponse)
async def get_client_stats(
    client_id: int,
    case_id: int | None = Query(None, alias="caseId"),
    service: ClientService = Depends(get_client_service),
) -> ClientStatsResponse:
    """Payment totals of one client, optionally narrowed to one case."""
    try:
        return await service.get_stats(client_id, case_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@client_item_router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientWrite,
    service: ClientService = Depends(get_client_service),
) -> ClientResponse:
    try:
        client = await service.create_client(data)
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ClientResponse.model_validate(client)


@client_item_router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    data: ClientWrite,
    service: ClientService = Depends(get_client_service),
) -> ClientResponse:
    try:
        client = await service.update_client(client_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ClientResponse.model_validate(client)


@client_item_router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
) -> None:
    """Delete a client and its cases; its payments are kept but detached."""
    try:
        await service.delete_client(client_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


clients_router = APIRouter(tags=["Clients"], dependencies=[Depends(get_current_user)])


@clients_router.get("/clients", response_model=list[ClientResponse])
async def list_clients(
    query: ClientQuery = Depends(client_query),
    service: ClientService = Depends(get_client_service),
) -> list[ClientResponse]:
    page = await service.list_clients(query)
    return [ClientResponse.model_validate(c) for c in page.items]


clients_router.include_router(client_item_router, prefix="/clients")


# ── Cases ────────────────────────────────────────────────────────────

case_item_router = APIRouter(dependencies=[Depends(get_current_user)])


@case_item_router.get("/{case_id}", response_model=CaseDetailResponse)
async def get_case(
    case_id: int,
    service: CaseService = Depends(get_case_service),
) -> CaseDetailResponse:
    """Retrieve a case together with its payments."""
    try:
        case = await service.get_case(case_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    payments = await service.get_case_payments(case_id)
    response = CaseDetailResponse.model_validate(case)
    response.payments = [PaymentResponse.model_validate(p) for p in payments]
    return response


@case_item_router.post("", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
async def create_case(
    data: CaseWrite,
    service: CaseService = Depends(get_case_service),
) -> CaseResponse:
    try:
        case = await service.create_case(data)
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return CaseResponse.model_validate(case)


@case_item_router.put("/{case_id}", response_model=CaseResponse)
async def update_case(
    case_id: int,
    data: CaseWrite,
    service: CaseService = Depends(get_case_service),
) -> CaseResponse:
    try:
        case = await service.update_case(case_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return CaseResponse.model_validate(case)


@case_item_router.delete("/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case(
    case_id: int,
    service: CaseService = Depends(get_case_service),
) -> None:
    """Delete a case; its payments stay with the client."""
    try:
        await service.delete_case(case_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


cases_router = APIRouter(tags=["Cases"], dependencies=[Depends(get_current_user)])


@cases_router.get("/cases", response_model=list[CaseResponse])
async def list_cases(
    query: CaseQuery = Depends(case_query),
    service: CaseService = Depends(get_case_service),
) -> list[CaseResponse]:
    page = await service.list_cases(query)
    return [CaseResponse.model_validate(c) for c in page.items]


cases_router.include_router(case_item_router, prefix="/cases")
