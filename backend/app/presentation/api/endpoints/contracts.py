"""Contract CRUD endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas.common import PageResponse
from app.application.schemas.contract import ContractResponse, ContractWrite
from app.application.services import ContractService
from app.domain.entities import ContractQuery, PageRequest, Sort
from app.infrastructure.dependencies import get_contract_service, get_current_user
from app.presentation.api.errors import DOMAIN_ERRORS, http_error
from app.presentation.api.params import page_request, to_page_response

router = APIRouter(prefix="/contracts", tags=["Contracts"], dependencies=[Depends(get_current_user)])

CONTRACT_SORTS = frozenset({"number", "date", "amount", "validuntil", "createdat"})


@router.get("", response_model=PageResponse[ContractResponse])
async def list_contracts(
    from_date: date | None = Query(None, alias="from"),
    to_date: date | None = Query(None, alias="to"),
    client_id: int | None = Query(None, alias="clientId"),
    search: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
    page: PageRequest = Depends(page_request),
    service: ContractService = Depends(get_contract_service),
) -> PageResponse[ContractResponse]:
    query = ContractQuery(
        from_date=from_date,
        to_date=to_date,
        client_id=client_id,
        search=search,
        sort=Sort.parse(sort_by, sort_dir, CONTRACT_SORTS, "date", default_descending=True),
    )
    result = await service.list_contracts(query, page)
    return to_page_response(result, ContractResponse.model_validate)


@router.get("/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
) -> ContractResponse:
    try:
        contract = await service.get_contract(contract_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ContractResponse.model_validate(contract)


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    data: ContractWrite,
    service: ContractService = Depends(get_contract_service),
) -> ContractResponse:
    try:
        contract = await service.create_contract(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ContractResponse.model_validate(contract)


@router.put("/{contract_id}", response_model=ContractResponse)
async def update_contract(
    contract_id: int,
    data: ContractWrite,
    service: ContractService = Depends(get_contract_service),
) -> ContractResponse:
    try:
        contract = await service.update_contract(contract_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ContractResponse.model_validate(contract)


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contract(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
) -> None:
    try:
        await service.delete_contract(contract_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
