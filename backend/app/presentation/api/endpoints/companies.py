"""Company endpoints: organisations with role-labelled client members."""

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas.common import PageResponse
from app.application.schemas.company import CompanyResponse, CompanyWrite
from app.application.services import CompanyService
from app.domain.entities import CompanyQuery, PageRequest
from app.infrastructure.dependencies import get_company_service, get_current_user
from app.presentation.api.errors import DOMAIN_ERRORS, http_error
from app.presentation.api.params import page_request, to_page_response

router = APIRouter(prefix="/companies", tags=["Companies"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=PageResponse[CompanyResponse])
async def list_companies(
    search: str | None = Query(None, description="Matches names, INN, email and phone"),
    is_active: bool | None = Query(None, alias="isActive"),
    page: PageRequest = Depends(page_request),
    service: CompanyService = Depends(get_company_service),
) -> PageResponse[CompanyResponse]:
    result = await service.list_companies(CompanyQuery(search=search, is_active=is_active), page)
    return to_page_response(result, CompanyResponse.model_validate)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: int,
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    try:
        company = await service.get_company(company_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return CompanyResponse.model_validate(company)


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    data: CompanyWrite,
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    try:
        company = await service.create_company(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return CompanyResponse.model_validate(company)


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: int,
    data: CompanyWrite,
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    """Replace company fields and its member links."""
    try:
        company = await service.update_company(company_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return CompanyResponse.model_validate(company)


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(
    company_id: int,
    service: CompanyService = Depends(get_company_service),
) -> None:
    try:
        await service.delete_company(company_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
