"""Legal entity endpoints; a client belongs to at most one legal entity."""

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas.legal_entity import LegalEntityResponse, LegalEntityWrite
from app.application.services import LegalEntityService
from app.infrastructure.dependencies import get_current_user, get_legal_entity_service
from app.presentation.api.errors import DOMAIN_ERRORS, http_error

router = APIRouter(
    prefix="/legal-entities", tags=["Legal entities"], dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=list[LegalEntityResponse])
async def list_legal_entities(
    search: str | None = Query(None, description="Matches short and full name, INN, KPP and OGRN"),
    service: LegalEntityService = Depends(get_legal_entity_service),
) -> list[LegalEntityResponse]:
    entities = await service.list_legal_entities(search)
    return [LegalEntityResponse.model_validate(entity) for entity in entities]


@router.get("/{legal_entity_id}", response_model=LegalEntityResponse)
async def get_legal_entity(
    legal_entity_id: int,
    service: LegalEntityService = Depends(get_legal_entity_service),
) -> LegalEntityResponse:
    try:
        entity = await service.get_legal_entity(legal_entity_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return LegalEntityResponse.model_validate(entity)


@router.post("", response_model=LegalEntityResponse, status_code=status.HTTP_201_CREATED)
async def create_legal_entity(
    data: LegalEntityWrite,
    service: LegalEntityService = Depends(get_legal_entity_service),
) -> LegalEntityResponse:
    try:
        entity = await service.create_legal_entity(data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return LegalEntityResponse.model_validate(entity)


@router.put("/{legal_entity_id}", response_model=LegalEntityResponse)
async def update_legal_entity(
    legal_entity_id: int,
    data: LegalEntityWrite,
    service: LegalEntityService = Depends(get_legal_entity_service),
) -> LegalEntityResponse:
    """Replace the fields; clients missing from ``clientIds`` are unlinked."""
    try:
        entity = await service.update_legal_entity(legal_entity_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return LegalEntityResponse.model_validate(entity)


@router.delete("/{legal_entity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_legal_entity(
    legal_entity_id: int,
    service: LegalEntityService = Depends(get_legal_entity_service),
) -> None:
    try:
        await service.delete_legal_entity(legal_entity_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
