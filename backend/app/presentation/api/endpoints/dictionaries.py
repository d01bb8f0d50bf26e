"""Lookup dictionary endpoints: ``/dictionaries/{kind}``."""

from fastapi import APIRouter, Depends, Query, status

from app.application.schemas.dictionary import (
    DictionaryResponse,
    DictionaryWrite,
    ToggleActiveResponse,
)
from app.application.services import DictionaryService
from app.domain.entities import DictionaryKind, PaymentType
from app.infrastructure.dependencies import get_current_user, get_dictionary_service, require_admin
from app.presentation.api.errors import DOMAIN_ERRORS, http_error

router = APIRouter(
    prefix="/dictionaries/{kind}",
    tags=["Dictionaries"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[DictionaryResponse])
async def list_entries(
    kind: DictionaryKind,
    payment_type: PaymentType | None = Query(None, alias="paymentType"),
    is_active: bool | None = Query(None, alias="isActive"),
    service: DictionaryService = Depends(get_dictionary_service),
) -> list[DictionaryResponse]:
    """Entries of one dictionary, sorted by name."""
    entries = await service.list_entries(kind, payment_type=payment_type, is_active=is_active)
    return [DictionaryResponse.model_validate(e) for e in entries]


@router.get("/{entry_id}", response_model=DictionaryResponse)
async def get_entry(
    kind: DictionaryKind,
    entry_id: int,
    service: DictionaryService = Depends(get_dictionary_service),
) -> DictionaryResponse:
    try:
        entry = await service.get_entry(kind, entry_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return DictionaryResponse.model_validate(entry)


@router.post(
    "",
    response_model=DictionaryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_entry(
    kind: DictionaryKind,
    data: DictionaryWrite,
    service: DictionaryService = Depends(get_dictionary_service),
) -> DictionaryResponse:
    try:
        entry = await service.create_entry(kind, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return DictionaryResponse.model_validate(entry)


@router.put("/{entry_id}", response_model=DictionaryResponse, dependencies=[Depends(require_admin)])
async def update_entry(
    kind: DictionaryKind,
    entry_id: int,
    data: DictionaryWrite,
    service: DictionaryService = Depends(get_dictionary_service),
) -> DictionaryResponse:
    try:
        entry = await service.update_entry(kind, entry_id, data)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return DictionaryResponse.model_validate(entry)


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_entry(
    kind: DictionaryKind,
    entry_id: int,
    service: DictionaryService = Depends(get_dictionary_service),
) -> None:
    """Delete an entry; payments referencing it lose the reference."""
    try:
        await service.delete_entry(kind, entry_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.patch(
    "/{entry_id}/toggle-active",
    response_model=ToggleActiveResponse,
    dependencies=[Depends(require_admin)],
)
async def toggle_active(
    kind: DictionaryKind,
    entry_id: int,
    service: DictionaryService = Depends(get_dictionary_service),
) -> ToggleActiveResponse:
    try:
        entry = await service.toggle_active(kind, entry_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return ToggleActiveResponse(id=entry.id, is_active=entry.is_active)
