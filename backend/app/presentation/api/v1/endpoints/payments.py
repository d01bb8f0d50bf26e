"""Payment CRUD endpoints (v1: unpaginated list)."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.application.schemas.payment import PaymentResponse, PaymentWrite
from app.application.services import PaymentService
from app.domain.entities import PaymentQuery, PaymentStatus, PaymentType, Sort
from app.domain.exceptions import EntityNotFoundError, InvalidReferenceError
from app.infrastructure.dependencies import get_current_user, get_payment_service

PAYMENT_SORTS = frozenset({"date", "amount", "createdat"})


def payment_query(
    from_date: date | None = Query(None, alias="from"),
    to_date: date | None = Query(None, alias="to"),
    client_id: int | None = Query(None, alias="clientId"),
    case_id: int | None = Query(None, alias="caseId"),
    search: str | None = Query(None, description="Matches description, notes and account"),
    type: PaymentType | None = Query(None),
    status: PaymentStatus | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
) -> PaymentQuery:
    return PaymentQuery(
        from_date=from_date,
        to_date=to_date,
        client_id=client_id,
        case_id=case_id,
        search=search,
        type=type.value if type else None,
        status=status.value if status else None,
        sort=Sort.parse(sort_by, sort_dir, PAYMENT_SORTS, "date"),
    )


# Item routes are shared by the v1 and v2 routers.
item_router = APIRouter(dependencies=[Depends(get_current_user)])


@item_router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: int,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentResponse:
    """Retrieve a single payment by ID."""
    try:
        payment = await service.get_payment(payment_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PaymentResponse.model_validate(payment)


@item_router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_payment(
    data: PaymentWrite,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentResponse:
    """Create a payment; its status is derived from the paid fields and due date."""
    try:
        payment = await service.create_payment(data)
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return PaymentResponse.model_validate(payment)


@item_router.put("/{payment_id}", response_model=PaymentResponse)
async def update_payment(
    payment_id: int,
    data: PaymentWrite,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentResponse:
    """Replace the editable fields of a payment and record the change history."""
    try:
        payment = await service.update_payment(payment_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return PaymentResponse.model_validate(payment)


@item_router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: int,
    service: PaymentService = Depends(get_payment_service),
) -> None:
    """Delete a payment by ID."""
    try:
        await service.delete_payment(payment_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


router = APIRouter(tags=["Payments"], dependencies=[Depends(get_current_user)])


@router.get("/payments", response_model=list[PaymentResponse])
async def list_payments(
    query: PaymentQuery = Depends(payment_query),
    service: PaymentService = Depends(get_payment_service),
) -> list[PaymentResponse]:
    """Filtered, sorted list of every matching payment."""
    page = await service.list_payments(query)
    return [PaymentResponse.model_validate(p) for p in page.items]


router.include_router(item_router, prefix="/payments")
