"""Payment endpoints (v2: paginated list)."""

from fastapi import APIRouter, Depends

from app.application.schemas.common import PageResponse
from app.application.schemas.payment import PaymentResponse
from app.application.services import PaymentService
from app.domain.entities import PageRequest, PaymentQuery
from app.infrastructure.dependencies import get_current_user, get_payment_service
from app.presentation.api.params import page_request, to_page_response
from app.presentation.api.v1.endpoints.payments import item_router, payment_query

router = APIRouter(tags=["Payments"], dependencies=[Depends(get_current_user)])


@router.get("/payments", response_model=PageResponse[PaymentResponse])
async def list_payments(
    query: PaymentQuery = Depends(payment_query),
    page: PageRequest = Depends(page_request),
    service: PaymentService = Depends(get_payment_service),
) -> PageResponse[PaymentResponse]:
    """One page of filtered, sorted payments with the total match count."""
    result = await service.list_payments(query, page)
    return to_page_response(result, PaymentResponse.model_validate)


router.include_router(item_router, prefix="/payments")
