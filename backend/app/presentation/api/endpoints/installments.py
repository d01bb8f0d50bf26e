"""Installment (annuity) calculator endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.schemas.installment import InstallmentRequest, InstallmentResponse
from app.application.services import InstallmentService
from app.domain.entities import InstallmentPlan
from app.infrastructure.dependencies import get_current_user, get_installment_service

router = APIRouter(prefix="/installments", tags=["Installments"], dependencies=[Depends(get_current_user)])


@router.post("/calc", response_model=InstallmentResponse)
async def calculate(
    data: InstallmentRequest,
    service: InstallmentService = Depends(get_installment_service),
) -> InstallmentResponse:
    """Month-by-month schedule with principal, interest and remaining balance."""
    plan = InstallmentPlan(**data.model_dump())
    try:
        schedule = service.calculate(plan)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return InstallmentResponse.model_validate(schedule)
