"""Invoice-number (account) lookup used by payment and invoice forms."""

from fastapi import APIRouter, Depends, Query

from app.application.schemas.payment import AccountReferenceResponse
from app.application.services import PaymentService
from app.domain.entities import AccountQuery
from app.infrastructure.dependencies import get_current_user, get_payment_service

router = APIRouter(prefix="/accounts", tags=["Accounts"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[str] | list[AccountReferenceResponse])
async def list_accounts(
    client_id: int | None = Query(None, alias="clientId"),
    case_id: int | None = Query(None, alias="caseId"),
    q: str | None = Query(None, description="Case-insensitive substring of the number"),
    with_date: bool = Query(False, alias="withDate"),
    dedupe: bool = Query(False),
    take: int = Query(50, ge=1, le=500),
    service: PaymentService = Depends(get_payment_service),
) -> list[str] | list[AccountReferenceResponse]:
    """Distinct numbers, most used first; ``withDate`` lists ``{account, accountDate}`` newest first."""
    query = AccountQuery(client_id=client_id, case_id=case_id, search=q, take=take)
    result = await service.lookup_accounts(query, with_date=with_date, dedupe=dedupe)
    if with_date:
        return [AccountReferenceResponse.model_validate(row) for row in result]
    return result
