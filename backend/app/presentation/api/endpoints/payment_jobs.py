"""Manual trigger for the overdue sweep."""

from fastapi import APIRouter, Depends

from app.application.services import OverdueSweeper
from app.infrastructure.dependencies import get_overdue_sweeper, require_admin

router = APIRouter(prefix="/payments", tags=["Payments"], dependencies=[Depends(require_admin)])


@router.post("/sweep-overdue")
async def sweep_overdue(sweeper: OverdueSweeper = Depends(get_overdue_sweeper)) -> dict:
    """Flag past-due pending payments now instead of waiting for the next tick."""
    affected = await sweeper.run_once()
    return {"updated": affected}
