"""V2 API router: paginated lists and extended reporting."""

from fastapi import APIRouter

from app.presentation.api.v2.endpoints.payments import router as payments_router
from app.presentation.api.v2.endpoints.clients import cases_router, clients_router
from app.presentation.api.v2.endpoints.stats import router as stats_router

router = APIRouter(prefix="/v2")
router.include_router(payments_router)
router.include_router(clients_router)
router.include_router(cases_router)
router.include_router(stats_router)
