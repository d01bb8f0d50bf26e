"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from app.presentation.api.v1.endpoints.health import router as health_router
from app.presentation.api.v1.endpoints.payments import router as payments_router
from app.presentation.api.v1.endpoints.clients import cases_router, clients_router
from app.presentation.api.v1.endpoints.stats import router as stats_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(payments_router)
router.include_router(clients_router)
router.include_router(cases_router)
router.include_router(stats_router)
