"""Top-level API router: includes versioned and unversioned sub-routers."""

from fastapi import APIRouter

from app.presentation.api.v1.router import router as v1_router
from app.presentation.api.v2.router import router as v2_router
from app.presentation.api.v1.endpoints.payments import router as unversioned_payments_router
from app.presentation.api.endpoints.auth import router as auth_router
from app.presentation.api.endpoints.users import router as users_router
from app.presentation.api.endpoints.roles import permissions_router, router as roles_router
from app.presentation.api.endpoints.dictionaries import router as dictionaries_router
from app.presentation.api.endpoints.invoices import router as invoices_router
from app.presentation.api.endpoints.acts import router as acts_router
from app.presentation.api.endpoints.contracts import router as contracts_router
from app.presentation.api.endpoints.companies import router as companies_router
from app.presentation.api.endpoints.legal_entities import router as legal_entities_router
from app.presentation.api.endpoints.accounts import router as accounts_router
from app.presentation.api.endpoints.installments import router as installments_router
from app.presentation.api.endpoints.user_activity import router as user_activity_router
from app.presentation.api.endpoints.payment_jobs import router as payment_jobs_router

router = APIRouter(prefix="/api")
router.include_router(v1_router)
router.include_router(v2_router)
# /api/payments mirrors the v1 payment routes without a version segment.
router.include_router(unversioned_payments_router)
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(roles_router)
router.include_router(permissions_router)
router.include_router(dictionaries_router)
router.include_router(invoices_router)
router.include_router(acts_router)
router.include_router(contracts_router)
router.include_router(companies_router)
router.include_router(legal_entities_router)
router.include_router(accounts_router)
router.include_router(installments_router)
router.include_router(user_activity_router)
router.include_router(payment_jobs_router)
