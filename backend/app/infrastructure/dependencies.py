"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import PasswordHasher, TokenService
from app.application.services import (
    ActService,
    AuthService,
    CaseService,
    ClientService,
    CompanyService,
    ContractService,
    DictionaryService,
    InstallmentService,
    InvoiceService,
    LegalEntityService,
    OverdueSweeper,
    PaymentReferenceValidator,
    PaymentService,
    RoleService,
    StatsService,
    UserActivityService,
    UserService,
)
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.database.session import async_session_factory, get_db_session
from app.infrastructure.database.repositories import (
    SQLAlchemyActRepository,
    SQLAlchemyCaseRepository,
    SQLAlchemyClientRepository,
    SQLAlchemyCompanyRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyDictionaryRepository,
    SQLAlchemyLegalEntityRepository,
    SQLAlchemyPaymentRepository,
    SQLAlchemyRoleRepository,
    SQLAlchemyUserActivityRepository,
    SQLAlchemyUserRepository,
)
from app.infrastructure.security import JoseTokenService, Pbkdf2PasswordHasher

bearer_scheme = HTTPBearer(auto_error=False)


# ── Security singletons ────────────────────────────────────────────


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return Pbkdf2PasswordHasher()


@lru_cache
def get_token_service() -> TokenService:
    """Singleton token service configured from settings."""
    settings = get_settings()
    return JoseTokenService(
        secret=settings.jwt_secret,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        expire_days=settings.jwt_expire_days,
    )


_sweeper: OverdueSweeper | None = None


def get_overdue_sweeper() -> OverdueSweeper:
    """Singleton sweeper shared by the lifespan loop and the manual trigger."""
    global _sweeper
    if _sweeper is None:
        _sweeper = OverdueSweeper(
            session_factory=async_session_factory,
            interval_seconds=get_settings().overdue_sweep_interval_seconds,
        )
    return _sweeper


# ── Authentication ─────────────────────────────────────────────────


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the bearer token to an active, approved user or fail with 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")
    claims = tokens.decode(credentials.credentials)
    if claims is None:
        raise _unauthorized("Invalid or expired token")
    try:
        user_id = int(claims.get("sub", ""))
    except ValueError:
        raise _unauthorized("Invalid token subject")

    user = await SQLAlchemyUserRepository(session).get_by_id(user_id)
    if user is None or not user.is_active or not user.is_approved:
        raise _unauthorized("User is not allowed to sign in")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return user


# ── Application services ───────────────────────────────────────────


def _reference_validator(session: AsyncSession) -> PaymentReferenceValidator:
    return PaymentReferenceValidator(
        clients=SQLAlchemyClientRepository(session),
        cases=SQLAlchemyCaseRepository(session),
        dictionaries=SQLAlchemyDictionaryRepository(session),
    )


async def get_payment_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PaymentService, None]:
    """Provides a PaymentService with its repository and reference checks wired up."""
    yield PaymentService(SQLAlchemyPaymentRepository(session), _reference_validator(session))


async def get_client_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ClientService, None]:
    yield ClientService(
        clients=SQLAlchemyClientRepository(session),
        cases=SQLAlchemyCaseRepository(session),
        payments=SQLAlchemyPaymentRepository(session),
        dictionaries=SQLAlchemyDictionaryRepository(session),
        legal_entities=SQLAlchemyLegalEntityRepository(session),
    )


async def get_case_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CaseService, None]:
    yield CaseService(
        cases=SQLAlchemyCaseRepository(session),
        clients=SQLAlchemyClientRepository(session),
        payments=SQLAlchemyPaymentRepository(session),
    )


async def get_company_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CompanyService, None]:
    yield CompanyService(SQLAlchemyCompanyRepository(session), SQLAlchemyClientRepository(session))


async def get_legal_entity_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[LegalEntityService, None]:
    yield LegalEntityService(
        SQLAlchemyLegalEntityRepository(session), SQLAlchemyClientRepository(session)
    )


async def get_contract_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ContractService, None]:
    yield ContractService(SQLAlchemyContractRepository(session), SQLAlchemyClientRepository(session))


async def get_act_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ActService, None]:
    yield ActService(
        acts=SQLAlchemyActRepository(session),
        clients=SQLAlchemyClientRepository(session),
        users=SQLAlchemyUserRepository(session),
    )


async def get_invoice_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[InvoiceService, None]:
    yield InvoiceService(
        payments=SQLAlchemyPaymentRepository(session),
        acts=SQLAlchemyActRepository(session),
        clients=SQLAlchemyClientRepository(session),
        validator=_reference_validator(session),
    )


async def get_dictionary_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DictionaryService, None]:
    yield DictionaryService(SQLAlchemyDictionaryRepository(session))


async def get_stats_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[StatsService, None]:
    yield StatsService(SQLAlchemyPaymentRepository(session))


def get_installment_service() -> InstallmentService:
    return InstallmentService()


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AsyncGenerator[AuthService, None]:
    yield AuthService(
        users=SQLAlchemyUserRepository(session),
        roles=SQLAlchemyRoleRepository(session),
        hasher=hasher,
        tokens=tokens,
        registration_enabled=get_settings().registration_enabled,
    )


async def get_user_service(
    session: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AsyncGenerator[UserService, None]:
    yield UserService(SQLAlchemyUserRepository(session), SQLAlchemyRoleRepository(session), hasher)


async def get_role_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RoleService, None]:
    yield RoleService(SQLAlchemyRoleRepository(session), SQLAlchemyUserRepository(session))


async def get_user_activity_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserActivityService, None]:
    yield UserActivityService(SQLAlchemyUserActivityRepository(session))
