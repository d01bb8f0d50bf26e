"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.activity_logging import ActivityLoggingMiddleware
from app.infrastructure.database import Base, engine
from app.infrastructure.database.session import async_session_factory
from app.infrastructure.database.repositories import (
    SQLAlchemyRoleRepository,
    SQLAlchemyUserRepository,
)
from app.application.services import RoleService, UserService
from app.infrastructure.dependencies import get_overdue_sweeper, get_password_hasher
from app.infrastructure.logging.log_config import setup_logging
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed_accounts() -> None:
    """Ensure the default roles and the bootstrap administrator exist.

    Idempotent: safe to call on every startup.
    """
    settings = get_settings()
    async with async_session_factory() as session:
        try:
            roles = SQLAlchemyRoleRepository(session)
            users = SQLAlchemyUserRepository(session)
            await RoleService(roles, users).ensure_default_roles()
            await UserService(users, roles, get_password_hasher()).ensure_admin(
                settings.seed_admin_email,
                settings.seed_admin_password,
                settings.seed_admin_full_name,
            )
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: create tables, seed accounts, start the sweeper."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Default roles and administrator
    await _seed_accounts()

    # 3. Start the overdue sweeper
    sweeper = get_overdue_sweeper()
    if settings.overdue_sweep_enabled:
        await sweeper.start()

    yield

    # Shutdown
    if sweeper.running:
        await sweeper.stop()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    if settings.activity_log_enabled:
        app.add_middleware(ActivityLoggingMiddleware)

    # CORS middleware (added last so it wraps the audit layer)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
