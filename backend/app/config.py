import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_DEFAULT_JWT_SECRET = "change-me-payplanner-development-secret"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "PayPlanner API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./payplanner.db"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # JWT bearer tokens
    jwt_secret: str = _DEFAULT_JWT_SECRET
    jwt_issuer: str = "PayPlanner"
    jwt_audience: str = "PayPlanner"
    jwt_expire_days: int = 7

    # Accounts
    registration_enabled: bool = True
    seed_admin_email: str = "admin@payplanner.local"
    seed_admin_password: str = "Admin123!"
    seed_admin_full_name: str = "Administrator"

    # Background jobs
    overdue_sweep_enabled: bool = True
    overdue_sweep_interval_seconds: int = 60

    # Request audit trail
    activity_log_enabled: bool = True

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_auth: str = "INFO"             # login / registration / approvals
    log_level_jobs: str = "INFO"             # overdue sweeper, request audit trail

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Warn when running with the built-in development JWT secret."""
        if self.jwt_secret == _DEFAULT_JWT_SECRET and self.app_env == "production":
            _config_logger.warning("JWT_SECRET is not configured; using the development default")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
