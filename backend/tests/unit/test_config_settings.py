"""Unit tests for application settings configuration."""

from pathlib import Path

from app.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_read_environment_overrides(monkeypatch):
    monkeypatch.setenv("REGISTRATION_ENABLED", "false")
    monkeypatch.setenv("OVERDUE_SWEEP_INTERVAL_SECONDS", "15")

    settings = Settings()

    assert settings.registration_enabled is False
    assert settings.overdue_sweep_interval_seconds == 15
    assert settings.jwt_issuer == "PayPlanner"
