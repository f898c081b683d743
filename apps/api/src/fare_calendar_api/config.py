"""API configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Wall-clock budget per calendar; on expiry a partial calendar is returned
    calendar_timeout_seconds: float | None = None
    # How often to check whether the client went away (0 disables)
    disconnect_poll_seconds: float = 0.5

    model_config = SettingsConfigDict(
        env_prefix="API_", env_file=".env", extra="ignore"
    )


settings = ApiSettings()
