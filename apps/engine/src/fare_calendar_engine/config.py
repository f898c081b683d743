"""Engine configuration via environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CALENDAR_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # Amadeus Self-Service API
    amadeus_client_id: str = Field(
        default="",
        validation_alias=AliasChoices(
            "CALENDAR_AMADEUS_CLIENT_ID", "AMADEUS_API_KEY", "AMADEUS_CLIENT_ID"
        ),
    )
    amadeus_client_secret: str = Field(
        default="",
        validation_alias=AliasChoices(
            "CALENDAR_AMADEUS_CLIENT_SECRET",
            "AMADEUS_API_SECRET",
            "AMADEUS_CLIENT_SECRET",
        ),
    )
    amadeus_hostname: str = Field(
        default="production",
        validation_alias=AliasChoices(
            "CALENDAR_AMADEUS_HOSTNAME", "AMADEUS_HOSTNAME"
        ),
    )  # "test" or "production"

    # Offer search
    currency_code: str = "INR"
    max_results_per_day: int = 10

    # Retry policy
    retry_max_attempts: int = 3
    retry_delay_seconds: float = 2.0

    # Batching (upstream rate-limit friendliness)
    batch_size: int = 8
    batch_pause_seconds: float = 0.5


settings = EngineSettings()
