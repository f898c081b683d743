"""Fixed-delay retry policy and the per-date retrying fetcher."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import is_transient

if TYPE_CHECKING:
    from datetime import date

    from .base import BaseOfferProvider
    from .config import EngineSettings

logger = logging.getLogger(__name__)

DEFAULT_RETRYABLE_STATUS_CODES = frozenset({502, 503, 504, 429})


class RetryPolicy(BaseModel):
    """How many times to try a date and how long to wait in between."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=1)
    delay_seconds: float = Field(default=2.0, ge=0)
    retryable_status_codes: frozenset[int] = DEFAULT_RETRYABLE_STATUS_CODES

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> RetryPolicy:
        return cls(
            max_attempts=settings.retry_max_attempts,
            delay_seconds=settings.retry_delay_seconds,
        )

    def should_retry(self, exc: BaseException, attempt: int) -> bool:
        """True if *exc* on 1-based *attempt* deserves another try."""
        return attempt < self.max_attempts and is_transient(
            exc, self.retryable_status_codes
        )


class RetryingFetcher:
    """Queries one date from the provider, retrying transient failures.

    Exhausted retries and non-retryable failures re-raise the last error;
    turning that into a day record is the resolver's job.
    """

    def __init__(self, provider: BaseOfferProvider, policy: RetryPolicy) -> None:
        self._provider = provider
        self._policy = policy

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def fetch(
        self,
        origin: str,
        destination: str,
        day: date,
        passenger_count: int,
        *,
        max_results: int | None = None,
    ) -> list[dict[str, Any]]:
        attempt = 1
        while True:
            try:
                offers = await self._provider.search_offers(
                    origin,
                    destination,
                    day,
                    passenger_count,
                    max_results=max_results,
                )
            except Exception as exc:
                if not self._policy.should_retry(exc, attempt):
                    if attempt > 1:
                        logger.error(
                            "Giving up on %s after %d attempt(s): %s",
                            day,
                            attempt,
                            exc,
                        )
                    raise
                logger.warning(
                    "Retry %d/%d for %s after %.1fs: %s",
                    attempt,
                    self._policy.max_attempts,
                    day,
                    self._policy.delay_seconds,
                    exc,
                )
                await asyncio.sleep(self._policy.delay_seconds)
                attempt += 1
            else:
                if attempt > 1:
                    logger.info("Retry succeeded for %s on attempt %d", day, attempt)
                return offers
