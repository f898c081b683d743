"""Amadeus implementation of the offer search provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from amadeus import AuthenticationError, NetworkError, ResponseError

from ..base import BaseOfferProvider
from ..config import settings as default_settings
from ..errors import ProviderError, RetryableTransientError, UpstreamAuthError
from .client import AmadeusClient
from .response_parser import parse_flight_offers

if TYPE_CHECKING:
    from datetime import date

    from ..config import EngineSettings

logger = logging.getLogger(__name__)


def _status(exc: ResponseError) -> int | None:
    response = getattr(exc, "response", None)
    return getattr(response, "status_code", None)


def translate_error(exc: ResponseError) -> ProviderError:
    """Map an SDK error onto the engine's provider error hierarchy."""
    status = _status(exc)
    code = getattr(exc, "code", None)
    message = f"Amadeus {type(exc).__name__}: {exc}"
    if isinstance(exc, AuthenticationError) or status == 401:
        return UpstreamAuthError(message, status_code=401, code=code)
    if isinstance(exc, NetworkError):
        return RetryableTransientError(message, status_code=status, code=code)
    return ProviderError(message, status_code=status, code=code)


class AmadeusOfferProvider(BaseOfferProvider):
    """Single-date flight offer search via the Amadeus Self-Service API."""

    def __init__(
        self,
        client: AmadeusClient | None = None,
        *,
        currency_code: str | None = None,
    ) -> None:
        self._client = client or AmadeusClient()
        self._currency = currency_code or default_settings.currency_code

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> AmadeusOfferProvider:
        client = AmadeusClient(
            client_id=settings.amadeus_client_id,
            client_secret=settings.amadeus_client_secret,
            hostname=settings.amadeus_hostname,
        )
        return cls(client, currency_code=settings.currency_code)

    def is_configured(self) -> bool:
        return self._client.has_credentials

    async def search_offers(
        self,
        origin: str,
        destination: str,
        day: date,
        passenger_count: int,
        *,
        max_results: int | None = None,
    ) -> list[dict[str, Any]]:
        try:
            raw, dictionaries = await self._client.search_flight_offers(
                origin=origin.upper(),
                destination=destination.upper(),
                departure_date=day.isoformat(),
                adults=passenger_count,
                currency_code=self._currency,
                max_results=max_results or 50,
            )
        except ResponseError as exc:
            logger.error("Amadeus flight search failed for %s: %s", day, exc)
            raise translate_error(exc) from exc

        if not raw:
            logger.info(
                "Amadeus returned no offers for %s → %s on %s",
                origin,
                destination,
                day,
            )
            return []
        return parse_flight_offers(raw, dictionaries, self._currency)

    async def health_check(self) -> bool:
        return await self._client.health_check()

    async def close(self) -> None:
        await self._client.close()
