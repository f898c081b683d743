"""Thin async wrapper over the ``amadeus`` SDK for Flight Offers Search.

The SDK is synchronous and owns the OAuth2 token refresh; every call runs in
a worker thread via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from amadeus import Client, Location, ResponseError

from ..config import settings as default_settings
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class AmadeusClient:
    """Async-friendly wrapper around the Amadeus Python SDK."""

    def __init__(
        self,
        *,
        client_id: str | None = None,
        client_secret: str | None = None,
        hostname: str | None = None,
    ) -> None:
        self._client_id = client_id or default_settings.amadeus_client_id
        self._client_secret = client_secret or default_settings.amadeus_client_secret
        self._hostname = hostname or default_settings.amadeus_hostname
        self._sdk: Client | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self._client_id and self._client_secret)

    def _ensure_sdk(self) -> Client:
        if self._sdk is None:
            if not self.has_credentials:
                raise ConfigurationError(
                    "AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET "
                    "must be set in environment or .env"
                )
            self._sdk = Client(
                client_id=self._client_id,
                client_secret=self._client_secret,
                hostname=self._hostname,
            )
            logger.info("Amadeus SDK initialised (hostname=%s)", self._hostname)
        return self._sdk

    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        *,
        adults: int = 1,
        currency_code: str = "INR",
        max_results: int = 50,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Search one-way offers using GET /v2/shopping/flight-offers.

        Returns ``(offers, dictionaries)``; the dictionaries map carrier and
        aircraft codes to display names.  SDK errors propagate unchanged.
        """
        sdk = self._ensure_sdk()
        params: dict[str, Any] = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "adults": adults,
            "currencyCode": currency_code,
            "max": max_results,
        }

        def _call() -> tuple[list[dict[str, Any]], dict[str, Any]]:
            resp = sdk.shopping.flight_offers_search.get(**params)
            result = resp.result if isinstance(resp.result, dict) else {}
            return resp.data or [], result.get("dictionaries") or {}

        return await asyncio.to_thread(_call)

    async def health_check(self) -> bool:
        """Verify credentials with a cheap airport lookup."""
        try:
            sdk = self._ensure_sdk()
        except ConfigurationError:
            return False

        def _call() -> bool:
            try:
                resp = sdk.reference_data.locations.get(
                    keyword="DEL", subType=Location.AIRPORT
                )
                return bool(resp.data)
            except ResponseError as exc:
                logger.error("Amadeus health check failed: %s", exc)
                return False

        return await asyncio.to_thread(_call)

    async def close(self) -> None:
        """No-op: the SDK manages its own HTTP lifecycle."""
        self._sdk = None
