"""Abstract base class for offer search providers."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import date


class BaseOfferProvider(abc.ABC):
    """A single-date flight offer search the engine can fan out over.

    Offers are opaque dicts; the engine only reads their ``price``.
    """

    @abc.abstractmethod
    async def search_offers(
        self,
        origin: str,
        destination: str,
        day: date,
        passenger_count: int,
        *,
        max_results: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return every offer available for *day* (possibly none)."""

    @abc.abstractmethod
    def is_configured(self) -> bool:
        """Return True if credentials/configuration are present."""

    @abc.abstractmethod
    async def health_check(self) -> bool:
        """Return True if the provider is reachable with our credentials."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release any held resources."""
