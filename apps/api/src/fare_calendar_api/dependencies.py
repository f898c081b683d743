"""FastAPI dependency injection providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from fare_calendar_engine.amadeus import AmadeusOfferProvider
from fare_calendar_engine.base import BaseOfferProvider  # noqa: TC002
from fare_calendar_engine.config import settings as engine_settings
from fare_calendar_engine.orchestrator import CalendarConfig

from .config import settings
from .services.calendar_service import CalendarService
from .services.search_service import SearchService

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


async def get_offer_provider() -> AsyncGenerator[BaseOfferProvider]:
    """Yield a provider built from the engine settings, closed afterwards."""
    provider = AmadeusOfferProvider.from_settings(engine_settings)
    try:
        yield provider
    finally:
        await provider.close()


def get_calendar_config() -> CalendarConfig:
    return CalendarConfig.from_settings(engine_settings)


def get_calendar_service(
    provider: Annotated[BaseOfferProvider, Depends(get_offer_provider)],
    config: Annotated[CalendarConfig, Depends(get_calendar_config)],
) -> CalendarService:
    return CalendarService(
        provider,
        config,
        timeout_seconds=settings.calendar_timeout_seconds,
        disconnect_poll_seconds=settings.disconnect_poll_seconds,
    )


def get_search_service(
    provider: Annotated[BaseOfferProvider, Depends(get_offer_provider)],
    config: Annotated[CalendarConfig, Depends(get_calendar_config)],
) -> SearchService:
    return SearchService(provider, config)
