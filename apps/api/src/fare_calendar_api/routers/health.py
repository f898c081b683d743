"""Provider health router."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from fare_calendar_engine.base import BaseOfferProvider  # noqa: TC002

from ..dependencies import get_offer_provider

router = APIRouter(tags=["health"])

ProviderDep = Annotated[BaseOfferProvider, Depends(get_offer_provider)]


@router.get("/health")
async def health(provider: ProviderDep) -> dict:
    """Report whether the offer search provider is configured and reachable."""
    configured = provider.is_configured()
    reachable = configured and await provider.health_check()
    return {
        "status": "ok" if reachable else "degraded",
        "providerConfigured": configured,
        "providerReachable": reachable,
    }
