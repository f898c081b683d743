"""Shared fixtures for API tests: app with a scripted provider."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import httpx
import pytest

from fare_calendar_api.dependencies import (
    get_calendar_config,
    get_calendar_service,
    get_offer_provider,
)
from fare_calendar_api.main import create_app
from fare_calendar_api.services.calendar_service import CalendarService
from fare_calendar_engine.base import BaseOfferProvider
from fare_calendar_engine.orchestrator import CalendarConfig
from fare_calendar_engine.retry import RetryPolicy
from fare_calendar_engine.scheduler import BatchConfig


class ScriptedProvider(BaseOfferProvider):
    """Answers per date from ``script`` (offers list or exception)."""

    def __init__(
        self,
        script: dict[date, Any] | None = None,
        *,
        default: Any = None,
        configured: bool = True,
        reachable: bool = True,
    ) -> None:
        self.script = script or {}
        self.default = default
        self.configured = configured
        self.reachable = reachable
        self.calls: list[date] = []

    async def search_offers(
        self,
        origin: str,
        destination: str,
        day: date,
        passenger_count: int,
        *,
        max_results: int | None = None,
    ) -> list[dict[str, Any]]:
        self.calls.append(day)
        outcome = self.script.get(day, self.default)
        if isinstance(outcome, BaseException):
            raise outcome
        return list(outcome or [])

    def is_configured(self) -> bool:
        return self.configured

    async def health_check(self) -> bool:
        return self.reachable

    async def close(self) -> None:
        pass


FAST_CONFIG = CalendarConfig(
    retry=RetryPolicy(max_attempts=3, delay_seconds=0),
    batch=BatchConfig(batch_size=8, pause_seconds=0),
)


@pytest.fixture
def depart_date() -> date:
    """A departure far enough ahead that the whole 45-day window is queryable."""
    return date.today() + timedelta(days=60)


@pytest.fixture
def provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def app(provider: ScriptedProvider):
    application = create_app()
    application.dependency_overrides[get_offer_provider] = lambda: provider
    application.dependency_overrides[get_calendar_config] = lambda: FAST_CONFIG
    application.dependency_overrides[get_calendar_service] = lambda: CalendarService(
        provider, FAST_CONFIG
    )
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
