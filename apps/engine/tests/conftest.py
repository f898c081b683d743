"""Shared fixtures and fakes for engine tests."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from datetime import date, timedelta
from typing import Any

import pytest

from fare_calendar_core.schemas import CalendarRequest
from fare_calendar_engine.base import BaseOfferProvider
from fare_calendar_engine.orchestrator import CalendarConfig
from fare_calendar_engine.retry import RetryPolicy
from fare_calendar_engine.scheduler import BatchConfig


class FakeOfferProvider(BaseOfferProvider):
    """Scripted provider: per-date queue of offer lists or exceptions.

    Dates without a script answer with no offers.  ``delays`` lets a date
    take longer so completion order differs from planned order.
    """

    def __init__(
        self,
        script: dict[date, list[Any]] | None = None,
        *,
        configured: bool = True,
        delays: dict[date, float] | None = None,
        default: Any = None,
    ) -> None:
        self._script = {day: list(outcomes) for day, outcomes in (script or {}).items()}
        self._configured = configured
        self._delays = delays or {}
        self._default = default
        self.calls: list[date] = []
        self.calls_by_day: dict[date, int] = defaultdict(int)
        self.in_flight = 0
        self.max_in_flight = 0
        self.cancelled: list[date] = []
        self.closed = False

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
        self.calls_by_day[day] += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delays.get(day, 0))
        except asyncio.CancelledError:
            self.cancelled.append(day)
            raise
        finally:
            self.in_flight -= 1

        queue = self._script.get(day)
        outcome = queue.pop(0) if queue else self._default
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(day)
        return list(outcome or [])

    def is_configured(self) -> bool:
        return self._configured

    async def health_check(self) -> bool:
        return self._configured

    async def close(self) -> None:
        self.closed = True


def offers(*prices: float) -> list[dict[str, Any]]:
    return [{"id": f"o{i}", "price": p} for i, p in enumerate(prices)]


@pytest.fixture
def today() -> date:
    return date(2025, 3, 10)


@pytest.fixture
def anchor() -> date:
    return date(2025, 3, 15)


@pytest.fixture
def make_request(anchor: date):
    """Factory fixture for CalendarRequest instances."""

    def _make(
        before: int = 2,
        after: int = 2,
        *,
        origin: str = "DEL",
        destination: str = "BOM",
        anchor_date: date | None = None,
        passengers: int = 1,
    ) -> CalendarRequest:
        return CalendarRequest(
            origin=origin,
            destination=destination,
            anchor_date=anchor_date or anchor,
            passenger_count=passengers,
            window_before_days=before,
            window_after_days=after,
        )

    return _make


@pytest.fixture
def fast_policy() -> RetryPolicy:
    return RetryPolicy(max_attempts=3, delay_seconds=0)


@pytest.fixture
def fast_config(fast_policy: RetryPolicy) -> CalendarConfig:
    return CalendarConfig(
        retry=fast_policy,
        batch=BatchConfig(batch_size=8, pause_seconds=0),
    )


@pytest.fixture
def offer_factory():
    return offers


@pytest.fixture
def provider_factory():
    return FakeOfferProvider


@pytest.fixture
def days_around():
    """``days_around(anchor, -2, 2)`` -> list of consecutive dates."""

    def _days(center: date, start: int, stop: int) -> list[date]:
        return [center + timedelta(days=o) for o in range(start, stop + 1)]

    return _days
