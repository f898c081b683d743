"""Price calendar service: engine invocation plus cancellation wiring."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from fare_calendar_engine.orchestrator import compute_calendar

if TYPE_CHECKING:
    from collections.abc import Mapping

    from starlette.requests import Request

    from fare_calendar_core.schemas import CalendarResult, WindowSpec
    from fare_calendar_engine.base import BaseOfferProvider
    from fare_calendar_engine.orchestrator import CalendarConfig

logger = logging.getLogger(__name__)


class CalendarService:
    """Runs one calendar, cancelling it on timeout or client disconnect."""

    def __init__(
        self,
        provider: BaseOfferProvider,
        config: CalendarConfig,
        *,
        timeout_seconds: float | None = None,
        disconnect_poll_seconds: float = 0.0,
    ) -> None:
        self._provider = provider
        self._config = config
        self._timeout = timeout_seconds
        self._poll = disconnect_poll_seconds

    async def build_calendar(
        self,
        payload: Mapping[str, Any],
        window: WindowSpec,
        http_request: Request | None = None,
    ) -> CalendarResult:
        cancel_event = asyncio.Event()
        watchers: list[asyncio.Task[None]] = []
        if self._timeout:
            watchers.append(
                asyncio.create_task(self._expire_after(self._timeout, cancel_event))
            )
        if http_request is not None and self._poll > 0:
            watchers.append(
                asyncio.create_task(
                    self._watch_disconnect(http_request, cancel_event)
                )
            )
        try:
            return await compute_calendar(
                payload,
                provider=self._provider,
                config=self._config,
                window=window,
                cancel_event=cancel_event,
            )
        finally:
            for watcher in watchers:
                watcher.cancel()

    @staticmethod
    async def _expire_after(seconds: float, cancel_event: asyncio.Event) -> None:
        await asyncio.sleep(seconds)
        logger.warning("Price calendar exceeded %.1fs, cancelling", seconds)
        cancel_event.set()

    async def _watch_disconnect(
        self, http_request: Request, cancel_event: asyncio.Event
    ) -> None:
        while not cancel_event.is_set():
            if await http_request.is_disconnected():
                logger.warning("Client disconnected, cancelling price calendar")
                cancel_event.set()
                return
            await asyncio.sleep(self._poll)
