"""Batched fan-out of per-day lookups with an inter-batch pause."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .resolver import resolve_day, resolve_past

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Sequence

    from fare_calendar_core.schemas import CalendarRequest, DayPriceRecord

    from .config import EngineSettings
    from .retry import RetryingFetcher
    from .window import DaySlot

logger = logging.getLogger(__name__)


class BatchConfig(BaseModel):
    """Upper bound on concurrent provider calls and the pause between batches."""

    model_config = ConfigDict(frozen=True)

    batch_size: int = Field(default=8, ge=1)
    pause_seconds: float = Field(default=0.5, ge=0)

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> BatchConfig:
        return cls(
            batch_size=settings.batch_size,
            pause_seconds=settings.batch_pause_seconds,
        )


class CalendarCancelled(Exception):  # noqa: N818
    """Raised internally when the cancellation token fires mid-batch."""


def partition(slots: Sequence[DaySlot], size: int) -> list[list[DaySlot]]:
    """Split *slots* into consecutive chunks of at most *size*."""
    return [list(slots[i : i + size]) for i in range(0, len(slots), size)]


async def _gather_or_abandon(
    jobs: list[Awaitable[DayPriceRecord]],
    cancel_event: asyncio.Event | None,
) -> list[DayPriceRecord]:
    """Await every job; abandon all of them if *cancel_event* fires first.

    The first job exception cancels the remaining siblings and propagates.
    """
    tasks = [asyncio.ensure_future(job) for job in jobs]
    waiter = asyncio.ensure_future(cancel_event.wait()) if cancel_event else None
    pending: set[asyncio.Future] = set(tasks)
    try:
        while pending:
            watch = pending | {waiter} if waiter is not None else pending
            done, _ = await asyncio.wait(watch, return_when=asyncio.FIRST_COMPLETED)
            if waiter is not None and waiter in done:
                raise CalendarCancelled
            for task in done:
                exc = task.exception()
                if exc is not None:
                    raise exc
            pending -= done
        return [task.result() for task in tasks]
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
            elif not task.cancelled():
                task.exception()  # mark retrieved
        if waiter is not None:
            waiter.cancel()


async def _pause(seconds: float, cancel_event: asyncio.Event | None) -> None:
    if seconds <= 0:
        return
    if cancel_event is None:
        await asyncio.sleep(seconds)
        return
    with contextlib.suppress(TimeoutError):
        await asyncio.wait_for(cancel_event.wait(), timeout=seconds)


class BatchScheduler:
    """Resolves planned days batch by batch, preserving planned order."""

    def __init__(
        self,
        fetcher: RetryingFetcher,
        config: BatchConfig,
        *,
        max_results: int | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._config = config
        self._max_results = max_results

    async def _run_batch(
        self,
        request: CalendarRequest,
        batch: list[DaySlot],
        cancel_event: asyncio.Event | None,
    ) -> list[DayPriceRecord]:
        records: list[DayPriceRecord | None] = []
        live: list[tuple[int, DaySlot]] = []
        for slot in batch:
            if slot.is_past:
                records.append(resolve_past(slot))
            else:
                live.append((len(records), slot))
                records.append(None)

        if live:
            resolved = await _gather_or_abandon(
                [
                    resolve_day(
                        self._fetcher, request, slot, max_results=self._max_results
                    )
                    for _, slot in live
                ],
                cancel_event,
            )
            for (index, _), record in zip(live, resolved, strict=True):
                records[index] = record
        return [r for r in records if r is not None]

    async def iter_batches(
        self,
        request: CalendarRequest,
        slots: Sequence[DaySlot],
        cancel_event: asyncio.Event | None = None,
    ) -> AsyncIterator[list[DayPriceRecord]]:
        """Yield each batch's ordered records as soon as the batch completes.

        Stops silently when *cancel_event* is set; the current batch is
        abandoned and not yielded.
        """
        batches = partition(slots, self._config.batch_size)
        for number, batch in enumerate(batches, 1):
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("Calendar cancelled before batch %d", number)
                return
            queried = sum(1 for slot in batch if not slot.is_past)
            logger.info(
                "Batch %d/%d: %s..%s (%d queried)",
                number,
                len(batches),
                batch[0].day,
                batch[-1].day,
                queried,
            )
            try:
                records = await self._run_batch(request, batch, cancel_event)
            except CalendarCancelled:
                logger.warning("Calendar cancelled during batch %d", number)
                return
            yield records
            # Pause only after batches that actually hit the provider.
            if number < len(batches) and queried:
                await _pause(self._config.pause_seconds, cancel_event)

    async def run(
        self,
        request: CalendarRequest,
        slots: Sequence[DaySlot],
        cancel_event: asyncio.Event | None = None,
    ) -> list[DayPriceRecord]:
        results: list[DayPriceRecord] = []
        async for records in self.iter_batches(request, slots, cancel_event):
            results.extend(records)
        return results
