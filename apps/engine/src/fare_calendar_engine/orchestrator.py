"""Entry point of the engine: validate, plan, fan out, aggregate."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from fare_calendar_core.schemas import (
    CalendarMeta,
    CalendarRequest,
    CalendarResult,
    DayStatus,
    WindowSpec,
)

from .aggregator import compute_stats
from .errors import ConfigurationError, ValidationError
from .retry import RetryingFetcher, RetryPolicy
from .scheduler import BatchConfig, BatchScheduler
from .window import parse_anchor_date, plan_request

if TYPE_CHECKING:
    import asyncio
    from datetime import date

    from .base import BaseOfferProvider
    from .config import EngineSettings

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("origin", "destination", "departDate")
DEFAULT_WINDOW = WindowSpec(before_days=30, after_days=15)
SEARCH_MAX_RESULTS = 50


class CalendarConfig(BaseModel):
    """Retry, batching and offer-count knobs for one calendar run."""

    model_config = ConfigDict(frozen=True)

    retry: RetryPolicy = Field(default_factory=RetryPolicy)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    max_results_per_day: int | None = 10

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> CalendarConfig:
        return cls(
            retry=RetryPolicy.from_settings(settings),
            batch=BatchConfig.from_settings(settings),
            max_results_per_day=settings.max_results_per_day,
        )


def build_request(payload: Mapping[str, Any], window: WindowSpec) -> CalendarRequest:
    """Build a :class:`CalendarRequest` from a wire payload.

    Raises :class:`ValidationError` naming missing fields, or
    :class:`InvalidDateError` when ``departDate`` does not parse.
    """
    missing = tuple(name for name in REQUIRED_FIELDS if not payload.get(name))
    if missing:
        msg = f"Missing required fields: {', '.join(missing)}"
        raise ValidationError(msg, missing_fields=missing)

    anchor = parse_anchor_date(payload["departDate"])
    passengers = payload.get("passengers")
    try:
        return CalendarRequest(
            origin=payload["origin"],
            destination=payload["destination"],
            anchor_date=anchor,
            passenger_count=1 if passengers is None else passengers,
            window_before_days=window.before_days,
            window_after_days=window.after_days,
        )
    except PydanticValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ValidationError(f"Invalid request: {details}") from exc


async def compute_calendar(
    request: CalendarRequest | Mapping[str, Any],
    *,
    provider: BaseOfferProvider,
    config: CalendarConfig | None = None,
    window: WindowSpec | None = None,
    cancel_event: asyncio.Event | None = None,
    today: date | None = None,
) -> CalendarResult:
    """Compute the full day-by-day price calendar for *request*.

    *request* may be a ready :class:`CalendarRequest` or a raw wire payload
    (``origin``, ``destination``, ``departDate``, ``passengers``), in which
    case *window* selects the span. A single day's failure never aborts the
    calendar; validation, configuration and upstream auth failures do.
    """
    start = time.monotonic()
    config = config or CalendarConfig()

    if isinstance(request, Mapping):
        request = build_request(request, window or DEFAULT_WINDOW)

    if not provider.is_configured():
        msg = "Offer search provider credentials not configured"
        raise ConfigurationError(msg)

    slots = plan_request(request, today=today)
    logger.info(
        "Price calendar %s around %s (-%d → +%d days, %d passenger(s))",
        request.route,
        request.anchor_date,
        request.window.before_days,
        request.window.after_days,
        request.passenger_count,
    )

    scheduler = BatchScheduler(
        RetryingFetcher(provider, config.retry),
        config.batch,
        max_results=config.max_results_per_day,
    )
    records = await scheduler.run(request, slots, cancel_event)
    cancelled = len(records) < len(slots)
    stats = compute_stats(records, request.anchor_date)

    elapsed_ms = int((time.monotonic() - start) * 1000)
    valid = sum(1 for r in records if r.status == DayStatus.SUCCESS)
    logger.info(
        "Price calendar %s done in %dms: %d/%d days priced%s",
        request.route,
        elapsed_ms,
        valid,
        len(records),
        " (cancelled)" if cancelled else "",
    )
    first, last = slots[0].day, slots[-1].day
    return CalendarResult(
        request=request,
        records=records,
        stats=stats,
        meta=CalendarMeta(
            total_days=len(records),
            valid_day_count=valid,
            duration_ms=elapsed_ms,
            start_date=first,
            end_date=last,
            cancelled=cancelled,
        ),
    )


async def search_single_date(
    request: CalendarRequest | Mapping[str, Any],
    *,
    provider: BaseOfferProvider,
    config: CalendarConfig | None = None,
) -> tuple[CalendarRequest, list[dict[str, Any]]]:
    """Search offers for the anchor date alone, with the calendar retry policy.

    Returns the normalized request and the provider's offers. Unlike a
    calendar day, a failed search is not absorbed: the last error propagates.
    """
    config = config or CalendarConfig()
    if isinstance(request, Mapping):
        request = build_request(request, WindowSpec(before_days=0, after_days=0))

    if not provider.is_configured():
        msg = "Offer search provider credentials not configured"
        raise ConfigurationError(msg)

    logger.info(
        "Offer search %s on %s (%d passenger(s))",
        request.route,
        request.anchor_date,
        request.passenger_count,
    )
    fetcher = RetryingFetcher(provider, config.retry)
    offers = await fetcher.fetch(
        request.origin,
        request.destination,
        request.anchor_date,
        request.passenger_count,
        max_results=SEARCH_MAX_RESULTS,
    )
    logger.info("Offer search %s returned %d offer(s)", request.route, len(offers))
    return request, offers
