"""Turn a date's fetch outcome into exactly one day price record."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fare_calendar_core.schemas import ErrorDay, NoOffersDay, SuccessDay

from .errors import (
    ProviderError,
    UpstreamAuthError,
    is_auth_failure,
    is_transient,
    status_code_of,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fare_calendar_core.schemas import CalendarRequest, DayPriceRecord

    from .retry import RetryingFetcher
    from .window import DaySlot

logger = logging.getLogger(__name__)

PAST_DATE_ERROR = "date is in the past"


def offer_price(offer: dict[str, Any]) -> float:
    """Read an offer's numeric price; raises on missing or malformed data."""
    return float(offer["price"])


def cheapest_offer(offers: Sequence[dict[str, Any]]) -> tuple[dict[str, Any], float]:
    """Return the minimum-price offer; the first one wins ties."""
    best = offers[0]
    best_price = offer_price(best)
    for offer in offers[1:]:
        price = offer_price(offer)
        if price < best_price:
            best, best_price = offer, price
    return best, best_price


def resolve_offers(slot: DaySlot, offers: Sequence[dict[str, Any]]) -> DayPriceRecord:
    if not offers:
        return NoOffersDay(date=slot.day, offset_days=slot.offset_days)
    offer, price = cheapest_offer(offers)
    return SuccessDay(
        date=slot.day,
        offset_days=slot.offset_days,
        price=price,
        cheapest_offer=offer,
    )


def resolve_error(slot: DaySlot, exc: BaseException | str) -> ErrorDay:
    return ErrorDay(date=slot.day, offset_days=slot.offset_days, error=str(exc))


def resolve_past(slot: DaySlot) -> ErrorDay:
    return resolve_error(slot, PAST_DATE_ERROR)


async def resolve_day(
    fetcher: RetryingFetcher,
    request: CalendarRequest,
    slot: DaySlot,
    *,
    max_results: int | None = None,
) -> DayPriceRecord:
    """Fetch and resolve *slot*. Never raises, except for auth failures.

    An auth failure is a whole-calendar problem, so it is re-raised as
    :class:`UpstreamAuthError` instead of being recorded against the day.
    """
    try:
        offers = await fetcher.fetch(
            request.origin,
            request.destination,
            slot.day,
            request.passenger_count,
            max_results=max_results,
        )
        return resolve_offers(slot, offers)
    except Exception as exc:
        if is_auth_failure(exc):
            if isinstance(exc, UpstreamAuthError):
                raise
            raise UpstreamAuthError(
                str(exc), status_code=status_code_of(exc)
            ) from exc
        if isinstance(exc, ProviderError) or is_transient(
            exc, fetcher.policy.retryable_status_codes
        ):
            logger.warning("Day %s resolved to error: %s", slot.day, exc)
        else:
            logger.exception("Unexpected error resolving %s", slot.day)
        return resolve_error(slot, exc)
