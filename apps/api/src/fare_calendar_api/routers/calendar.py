"""Price calendar router."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from fare_calendar_core.schemas import WINDOW_PRESETS, CalendarVariant

from ..dependencies import get_calendar_service
from ..schemas.calendar import PriceCalendarRequest, PriceCalendarResponse
from ..services.calendar_service import CalendarService

router = APIRouter(prefix="/flights", tags=["calendar"])

ServiceDep = Annotated[CalendarService, Depends(get_calendar_service)]


async def _price_calendar(
    variant: CalendarVariant,
    body: PriceCalendarRequest,
    service: CalendarService,
    http_request: Request,
) -> PriceCalendarResponse:
    payload = body.model_dump()
    result = await service.build_calendar(
        payload, WINDOW_PRESETS[variant], http_request
    )
    return PriceCalendarResponse.from_result(result)


@router.post("/price-calendar-45day", response_model=PriceCalendarResponse)
async def price_calendar_45day(
    body: PriceCalendarRequest,
    service: ServiceDep,
    http_request: Request,
) -> PriceCalendarResponse:
    """Cheapest price per day from 30 days before to 15 days after departDate."""
    return await _price_calendar(
        CalendarVariant.DAYS_45, body, service, http_request
    )


@router.post("/price-calendar-15day", response_model=PriceCalendarResponse)
async def price_calendar_15day(
    body: PriceCalendarRequest,
    service: ServiceDep,
    http_request: Request,
) -> PriceCalendarResponse:
    """Cheapest price per day from departDate to 15 days after."""
    return await _price_calendar(
        CalendarVariant.DAYS_15, body, service, http_request
    )
