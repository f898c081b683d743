"""Price calendar request/response wire schemas (camelCase on the wire)."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fare_calendar_core.schemas import DayStatus

if TYPE_CHECKING:
    from fare_calendar_core.schemas import CalendarResult


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceCalendarRequest(BaseModel):
    """Request body. Presence checks happen in the engine so they can 400."""

    model_config = ConfigDict(extra="ignore")

    origin: str | None = None
    destination: str | None = None
    departDate: str | None = None  # noqa: N815
    passengers: int | None = None


class PriceDataPoint(_WireModel):
    date: date
    price: float | None = None
    flight_data: dict[str, Any] | None = None
    status: DayStatus
    days_from_search: int


class CalendarStats(_WireModel):
    lowest_price: float | None = None
    highest_price: float | None = None
    average_price: int | None = None
    best_date: date | None = None
    search_date_price: float | None = None
    potential_savings: float | None = None
    days_before_best_price: int | None = None


class DateRange(_WireModel):
    start: date
    end: date


class CalendarMetaOut(_WireModel):
    total_days: int
    valid_data_points: int
    duration: int = Field(description="Milliseconds")
    date_range: DateRange
    cancelled: bool = False


class PriceCalendarResponse(_WireModel):
    """Successful (possibly degraded) calendar."""

    success: bool = True
    route: str
    search_date: str
    price_data: list[PriceDataPoint]
    stats: CalendarStats
    meta: CalendarMetaOut

    @classmethod
    def from_result(cls, result: CalendarResult) -> PriceCalendarResponse:
        stats, meta = result.stats, result.meta
        return cls(
            route=result.request.route,
            search_date=result.request.anchor_date.isoformat(),
            price_data=[
                PriceDataPoint(
                    date=r.date,
                    price=r.price,
                    flight_data=r.cheapest_offer,
                    status=r.status,
                    days_from_search=r.offset_days,
                )
                for r in result.records
            ],
            stats=CalendarStats(
                lowest_price=stats.lowest_price,
                highest_price=stats.highest_price,
                average_price=stats.average_price,
                best_date=stats.best_date,
                search_date_price=stats.anchor_date_price,
                potential_savings=stats.potential_savings,
                days_before_best_price=stats.best_date_offset,
            ),
            meta=CalendarMetaOut(
                total_days=meta.total_days,
                valid_data_points=meta.valid_day_count,
                duration=meta.duration_ms,
                date_range=DateRange(start=meta.start_date, end=meta.end_date),
                cancelled=meta.cancelled,
            ),
        )
