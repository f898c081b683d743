"""Per-day records, summary statistics and the assembled calendar."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat

from .enums import DayStatus
from .request import CalendarRequest  # noqa: TC001


class _DayBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    offset_days: int


class SuccessDay(_DayBase):
    """A day with at least one offer; carries the cheapest one."""

    status: Literal[DayStatus.SUCCESS] = DayStatus.SUCCESS
    price: PositiveFloat
    cheapest_offer: dict[str, Any]


class NoOffersDay(_DayBase):
    """The provider answered, but had nothing for this day."""

    status: Literal[DayStatus.NO_OFFERS] = DayStatus.NO_OFFERS

    @property
    def price(self) -> None:
        return None

    @property
    def cheapest_offer(self) -> None:
        return None


class ErrorDay(_DayBase):
    """The day could not be resolved (past date or failed lookup)."""

    status: Literal[DayStatus.ERROR] = DayStatus.ERROR
    error: str | None = None

    @property
    def price(self) -> None:
        return None

    @property
    def cheapest_offer(self) -> None:
        return None


DayPriceRecord = Annotated[
    SuccessDay | NoOffersDay | ErrorDay, Field(discriminator="status")
]


class Stats(BaseModel):
    """Summary over the successful days. Every field is None without data."""

    model_config = ConfigDict(frozen=True)

    lowest_price: float | None = None
    highest_price: float | None = None
    average_price: int | None = None
    best_date: date | None = None
    anchor_date_price: float | None = None
    potential_savings: float | None = None
    best_date_offset: int | None = None


class CalendarMeta(BaseModel):
    """Run metadata attached to every calendar."""

    total_days: int
    valid_day_count: int
    duration_ms: int
    start_date: date
    end_date: date
    cancelled: bool = False


class CalendarResult(BaseModel):
    """The normalized request, its ordered day records and their statistics."""

    request: CalendarRequest
    records: list[DayPriceRecord] = Field(default_factory=list)
    stats: Stats = Field(default_factory=Stats)
    meta: CalendarMeta
