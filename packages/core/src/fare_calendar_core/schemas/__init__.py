"""Core schemas for the fare calendar."""

from .calendar import (
    CalendarMeta,
    CalendarResult,
    DayPriceRecord,
    ErrorDay,
    NoOffersDay,
    Stats,
    SuccessDay,
)
from .enums import CalendarVariant, DayStatus
from .request import WINDOW_PRESETS, CalendarRequest, WindowSpec

__all__ = [
    "WINDOW_PRESETS",
    "CalendarMeta",
    "CalendarRequest",
    "CalendarResult",
    "CalendarVariant",
    "DayPriceRecord",
    "DayStatus",
    "ErrorDay",
    "NoOffersDay",
    "Stats",
    "SuccessDay",
    "WindowSpec",
]
