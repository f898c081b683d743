"""Pydantic-compatible enums for calendar schemas."""

from enum import StrEnum


class DayStatus(StrEnum):
    """Outcome of resolving a single calendar day."""

    SUCCESS = "success"
    NO_OFFERS = "no_flights"
    ERROR = "error"


class CalendarVariant(StrEnum):
    """Named calendar windows exposed over HTTP."""

    DAYS_45 = "45day"
    DAYS_15 = "15day"
