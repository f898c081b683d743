"""Plan the ordered set of calendar days around an anchor date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING

from .errors import InvalidDateError

if TYPE_CHECKING:
    from fare_calendar_core.schemas import CalendarRequest


@dataclass(frozen=True, slots=True)
class DaySlot:
    """One planned calendar day. ``is_past`` days are never queried."""

    day: date
    offset_days: int
    is_past: bool = False


def parse_anchor_date(value: date | str) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        msg = f"Invalid anchor date: {value!r}"
        raise InvalidDateError(msg) from exc


def plan_window(
    anchor_date: date | str,
    before_days: int,
    after_days: int,
    *,
    today: date | None = None,
) -> list[DaySlot]:
    """Return ``before_days + after_days + 1`` consecutive slots.

    Days strictly earlier than yesterday are kept but flagged as past.
    """
    anchor = parse_anchor_date(anchor_date)
    if before_days < 0 or after_days < 0:
        msg = "window sizes must be non-negative"
        raise ValueError(msg)
    yesterday = (today or date.today()) - timedelta(days=1)

    slots: list[DaySlot] = []
    for offset in range(-before_days, after_days + 1):
        day = anchor + timedelta(days=offset)
        slots.append(DaySlot(day=day, offset_days=offset, is_past=day < yesterday))
    return slots


def plan_request(
    request: CalendarRequest, *, today: date | None = None
) -> list[DaySlot]:
    """Plan the slots of *request*'s window around its anchor date."""
    window = request.window
    return plan_window(
        request.anchor_date, window.before_days, window.after_days, today=today
    )
