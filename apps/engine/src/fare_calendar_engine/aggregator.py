"""Summary statistics over resolved day records."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from fare_calendar_core.schemas import Stats, SuccessDay

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from fare_calendar_core.schemas import DayPriceRecord


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_stats(records: Sequence[DayPriceRecord], anchor_date: date) -> Stats:
    """Lowest/highest/average price, best date and savings vs. the anchor day."""
    valid = [r for r in records if isinstance(r, SuccessDay)]
    if not valid:
        return Stats()

    best = valid[0]
    for record in valid[1:]:
        if record.price < best.price or (
            record.price == best.price and record.date < best.date
        ):
            best = record

    prices = [r.price for r in valid]
    anchor_price = next((r.price for r in valid if r.date == anchor_date), None)
    savings = (
        max(0.0, anchor_price - best.price) if anchor_price is not None else None
    )

    return Stats(
        lowest_price=best.price,
        highest_price=max(prices),
        average_price=round_half_up(sum(prices) / len(prices)),
        best_date=best.date,
        anchor_date_price=anchor_price,
        potential_savings=savings,
        best_date_offset=(best.date - anchor_date).days,
    )
