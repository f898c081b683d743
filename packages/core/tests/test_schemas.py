"""Core schema tests."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fare_calendar_core.schemas import (
    WINDOW_PRESETS,
    CalendarRequest,
    CalendarVariant,
    DayPriceRecord,
    DayStatus,
    ErrorDay,
    SuccessDay,
)

_records = TypeAdapter(list[DayPriceRecord])


def test_request_normalizes_codes():
    request = CalendarRequest(origin="del ", destination="bom", anchor_date="2025-03-15")

    assert request.origin == "DEL"
    assert request.destination == "BOM"
    assert request.anchor_date == date(2025, 3, 15)
    assert request.passenger_count == 1
    assert request.route == "DEL → BOM"
    assert request.window.total_days == 46


def test_request_rejects_same_origin_and_destination():
    with pytest.raises(PydanticValidationError):
        CalendarRequest(origin="DEL", destination="DEL", anchor_date=date(2025, 3, 15))


def test_request_is_immutable():
    request = CalendarRequest(
        origin="DEL", destination="BOM", anchor_date=date(2025, 3, 15)
    )

    with pytest.raises(PydanticValidationError):
        request.origin = "GOI"


def test_window_presets():
    assert WINDOW_PRESETS[CalendarVariant.DAYS_45].total_days == 46
    assert WINDOW_PRESETS[CalendarVariant.DAYS_15].before_days == 0
    assert WINDOW_PRESETS[CalendarVariant.DAYS_15].total_days == 16


def test_records_discriminate_on_status():
    records = _records.validate_python(
        [
            {
                "date": "2025-03-15",
                "offset_days": 0,
                "status": "success",
                "price": 4200,
                "cheapest_offer": {"price": 4200},
            },
            {"date": "2025-03-16", "offset_days": 1, "status": "no_flights"},
            {"date": "2025-03-17", "offset_days": 2, "status": "error"},
        ]
    )

    assert isinstance(records[0], SuccessDay)
    assert records[1].status == DayStatus.NO_OFFERS
    assert records[1].price is None
    assert isinstance(records[2], ErrorDay)


def test_success_day_requires_positive_price_and_offer():
    with pytest.raises(PydanticValidationError):
        SuccessDay(date=date(2025, 3, 15), offset_days=0, price=0, cheapest_offer={})
    with pytest.raises(PydanticValidationError):
        _records.validate_python(
            [{"date": "2025-03-15", "offset_days": 0, "status": "success"}]
        )
