"""Window planner tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from fare_calendar_engine.errors import InvalidDateError, ValidationError
from fare_calendar_engine.window import parse_anchor_date, plan_request, plan_window


def test_window_spans_before_and_after_inclusive():
    slots = plan_window(date(2025, 3, 15), 30, 15, today=date(2025, 1, 1))

    assert len(slots) == 46
    assert slots[0].day == date(2025, 2, 13)
    assert slots[0].offset_days == -30
    assert slots[-1].day == date(2025, 3, 30)
    assert slots[-1].offset_days == 15
    for prev, cur in zip(slots, slots[1:], strict=False):
        assert cur.day - prev.day == timedelta(days=1)
        assert cur.offset_days == prev.offset_days + 1


def test_zero_window_is_just_the_anchor():
    slots = plan_window("2025-03-15", 0, 0, today=date(2025, 1, 1))

    assert [(s.day, s.offset_days) for s in slots] == [(date(2025, 3, 15), 0)]


def test_days_before_yesterday_are_flagged_past():
    today = date(2025, 3, 15)
    slots = plan_window(today, 3, 1, today=today)

    flags = {s.offset_days: s.is_past for s in slots}
    # yesterday itself is still queried
    assert flags == {-3: True, -2: True, -1: False, 0: False, 1: False}


def test_window_crosses_month_and_year_boundaries():
    slots = plan_window(date(2024, 12, 31), 1, 60, today=date(2024, 1, 1))

    assert slots[1].day == date(2024, 12, 31)
    assert slots[2].day == date(2025, 1, 1)
    assert date(2025, 2, 28) in {s.day for s in slots}
    assert date(2025, 3, 1) in {s.day for s in slots}


@pytest.mark.parametrize("bad", ["2025-02-30", "15/03/2025", "", "tomorrow"])
def test_unparseable_anchor_date(bad):
    with pytest.raises(InvalidDateError):
        plan_window(bad, 1, 1)


def test_invalid_date_error_is_a_validation_error():
    with pytest.raises(ValidationError):
        parse_anchor_date("2025-13-01")


def test_negative_window_rejected():
    with pytest.raises(ValueError):
        plan_window(date(2025, 3, 15), -1, 2)


def test_plan_request_uses_request_window(make_request, anchor):
    request = make_request(before=1, after=2)

    slots = plan_request(request, today=date(2025, 1, 1))

    assert [s.offset_days for s in slots] == [-1, 0, 1, 2]
    assert slots[1].day == anchor
