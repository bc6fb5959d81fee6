"""
Tests for display date parsing and formatting
"""
from datetime import date, datetime

import pytest

from app.utils.date_format import (
    format_display_date,
    format_long_date,
    month_name,
    month_number,
    parse_display_date,
)


def test_parse_dotted_date():
    assert parse_display_date("15.12.2025") == date(2025, 12, 15)
    assert parse_display_date(" 01.02.2026 ") == date(2026, 2, 1)


def test_parse_iso_date_and_datetime_string():
    assert parse_display_date("2025-12-15") == date(2025, 12, 15)
    assert parse_display_date("2025-12-15T09:30:00+11:00") == date(2025, 12, 15)


def test_parse_date_objects_pass_through():
    assert parse_display_date(date(2025, 3, 4)) == date(2025, 3, 4)
    assert parse_display_date(datetime(2025, 3, 4, 23, 59)) == date(2025, 3, 4)


@pytest.mark.parametrize("value", [None, "", "   ", "31.02.2025", "15.13.2025", "15.12", "1.2.3.4", "aa.bb.cccc", "next week", 20251215])
def test_parse_invalid_returns_none(value):
    assert parse_display_date(value) is None


def test_dotted_round_trip_keeps_calendar_day():
    for text in ("01.01.2025", "29.02.2024", "31.12.2025"):
        assert parse_display_date(format_display_date(parse_display_date(text))) == parse_display_date(text)


def test_format_display_date():
    assert format_display_date(date(2026, 1, 5)) == "05.01.2026"
    assert format_display_date("2026-01-05") == "05.01.2026"
    assert format_display_date("garbage") == ""


def test_format_long_date():
    assert format_long_date(date(2025, 12, 15)) == "December 15, 2025"
    assert format_long_date("15.01.2026") == "January 15, 2026"
    assert format_long_date(None) == ""


def test_month_name_and_number():
    assert month_name(1) == "January"
    assert month_name(12) == "December"
    assert month_number("october") == 10
    assert month_number(" March ") == 3
    assert month_number("Octobre") is None
    assert month_number(None) is None


def test_month_name_out_of_range():
    with pytest.raises(ValueError):
        month_name(13)
