"""Tests for clock and weekday parsing."""
from datetime import date, datetime, timezone

import pytest

from work_scheduler.clock import (
    Weekday,
    format_clock,
    parse_calendar_date,
    parse_clock,
    parse_timestamp,
    parse_weekday,
)


def test_twelve_hour_clock_with_am_pm_flags() -> None:
    """AM/PM flags shift hours the way a 12-hour clock does."""
    assert parse_clock("9:30", am=True) == 9 * 60 + 30
    assert parse_clock("1:15", am=False) == 13 * 60 + 15
    assert parse_clock("12:00", am=True) == 0
    assert parse_clock("12:30", am=False) == 12 * 60 + 30


def test_clock_without_flag_is_24_hour() -> None:
    assert parse_clock("14:05") == 14 * 60 + 5
    assert parse_clock("00:00") == 0
    assert parse_clock(" 08:00 ") == 8 * 60


def test_clock_with_seconds() -> None:
    assert parse_clock("08:00:00") == 8 * 60
    assert parse_clock("2:15:30", am=False) == 14 * 60 + 15


def test_afternoon_hours_ignore_the_am_flag() -> None:
    """Task screens default the flag to AM, so 24-hour afternoon values still arrive with it set."""
    assert parse_clock("13:00", am=True) == 13 * 60
    assert parse_clock("14:30", am=False) == 14 * 60 + 30


@pytest.mark.parametrize(
    "text, am",
    [
        ("25:00", None),
        ("24:00", True),
        ("9:60", None),
        ("9:30:60", None),
        ("9:30:00:00", None),
        ("0:30", False),
        ("9-30", None),
        ("", None),
        ("nine", True),
    ],
)
def test_malformed_clock_values_raise(text: str, am) -> None:
    with pytest.raises(ValueError):
        parse_clock(text, am)


def test_format_clock_pads_hours_and_minutes() -> None:
    assert format_clock(9 * 60 + 5) == "09:05"
    assert format_clock(20 * 60) == "20:00"


def test_weekday_abbreviations() -> None:
    """Both the task-screen codes and three-letter names are understood."""
    assert parse_weekday("M") is Weekday.MONDAY
    assert parse_weekday("th") is Weekday.THURSDAY
    assert parse_weekday("T") is Weekday.TUESDAY
    assert parse_weekday("SU") is Weekday.SUNDAY
    assert parse_weekday("Wed") is Weekday.WEDNESDAY

    with pytest.raises(ValueError):
        parse_weekday("X")


def test_weekday_of_date() -> None:
    assert Weekday.of(date(2025, 4, 14)) is Weekday.MONDAY
    assert Weekday.of(date(2025, 4, 20)) is Weekday.SUNDAY


def test_timestamps_accept_trailing_z() -> None:
    assert parse_timestamp("2025-04-16T23:59:00Z") == datetime(2025, 4, 16, 23, 59, tzinfo=timezone.utc)


def test_calendar_date_from_date_or_datetime() -> None:
    assert parse_calendar_date("2025-04-14") == date(2025, 4, 14)
    assert parse_calendar_date("2025-04-14T10:00:00.000Z") == date(2025, 4, 14)
