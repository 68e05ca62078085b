"""
Clock and weekday parsing for the commitment model.

Fixed tasks arrive with 12-hour clock strings and a separate AM/PM flag per
endpoint. Everything is normalized here to minutes since midnight so the
scheduling code never has to look at AM/PM flags.
"""
from __future__ import annotations

import typing as t
from datetime import date, datetime
from enum import Enum

MINUTES_PER_DAY = 24 * 60


class Weekday(int, Enum):
    """Day of week, numbered like ``date.weekday()`` (Monday is 0)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, day: date) -> Weekday:
        return cls(day.weekday())


# Abbreviations used by the schedule entry screen ("M", "T", "W", "TH", ...)
# plus the three-letter names syllabus meeting patterns use ("Mon", "Wed").
_WEEKDAY_ABBREVIATIONS: dict[str, Weekday] = {
    "M": Weekday.MONDAY,
    "T": Weekday.TUESDAY,
    "W": Weekday.WEDNESDAY,
    "TH": Weekday.THURSDAY,
    "F": Weekday.FRIDAY,
    "S": Weekday.SATURDAY,
    "SU": Weekday.SUNDAY,
    "MON": Weekday.MONDAY,
    "TUE": Weekday.TUESDAY,
    "WED": Weekday.WEDNESDAY,
    "THU": Weekday.THURSDAY,
    "FRI": Weekday.FRIDAY,
    "SAT": Weekday.SATURDAY,
    "SUN": Weekday.SUNDAY,
}


def parse_weekday(abbreviation: str) -> Weekday:
    """Parse a weekday abbreviation such as ``"TH"`` or ``"Mon"``.

    :raises ValueError: If the abbreviation is not recognized.
    """
    key = abbreviation.strip().upper()
    if key not in _WEEKDAY_ABBREVIATIONS:
        raise ValueError(f"Unknown weekday abbreviation: {abbreviation!r}")
    return _WEEKDAY_ABBREVIATIONS[key]


def parse_clock(text: str, am: t.Optional[bool] = None) -> int:
    """Convert a clock string to minutes since midnight.

    With ``am`` set, ``text`` is read as a 12-hour clock ("12:30" with
    ``am=True`` is 00:30, with ``am=False`` it is 12:30). With ``am`` left as
    None the string is read as a 24-hour clock. Hours 13-23 are always
    24-hour, whatever the flag says. Seconds are accepted and dropped.

    :param text: Clock string in ``H:MM``, ``HH:MM`` or ``HH:MM:SS`` form.
    :param am: True for AM, False for PM, None for 24-hour input.
    :return: Minutes since midnight.
    :raises ValueError: If the string cannot be parsed.
    """
    if not isinstance(text, str):
        raise ValueError(f"Clock value must be a string, got {type(text).__name__}")

    parts = text.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid clock format: {text!r}")

    hour, minute = int(parts[0]), int(parts[1])
    if minute > 59 or (len(parts) == 3 and int(parts[2]) > 59):
        raise ValueError(f"Invalid minute in clock value: {text!r}")

    if am is None or 12 < hour:
        if hour > 23:
            raise ValueError(f"Invalid hour in clock value: {text!r}")
        return hour * 60 + minute

    if not 1 <= hour <= 12:
        raise ValueError(f"Invalid 12-hour clock value: {text!r}")
    hour = hour % 12
    if not am:
        hour += 12
    return hour * 60 + minute


def format_clock(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def parse_timestamp(iso_string: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing ``Z``.

    :raises ValueError: If the string is not a valid timestamp.
    """
    return datetime.fromisoformat(iso_string.strip().replace("Z", "+00:00"))


def parse_calendar_date(text: str) -> date:
    """Parse an ISO date or datetime string down to its calendar date."""
    text = text.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return parse_timestamp(text).date()
