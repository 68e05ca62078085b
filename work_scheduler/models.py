# -*- coding: utf-8 -*-
"""
Data models for the work-session scheduler.

Fixed tasks and assignments are read-only inputs owned by other parts of the
planner; work sessions are the scheduler's output. The ``from_*`` constructors
are the model boundary: they turn wire-level values (12-hour clock strings,
AM/PM flags, weekday abbreviations, ISO timestamps) into the normalized
representation the engine works with.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass, field
from datetime import date, datetime

from work_scheduler.clock import (
    Weekday,
    format_clock,
    parse_calendar_date,
    parse_clock,
    parse_timestamp,
    parse_weekday,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeRange:
    """Half-open interval of minutes since midnight."""
    start_minute: int
    end_minute: int

    def overlaps(self, other: TimeRange) -> bool:
        return self.start_minute < other.end_minute and other.start_minute < self.end_minute


@dataclass(frozen=True)
class OnDate:
    """Occurs once, on a single calendar day."""
    day: date

    def occurs_on(self, day: date) -> bool:
        return self.day == day


@dataclass(frozen=True)
class Weekly:
    """Recurs every week on the given weekdays."""
    weekdays: frozenset[Weekday]

    def occurs_on(self, day: date) -> bool:
        return Weekday.of(day) in self.weekdays


@dataclass(frozen=True)
class Unscheduled:
    """Has neither a date nor a weekday pattern; never on the calendar."""

    def occurs_on(self, day: date) -> bool:
        return False


Occurrence = t.Union[OnDate, Weekly, Unscheduled]


@dataclass
class FixedTask:
    """A user-entered commitment such as a class or a recurring event."""
    id: str
    title: str
    time_range: t.Optional[TimeRange] = None
    occurrence: Occurrence = field(default_factory=Unscheduled)

    @property
    def is_time_bound(self) -> bool:
        return self.time_range is not None

    @classmethod
    def from_clock_fields(
            cls,
            id: str,
            title: str = "",
            start_time: t.Optional[str] = None,
            end_time: t.Optional[str] = None,
            am_start: t.Optional[bool] = None,
            am_end: t.Optional[bool] = None,
            start_date: t.Optional[str] = None,
            days_of_week: t.Optional[t.Iterable[str]] = None,
    ) -> FixedTask:
        """Build a FixedTask from the fields the task screens submit.

        A bad clock value or date never raises: the task just loses the
        unusable part (it stops being time-bound, or falls back to its weekday
        pattern) and a warning is logged.

        :param id: Task identifier.
        :param title: Display label.
        :param start_time: Start clock string, e.g. ``"9:30"``.
        :param end_time: End clock string.
        :param am_start: AM/PM flag for the start; None for a 24-hour string.
        :param am_end: AM/PM flag for the end; None for a 24-hour string.
        :param start_date: ISO date (or datetime) of a single occurrence.
        :param days_of_week: Weekday abbreviations of a weekly occurrence.
        :return: The normalized FixedTask.
        """
        task_id = str(id)
        return cls(
            id=task_id,
            title=title,
            time_range=_time_range_from_clock(task_id, start_time, end_time, am_start, am_end),
            occurrence=_occurrence_from_fields(task_id, start_date, days_of_week),
        )

    def to_record(self) -> dict[str, t.Any]:
        """Serialize back to the wire shape, using 24-hour clock strings."""
        record: dict[str, t.Any] = {
            "id": self.id,
            "title": self.title,
            "start_time": None,
            "end_time": None,
            "am_start": None,
            "am_end": None,
            "start_date": None,
            "days_of_week": None,
        }
        if self.time_range is not None:
            record["start_time"] = format_clock(self.time_range.start_minute)
            record["end_time"] = format_clock(self.time_range.end_minute)
        if isinstance(self.occurrence, OnDate):
            record["start_date"] = self.occurrence.day.isoformat()
        elif isinstance(self.occurrence, Weekly):
            record["days_of_week"] = [
                _WEEKDAY_CODES[weekday] for weekday in sorted(self.occurrence.weekdays)
            ]
        return record


@dataclass
class Assignment:
    """A graded deliverable with a single deadline, supplied by the assignment feed."""
    id: str
    title: str
    due_at: datetime

    @classmethod
    def from_iso(cls, id: str, title: str, due_date: str) -> Assignment:
        """Build an Assignment from an ISO 8601 due date.

        :raises ValueError: If ``due_date`` is not a valid timestamp.
        """
        return cls(id=str(id), title=title, due_at=parse_timestamp(due_date))

    def to_record(self) -> dict[str, t.Any]:
        return {"id": self.id, "title": self.title, "due_date": self.due_at.isoformat()}


@dataclass(frozen=True)
class WorkHours:
    """Daily window, in minutes since midnight, inside which sessions may be placed."""
    start_minute: int
    end_minute: int

    @classmethod
    def from_clock(cls, start: str, end: str) -> WorkHours:
        """Build WorkHours from 24-hour ``HH:MM`` strings.

        :raises ValueError: If either string is malformed.
        """
        return cls(start_minute=parse_clock(start), end_minute=parse_clock(end))

    def to_record(self) -> dict[str, str]:
        return {"start": format_clock(self.start_minute), "end": format_clock(self.end_minute)}


@dataclass(frozen=True)
class WorkSession:
    """A generated one-hour block of work toward an assignment."""
    id: str
    title: str
    start: datetime
    end: datetime
    assignment_id: str
    generated: bool = True

    @property
    def date(self) -> date:
        return self.start.date()

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(
            start_minute=self.start.hour * 60 + self.start.minute,
            end_minute=self.end.hour * 60 + self.end.minute,
        )

    def to_record(self) -> dict[str, t.Any]:
        """Serialize in the same shape as a task record, flagged as generated."""
        return {
            "id": self.id,
            "title": self.title,
            "start_time": self.start.isoformat(),
            "end_time": self.end.isoformat(),
            "start_date": None,
            "days_of_week": None,
            "user_defined": False,
            "assignment_id": self.assignment_id,
        }

    @classmethod
    def from_record(cls, record: t.Mapping[str, t.Any]) -> WorkSession:
        return cls(
            id=str(record["id"]),
            title=record["title"],
            start=parse_timestamp(record["start_time"]),
            end=parse_timestamp(record["end_time"]),
            assignment_id=str(record.get("assignment_id", "")),
        )


_WEEKDAY_CODES = {
    Weekday.MONDAY: "M",
    Weekday.TUESDAY: "T",
    Weekday.WEDNESDAY: "W",
    Weekday.THURSDAY: "TH",
    Weekday.FRIDAY: "F",
    Weekday.SATURDAY: "S",
    Weekday.SUNDAY: "SU",
}


def _time_range_from_clock(
        task_id: str,
        start_time: t.Optional[str],
        end_time: t.Optional[str],
        am_start: t.Optional[bool],
        am_end: t.Optional[bool],
) -> t.Optional[TimeRange]:
    if not start_time or not end_time:
        return None
    try:
        start_minute = parse_clock(start_time, am_start)
        end_minute = parse_clock(end_time, am_end)
    except ValueError as e:
        logger.warning("Task %s has an unusable time range, ignoring it for conflicts: %s", task_id, e)
        return None
    if end_minute <= start_minute:
        logger.warning(
            "Task %s ends (%s) before it starts (%s), ignoring it for conflicts",
            task_id, format_clock(end_minute), format_clock(start_minute),
        )
        return None
    return TimeRange(start_minute=start_minute, end_minute=end_minute)


def _occurrence_from_fields(
        task_id: str,
        start_date: t.Optional[str],
        days_of_week: t.Optional[t.Iterable[str]],
) -> Occurrence:
    if start_date:
        try:
            return OnDate(day=parse_calendar_date(start_date))
        except ValueError as e:
            logger.warning("Task %s has an invalid start date %r: %s", task_id, start_date, e)

    weekdays: set[Weekday] = set()
    for abbreviation in days_of_week or ():
        try:
            weekdays.add(parse_weekday(abbreviation))
        except ValueError as e:
            logger.warning("Task %s: %s", task_id, e)
    if weekdays:
        return Weekly(weekdays=frozenset(weekdays))
    return Unscheduled()
