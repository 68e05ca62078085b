# -*- coding: utf-8 -*-
import typing as t
from datetime import datetime

from fastmcp import FastMCP

from services.shared.models import (
    AssignmentRecord,
    FixedTaskRecord,
    WorkHoursRecord,
    WorkSessionRecord,
)
from work_scheduler.clock import parse_timestamp
from work_scheduler.engine import allocate
from work_scheduler.models import WorkSession

mcp = FastMCP("WorkScheduler")


def _schedule_work_sessions(
        fixed_tasks: list[FixedTaskRecord],
        assignments: list[AssignmentRecord],
        work_hours: t.Optional[WorkHoursRecord],
        now: t.Optional[str] = None,
) -> list[WorkSessionRecord]:
    """Run the allocator on wire records and return the sessions as records."""
    sessions = allocate(
        [task.to_domain() for task in fixed_tasks],
        [assignment.to_domain() for assignment in assignments],
        work_hours.to_domain() if work_hours is not None else None,
        parse_timestamp(now) if now else datetime.now(),
    )
    return [WorkSessionRecord.from_domain(session) for session in sessions]


@mcp.tool()
def schedule_work_sessions(
        fixed_tasks: list[FixedTaskRecord],
        assignments: list[AssignmentRecord],
        work_hours: t.Optional[WorkHoursRecord] = None,
        now: t.Optional[str] = None,
) -> list[WorkSessionRecord]:
    """Schedules one-hour work sessions for upcoming assignments.

    Sessions avoid every fixed task, stay inside the work window (and never
    run past 8 PM), and are spread over the least busy days before each due
    date. Each assignment gets at most three sessions; fewer means the
    calendar is too full, not that something failed.

    :param fixed_tasks: The user's classes and other fixed commitments.
    :param assignments: Upcoming assignments with ISO due dates.
    :param work_hours: Daily work window ("HH:MM" start and end). Required.
    :param now: ISO datetime to schedule from (defaults to the current time).
    :return: The generated work sessions.
    """
    return _schedule_work_sessions(fixed_tasks, assignments, work_hours, now)


def _format_datetime(moment: datetime) -> str:
    """Formats a datetime as 'Mon 1/15 2:30 PM'."""
    return moment.strftime("%a %-m/%-d %-I:%M %p")


def format_work_sessions(sessions: t.Sequence[WorkSession]) -> str:
    """Formats work sessions as a clean table.

    :param sessions: Sessions to show, in display order.
    :return: Formatted table string.
    """
    if not sessions:
        return "📅 No work sessions scheduled."

    lines = []
    lines.append("📅 WORK SESSIONS")
    lines.append("=" * 90)
    lines.append(f"{'#':<4} {'Title':<45} {'Start':<20} {'End':<20}")
    lines.append("-" * 90)

    for idx, session in enumerate(sessions, 1):
        title = session.title[:44] if len(session.title) > 44 else session.title
        lines.append(
            f"{idx:<4} {title:<45} {_format_datetime(session.start):<20} "
            f"{_format_datetime(session.end):<20}"
        )

    lines.append("=" * 90)
    lines.append(f"Total: {len(sessions)} session(s)")
    return "\n".join(lines)


@mcp.tool()
def show_work_sessions(sessions: list[WorkSessionRecord]) -> str:
    """Displays work sessions in a formatted table.

    :param sessions: Work session records, e.g. the output of schedule_work_sessions.
    :return: Formatted string of the sessions, or a message if there are none.
    """
    return format_work_sessions([WorkSession.from_record(s.model_dump()) for s in sessions])


if __name__ == "__main__":
    mcp.run()
