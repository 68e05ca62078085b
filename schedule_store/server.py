# -*- coding: utf-8 -*-
import typing as t

from fastmcp import FastMCP

from schedule_store.models import MasterSchedule
from schedule_store.store import (
    clear_master_schedule as _clear_master_schedule,
    generate_master_schedule as _generate_master_schedule,
    get_work_hours as _get_work_hours,
    load_master_schedule as _load_master_schedule,
    save_work_hours as _save_work_hours,
)
from services.shared.models import (
    AssignmentRecord,
    FixedTaskRecord,
    MasterScheduleRecord,
    WorkHoursRecord,
)
from work_scheduler.clock import parse_timestamp
from work_scheduler.server import format_work_sessions

mcp = FastMCP("ScheduleStore")


def to_master_schedule_record(schedule: MasterSchedule) -> MasterScheduleRecord:
    """Converts a stored MasterSchedule into its wire record."""
    return MasterScheduleRecord(**schedule.to_record())


@mcp.tool()
def save_work_hours(work_hours: WorkHoursRecord) -> WorkHoursRecord:
    """Saves the user's daily work window.

    :param work_hours: Start and end of the work window in "HH:MM".
    :return: The saved work hours.
    """
    _save_work_hours(work_hours.to_domain())
    return work_hours


@mcp.tool()
def get_work_hours() -> t.Optional[WorkHoursRecord]:
    """Returns the user's daily work window, or null if it was never set."""
    work_hours = _get_work_hours()
    return WorkHoursRecord(**work_hours.to_record()) if work_hours else None


@mcp.tool()
def generate_master_schedule(
        fixed_tasks: list[FixedTaskRecord],
        assignments: list[AssignmentRecord],
        now: t.Optional[str] = None,
) -> MasterScheduleRecord:
    """Regenerates the master schedule from fixed tasks and assignments.

    Uses the saved work hours, replaces any previously generated work sessions
    and stores the result.

    :param fixed_tasks: The user's classes and other fixed commitments.
    :param assignments: Upcoming assignments with ISO due dates.
    :param now: ISO datetime to schedule from (defaults to the current time).
    :return: The new master schedule.
    """
    schedule = _generate_master_schedule(
        [task.to_domain() for task in fixed_tasks],
        [assignment.to_domain() for assignment in assignments],
        now=parse_timestamp(now) if now else None,
    )
    return to_master_schedule_record(schedule)


@mcp.tool()
def load_master_schedule() -> t.Optional[MasterScheduleRecord]:
    """Returns the stored master schedule, or null if none was generated yet."""
    schedule = _load_master_schedule()
    return to_master_schedule_record(schedule) if schedule else None


@mcp.tool()
def clear_master_schedule() -> str:
    """Deletes the stored master schedule."""
    _clear_master_schedule()
    return "Master schedule cleared."


def format_master_schedule(schedule: t.Optional[MasterSchedule]) -> str:
    """Formats the master schedule's generated sessions with a short header."""
    if schedule is None:
        return "📅 No master schedule generated yet."

    header = (
        f"Fixed tasks: {len(schedule.fixed_tasks)} | "
        f"Assignments: {len(schedule.assignments)}"
    )
    if schedule.generated_at is not None:
        header += f" | Generated: {schedule.generated_at.strftime('%Y-%m-%d %H:%M')}"
    return header + "\n" + format_work_sessions(schedule.work_sessions)


@mcp.tool()
def show_master_schedule() -> str:
    """Displays the stored master schedule's work sessions as a table.

    :return: Formatted table string, or a message if nothing is stored.
    """
    return format_master_schedule(_load_master_schedule())


if __name__ == "__main__":
    mcp.run()
