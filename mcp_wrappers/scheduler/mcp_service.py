"""
MCP wrapper for the scheduler service.

Exposes schedule_work_sessions and every schedule-store tool, but each call
goes over HTTP to the scheduler service. Service
failures surface as RuntimeError with the service's status and message.
"""
from __future__ import annotations

import os
import typing as t
from datetime import datetime

import httpx
from fastmcp import FastMCP

from services.shared.models import (
    AssignmentRecord,
    FixedTaskRecord,
    GenerateMasterScheduleRequest,
    MasterScheduleRecord,
    ScheduleRequest,
    ShowWorkSessionsResponse,
    WorkHoursRecord,
    WorkSessionRecord,
)


mcp = FastMCP("SchedulerMCPWrapper")

# Service URL - configurable via environment variable
SCHEDULER_SERVICE_URL = os.getenv("SCHEDULER_SERVICE_URL", "http://localhost:8004")

# Scheduling is fast; the timeout only guards against a hung service.
STANDARD_TIMEOUT = 30.0


def _schedule_work_sessions(
    fixed_tasks: list[FixedTaskRecord],
    assignments: list[AssignmentRecord],
    work_hours: t.Optional[WorkHoursRecord] = None,
    now: t.Optional[str] = None,
) -> list[WorkSessionRecord]:
    """
    Schedule work sessions without storing them.

    Makes an HTTP call to the scheduler service's one-off scheduling endpoint.
    """
    request = ScheduleRequest(
        fixed_tasks=fixed_tasks,
        assignments=assignments,
        work_hours=work_hours,
        now=_parse_now(now),
    )
    response = _call("POST", "/schedule/work-sessions", json=request.model_dump(mode="json"))
    return [WorkSessionRecord(**session) for session in response.json()]


def _save_work_hours(work_hours: WorkHoursRecord) -> WorkHoursRecord:
    """Save the daily work window on the scheduler service."""
    response = _call("PUT", "/preferences/work-hours", json=work_hours.model_dump())
    return WorkHoursRecord(**response.json())


def _get_work_hours() -> t.Optional[WorkHoursRecord]:
    """Fetch the saved work window; None if the service has none."""
    response = _call("GET", "/preferences/work-hours", allow_not_found=True)
    if response.status_code == 404:
        return None
    return WorkHoursRecord(**response.json())


def _generate_master_schedule(
    fixed_tasks: list[FixedTaskRecord],
    assignments: list[AssignmentRecord],
    now: t.Optional[str] = None,
) -> MasterScheduleRecord:
    """Regenerate and store the master schedule using the service's saved work hours."""
    request = GenerateMasterScheduleRequest(
        fixed_tasks=fixed_tasks,
        assignments=assignments,
        now=_parse_now(now),
    )
    response = _call("POST", "/master-schedule", json=request.model_dump(mode="json"))
    return MasterScheduleRecord(**response.json())


def _load_master_schedule() -> t.Optional[MasterScheduleRecord]:
    """Fetch the stored master schedule; None if the service has none."""
    response = _call("GET", "/master-schedule", allow_not_found=True)
    if response.status_code == 404:
        return None
    return MasterScheduleRecord(**response.json())


def _clear_master_schedule() -> str:
    """Delete the stored master schedule on the scheduler service."""
    _call("DELETE", "/master-schedule")
    return "Master schedule cleared."


def _show_master_schedule() -> str:
    """Fetch the formatted table of the stored master schedule's sessions."""
    response = _call("GET", "/master-schedule/sessions:show")
    return ShowWorkSessionsResponse(**response.json()).formatted_sessions


def _call(
    method: str,
    path: str,
    json: t.Optional[t.Any] = None,
    allow_not_found: bool = False,
) -> httpx.Response:
    """Send one request to the scheduler service and translate failures."""
    try:
        with httpx.Client(timeout=STANDARD_TIMEOUT) as client:
            response = client.request(method, f"{SCHEDULER_SERVICE_URL}{path}", json=json)
            if not (allow_not_found and response.status_code == 404):
                response.raise_for_status()
        return response

    except httpx.TimeoutException as e:
        raise RuntimeError(f"Scheduler service call timed out after {STANDARD_TIMEOUT} seconds") from e
    except httpx.HTTPStatusError as e:
        raise RuntimeError(
            f"HTTP error from scheduler service: {e.response.status_code} {e.response.text}"
        ) from e
    except httpx.HTTPError as e:
        raise RuntimeError(f"Error calling scheduler service: {str(e)}") from e


def _parse_now(now: t.Optional[str]) -> t.Optional[datetime]:
    if not now:
        return None
    return datetime.fromisoformat(now.replace("Z", "+00:00"))


# MCP tool wrappers that call the raw functions
@mcp.tool()
def schedule_work_sessions(
    fixed_tasks: list[FixedTaskRecord],
    assignments: list[AssignmentRecord],
    work_hours: t.Optional[WorkHoursRecord] = None,
    now: t.Optional[str] = None,
) -> list[WorkSessionRecord]:
    """Schedules one-hour work sessions for upcoming assignments."""
    return _schedule_work_sessions(fixed_tasks, assignments, work_hours, now)


@mcp.tool()
def save_work_hours(work_hours: WorkHoursRecord) -> WorkHoursRecord:
    """Saves the user's daily work window."""
    return _save_work_hours(work_hours)


@mcp.tool()
def get_work_hours() -> t.Optional[WorkHoursRecord]:
    """Returns the user's daily work window, or null if it was never set."""
    return _get_work_hours()


@mcp.tool()
def generate_master_schedule(
    fixed_tasks: list[FixedTaskRecord],
    assignments: list[AssignmentRecord],
    now: t.Optional[str] = None,
) -> MasterScheduleRecord:
    """Regenerates the stored master schedule from fixed tasks and assignments."""
    return _generate_master_schedule(fixed_tasks, assignments, now)


@mcp.tool()
def load_master_schedule() -> t.Optional[MasterScheduleRecord]:
    """Returns the stored master schedule, or null if none was generated yet."""
    return _load_master_schedule()


@mcp.tool()
def clear_master_schedule() -> str:
    """Deletes the stored master schedule."""
    return _clear_master_schedule()


@mcp.tool()
def show_master_schedule() -> str:
    """Displays the stored master schedule's work sessions as a table."""
    return _show_master_schedule()


if __name__ == "__main__":
    mcp.run()
