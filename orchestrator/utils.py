"""Utility functions for the orchestrator."""
import json
from datetime import datetime
from pathlib import Path
import typing as t

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from services.shared.models import ScheduleRequest, WorkHoursRecord

console = Console()
err_console = Console(stderr=True)


def load_schedule_request(input_path: str) -> ScheduleRequest:
    """Load fixed tasks, assignments and optional work hours from a JSON file.

    The file holds an object with ``fixed_tasks``, ``assignments`` and,
    optionally, ``work_hours`` and ``now``.

    Args:
        input_path: Path to the JSON input file

    Returns:
        The validated scheduling request

    Raises:
        SystemExit: If the file is not valid JSON or does not match the schema
    """
    path = Path(input_path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Error:[/red] '{input_path}' is not valid JSON: {escape(str(e))}")
        raise SystemExit(1)

    try:
        return ScheduleRequest.model_validate(data)
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] Invalid input in '{input_path}':\n{escape(str(e))}")
        raise SystemExit(1)


def resolve_work_hours_record(
    file_record: t.Optional[WorkHoursRecord],
    work_start: t.Optional[str],
    work_end: t.Optional[str],
) -> t.Optional[WorkHoursRecord]:
    """Combine command-line work hours with the ones from the input file.

    Command-line values win; a missing half falls back to the file, then to
    the default window.

    Raises:
        SystemExit: If a command-line clock value is malformed
    """
    if not work_start and not work_end:
        return file_record

    base = file_record or WorkHoursRecord()
    try:
        return WorkHoursRecord(start=work_start or base.start, end=work_end or base.end)
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] Invalid work hours: {escape(str(e))}")
        raise SystemExit(1)


def parse_now(now: t.Optional[str]) -> t.Optional[datetime]:
    """Parse the --now option.

    Raises:
        SystemExit: If the value is not an ISO datetime
    """
    if not now:
        return None
    try:
        return datetime.fromisoformat(now.replace("Z", "+00:00"))
    except ValueError:
        err_console.print(f"[red]Error:[/red] --now must be an ISO datetime, got '{now}'.")
        raise SystemExit(1)
