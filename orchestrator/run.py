# -*- coding: utf-8 -*-
import json
import logging
import os
from collections import Counter
from datetime import datetime
import typing as t

import click
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from orchestrator.utils import (
    console,
    err_console,
    load_schedule_request,
    parse_now,
    resolve_work_hours_record,
)
from schedule_store import store
from schedule_store.models import MasterSchedule
from work_scheduler.engine import SESSIONS_PER_ASSIGNMENT, align_timestamp, allocate
from work_scheduler.models import Assignment, WorkSession

logger = logging.getLogger(__name__)


def display_verbose_json(title: str, data: t.Any) -> None:
    """Display JSON data in a rich panel."""
    console.print(Panel(JSON(json.dumps(data, indent=2)), title=f"📄 {title}", expand=True, border_style="blue"))


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def create_sessions_table(sessions: list[WorkSession]) -> Table:
    """Create a table of generated work sessions."""
    table = Table(title="📅 Work Sessions", show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", width=3)
    table.add_column("Title", style="white")
    table.add_column("Day", style="yellow")
    table.add_column("Time", style="yellow")

    for idx, session in enumerate(sessions, 1):
        table.add_row(
            str(idx),
            truncate_title(session.title),
            session.start.strftime("%a %m/%d"),
            f"{session.start.strftime('%H:%M')} → {session.end.strftime('%H:%M')}",
        )

    return table


def create_coverage_table(assignments: list[Assignment], sessions: list[WorkSession], now: datetime) -> Table:
    """Create a per-assignment table of how many sessions were placed."""
    placed = Counter(session.assignment_id for session in sessions)

    table = Table(title="📚 Assignments", show_header=True, header_style="bold magenta")
    table.add_column("Title", style="white")
    table.add_column("Due", style="yellow")
    table.add_column("Sessions", justify="right")

    for assignment in sorted(assignments, key=lambda a: align_timestamp(a.due_at, now)):
        count = placed[assignment.id]
        if count == 0 and align_timestamp(assignment.due_at, now) < now:
            status = "[dim]past due[/dim]"
        elif count < SESSIONS_PER_ASSIGNMENT:
            status = f"[yellow]{count}/{SESSIONS_PER_ASSIGNMENT}[/yellow]"
        else:
            status = f"[green]{count}/{SESSIONS_PER_ASSIGNMENT}[/green]"
        table.add_row(
            truncate_title(assignment.title),
            assignment.due_at.strftime("%a %m/%d %H:%M"),
            status,
        )

    return table


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False),
)
@click.option("--work-start", help="Start of the daily work window (HH:MM). Overrides the input file.")
@click.option("--work-end", help="End of the daily work window (HH:MM). Overrides the input file.")
@click.option("--now", "now_iso", help="ISO datetime to schedule from. Defaults to the current time.")
@click.option("--save", is_flag=True, help="Save the result as the master schedule.")
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False),
    envvar="SCHEDULE_STORE_PATH",
    help="JSON file holding the saved work hours and master schedule.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the generated sessions as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def main(
        input_file: str,
        work_start: t.Optional[str],
        work_end: t.Optional[str],
        now_iso: t.Optional[str],
        save: bool,
        store_path: t.Optional[str],
        as_json: bool,
        verbose: bool,
) -> None:
    """Schedule work sessions for upcoming assignments around fixed tasks.

    INPUT_FILE: JSON file with "fixed_tasks", "assignments" and optionally
    "work_hours" and "now".
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else os.getenv("AUTOSCHEDULER_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    request = load_schedule_request(input_file)
    now = parse_now(now_iso) or request.now or datetime.now()

    work_hours_record = resolve_work_hours_record(request.work_hours, work_start, work_end)
    if work_hours_record is not None:
        work_hours = work_hours_record.to_domain()
    else:
        work_hours = store.get_work_hours(store_path)
    if work_hours is None:
        err_console.print(
            "[red]Error:[/red] Work hours not set. Pass --work-start/--work-end "
            "or add \"work_hours\" to the input file."
        )
        raise SystemExit(1)

    fixed_tasks = [task.to_domain() for task in request.fixed_tasks]
    assignments = [assignment.to_domain() for assignment in request.assignments]
    logger.debug(
        "Loaded %d fixed task(s) and %d assignment(s) from %s",
        len(fixed_tasks), len(assignments), input_file,
    )

    if verbose:
        display_verbose_json("Work Hours", work_hours.to_record())

    sessions = allocate(fixed_tasks, assignments, work_hours, now)

    if save:
        store.save_master_schedule(
            MasterSchedule(
                fixed_tasks=fixed_tasks,
                assignments=assignments,
                work_sessions=sessions,
                generated_at=now,
            ),
            store_path,
        )

    if as_json:
        console.print(JSON(json.dumps([session.to_record() for session in sessions], indent=2)))
        return

    stats_text = Text()
    stats_text.append("Fixed tasks: ", style="white")
    stats_text.append(f"{len(fixed_tasks)}", style="bold green")
    stats_text.append("\n")
    stats_text.append("Assignments: ", style="white")
    stats_text.append(f"{len(assignments)}", style="bold green")
    stats_text.append("\n")
    stats_text.append("Work sessions scheduled: ", style="white")
    stats_text.append(f"{len(sessions)}", style="bold green")
    console.print(Panel(stats_text, title="📊 Statistics", border_style="green"))

    if sessions:
        console.print(create_sessions_table(sessions))
    if assignments:
        console.print(create_coverage_table(assignments, sessions, now))
    if save:
        console.print("[bold green]✅ Master schedule saved.[/bold green]")


if __name__ == "__main__":
    main()
