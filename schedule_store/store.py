# -*- coding: utf-8 -*-
"""
Storage for the master schedule and the work-hours preference.

Both live in memory. When a store path is configured (``SCHEDULE_STORE_PATH``
or an explicit ``path`` argument) the file becomes the source of truth and is
rewritten on every save. A new master schedule always replaces the previous
one wholesale.
"""
from __future__ import annotations

import json
import logging
import os
import threading
import typing as t
from datetime import datetime
from pathlib import Path

from work_scheduler.engine import allocate
from work_scheduler.errors import MissingWorkHoursError
from work_scheduler.models import Assignment, FixedTask, WorkHours
from .models import MasterSchedule

logger = logging.getLogger(__name__)

SCHEDULE_STORE_PATH = os.getenv("SCHEDULE_STORE_PATH")

PathLike = t.Union[str, os.PathLike, None]

_lock = threading.Lock()
_master_schedule: t.Optional[MasterSchedule] = None
_work_hours: t.Optional[WorkHours] = None


def save_master_schedule(schedule: MasterSchedule, path: PathLike = None) -> None:
    """Replace the stored master schedule.

    :param schedule: The new master schedule.
    :param path: Optional JSON file to write through to.
    """
    global _master_schedule
    with _lock:
        _master_schedule = schedule
        store_file = _resolve_path(path)
        if store_file is not None:
            data = _read_file(store_file)
            data["master_schedule"] = schedule.to_record()
            _write_file(store_file, data)
    logger.info("Saved master schedule with %d work session(s)", len(schedule.work_sessions))


def load_master_schedule(path: PathLike = None) -> t.Optional[MasterSchedule]:
    """Return the stored master schedule, or None if nothing was saved yet."""
    with _lock:
        store_file = _resolve_path(path)
        if store_file is None:
            return _master_schedule
        record = _read_file(store_file).get("master_schedule")
    return MasterSchedule.from_record(record) if record else None


def clear_master_schedule(path: PathLike = None) -> None:
    """Forget the stored master schedule."""
    global _master_schedule
    with _lock:
        _master_schedule = None
        store_file = _resolve_path(path)
        if store_file is not None and store_file.exists():
            data = _read_file(store_file)
            data.pop("master_schedule", None)
            _write_file(store_file, data)


def save_work_hours(work_hours: WorkHours, path: PathLike = None) -> None:
    """Store the user's daily work window."""
    global _work_hours
    with _lock:
        _work_hours = work_hours
        store_file = _resolve_path(path)
        if store_file is not None:
            data = _read_file(store_file)
            data["work_hours"] = work_hours.to_record()
            _write_file(store_file, data)


def get_work_hours(path: PathLike = None) -> t.Optional[WorkHours]:
    """Return the stored work window, or None if the user never set one."""
    with _lock:
        store_file = _resolve_path(path)
        if store_file is None:
            return _work_hours
        record = _read_file(store_file).get("work_hours")
    return WorkHours.from_clock(record["start"], record["end"]) if record else None


def generate_master_schedule(
        fixed_tasks: list[FixedTask],
        assignments: list[Assignment],
        now: t.Optional[datetime] = None,
        path: PathLike = None,
) -> MasterSchedule:
    """Schedule work sessions with the stored work hours and save the result.

    :param fixed_tasks: The user's fixed tasks.
    :param assignments: Upcoming assignments from the course feed.
    :param now: Reference time for the run; defaults to the current local time.
    :param path: Optional JSON file to read work hours from and write through to.
    :return: The newly saved master schedule.
    :raises MissingWorkHoursError: If no work hours have been stored.
    """
    work_hours = get_work_hours(path)
    if work_hours is None:
        raise MissingWorkHoursError()

    now = now or datetime.now()
    work_sessions = allocate(list(fixed_tasks), list(assignments), work_hours, now)
    schedule = MasterSchedule(
        fixed_tasks=list(fixed_tasks),
        assignments=list(assignments),
        work_sessions=work_sessions,
        generated_at=now,
    )
    save_master_schedule(schedule, path)
    return schedule


def _resolve_path(path: PathLike) -> t.Optional[Path]:
    if path is not None:
        return Path(path)
    if SCHEDULE_STORE_PATH:
        return Path(SCHEDULE_STORE_PATH)
    return None


def _read_file(store_file: Path) -> dict[str, t.Any]:
    if not store_file.exists():
        return {}
    try:
        with open(store_file, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise IOError(f"Schedule store file {store_file} is corrupt: {e}") from e


def _write_file(store_file: Path, data: dict[str, t.Any]) -> None:
    store_file.parent.mkdir(parents=True, exist_ok=True)
    tmp_file = store_file.with_suffix(store_file.suffix + ".tmp")
    with open(tmp_file, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    os.replace(tmp_file, store_file)
