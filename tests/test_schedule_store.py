"""Tests for the master schedule and work-hours store."""
import json

import pytest

from schedule_store import store
from schedule_store.models import MasterSchedule
from work_scheduler.errors import MissingWorkHoursError
from work_scheduler.models import Assignment, FixedTask, WorkHours

from conftest import MONDAY_8AM


def _inputs():
    tasks = [
        FixedTask.from_clock_fields(
            id="1", title="Lecture", start_time="9:00", end_time="10:00",
            am_start=True, am_end=True, days_of_week=["M", "W"],
        )
    ]
    assignments = [Assignment.from_iso("a1", "Essay", "2025-04-16T23:59:00")]
    return tasks, assignments


def test_generate_requires_work_hours() -> None:
    tasks, assignments = _inputs()
    with pytest.raises(MissingWorkHoursError):
        store.generate_master_schedule(tasks, assignments, now=MONDAY_8AM)
    assert store.load_master_schedule() is None


def test_generate_saves_the_schedule() -> None:
    tasks, assignments = _inputs()
    store.save_work_hours(WorkHours.from_clock("08:00", "20:00"))

    schedule = store.generate_master_schedule(tasks, assignments, now=MONDAY_8AM)

    assert len(schedule.work_sessions) == 3
    assert schedule.generated_at == MONDAY_8AM
    assert store.load_master_schedule() is schedule


def test_regenerating_replaces_previous_sessions() -> None:
    tasks, assignments = _inputs()
    store.save_work_hours(WorkHours.from_clock("08:00", "20:00"))
    store.generate_master_schedule(tasks, assignments, now=MONDAY_8AM)

    store.generate_master_schedule(tasks, [], now=MONDAY_8AM)

    schedule = store.load_master_schedule()
    assert schedule.work_sessions == []
    assert schedule.assignments == []


def test_work_hours_round_trip() -> None:
    assert store.get_work_hours() is None
    store.save_work_hours(WorkHours.from_clock("09:00", "17:30"))
    assert store.get_work_hours() == WorkHours(540, 1050)


def test_file_backed_store(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """With a store path, a fresh process sees what the last one saved."""
    path = tmp_path / "schedule.json"
    tasks, assignments = _inputs()
    store.save_work_hours(WorkHours.from_clock("08:00", "20:00"), path)

    saved = store.generate_master_schedule(tasks, assignments, now=MONDAY_8AM, path=path)

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk["work_hours"] == {"start": "08:00", "end": "20:00"}
    assert len(on_disk["master_schedule"]["work_sessions"]) == 3
    assert on_disk["master_schedule"]["solid_tasks"][0]["start_time"] == "09:00"

    # Drop the in-memory copies to read back from the file only.
    monkeypatch.setattr(store, "_master_schedule", None)
    monkeypatch.setattr(store, "_work_hours", None)

    loaded = store.load_master_schedule(path)
    assert loaded == saved
    assert store.get_work_hours(path) == WorkHours(480, 1200)


def test_store_path_from_environment(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "nested" / "store.json"
    monkeypatch.setattr(store, "SCHEDULE_STORE_PATH", str(path))

    store.save_master_schedule(MasterSchedule(generated_at=MONDAY_8AM))

    assert path.exists()
    assert store.load_master_schedule() == MasterSchedule(generated_at=MONDAY_8AM)

    store.clear_master_schedule()
    assert store.load_master_schedule() is None
    assert "master_schedule" not in json.loads(path.read_text(encoding="utf-8"))


def test_corrupt_store_file_raises(tmp_path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(IOError, match="corrupt") as excinfo:
        store.load_master_schedule(path)
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)
