"""Tests for the autoscheduler command line."""
import json

import pytest
from click.testing import CliRunner

from orchestrator.run import main
from schedule_store import store
from work_scheduler.models import WorkHours


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "week.json"
    path.write_text(
        json.dumps(
            {
                "fixed_tasks": [
                    {
                        "id": 1,
                        "title": "Lecture",
                        "start_time": "8:00",
                        "end_time": "10:00",
                        "am_start": True,
                        "am_end": True,
                        "days_of_week": ["M"],
                    }
                ],
                "assignments": [{"id": "a1", "title": "Essay", "due_date": "2025-04-16T23:59:00"}],
                "work_hours": {"start": "08:00", "end": "20:00"},
                "now": "2025-04-14T08:00:00",
            }
        ),
        encoding="utf-8",
    )
    return path


def _flat(output: str) -> str:
    """Undo rich's line wrapping so messages can be matched whole."""
    return " ".join(output.split())


def test_json_output(input_file) -> None:
    result = CliRunner().invoke(main, [str(input_file), "--json"])

    assert result.exit_code == 0, result.output
    sessions = json.loads(result.output)
    assert [s["start_time"] for s in sessions] == [
        "2025-04-14T10:00:00",
        "2025-04-15T08:00:00",
        "2025-04-16T08:00:00",
    ]


def test_table_output(input_file) -> None:
    result = CliRunner().invoke(main, [str(input_file)])

    assert result.exit_code == 0, result.output
    assert "Work sessions scheduled: 3" in result.output
    assert "Work on Essay" in result.output
    assert "3/3" in result.output


def test_work_start_option_overrides_file(input_file) -> None:
    result = CliRunner().invoke(main, [str(input_file), "--work-start", "10:00", "--json"])

    assert result.exit_code == 0, result.output
    starts = [s["start_time"] for s in json.loads(result.output)]
    assert starts == ["2025-04-14T10:00:00", "2025-04-15T10:00:00", "2025-04-16T10:00:00"]


def test_missing_work_hours_fails(tmp_path) -> None:
    path = tmp_path / "no_hours.json"
    path.write_text(json.dumps({"fixed_tasks": [], "assignments": []}), encoding="utf-8")

    result = CliRunner().invoke(main, [str(path), "--store", str(tmp_path / "store.json")])

    assert result.exit_code == 1
    assert "Work hours not set" in _flat(result.output)


def test_work_hours_fall_back_to_store(tmp_path) -> None:
    store_path = tmp_path / "store.json"
    store.save_work_hours(WorkHours.from_clock("13:00", "20:00"), store_path)
    path = tmp_path / "no_hours.json"
    path.write_text(
        json.dumps(
            {
                "assignments": [{"id": "a1", "title": "Essay", "due_date": "2025-04-14T23:00:00"}],
                "now": "2025-04-14T08:00:00",
            }
        ),
        encoding="utf-8",
    )

    result = CliRunner().invoke(main, [str(path), "--store", str(store_path), "--json"])

    assert result.exit_code == 0, result.output
    starts = [s["start_time"] for s in json.loads(result.output)]
    assert starts == ["2025-04-14T13:00:00", "2025-04-14T14:00:00", "2025-04-14T15:00:00"]


def test_save_writes_master_schedule(input_file, tmp_path) -> None:
    store_path = tmp_path / "store.json"

    result = CliRunner().invoke(main, [str(input_file), "--save", "--store", str(store_path)])

    assert result.exit_code == 0, result.output
    assert "Master schedule saved" in result.output
    schedule = store.load_master_schedule(store_path)
    assert len(schedule.work_sessions) == 3
    assert schedule.assignments[0].title == "Essay"


def test_invalid_json_input(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    result = CliRunner().invoke(main, [str(path)])

    assert result.exit_code == 1
    assert "is not valid JSON" in _flat(result.output)
