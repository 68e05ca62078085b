"""Tests for the HTTP-backed scheduler MCP wrapper."""
import httpx
import pytest
from fastapi.testclient import TestClient

from mcp_wrappers.scheduler import mcp_service
from services.scheduler_service.app import app
from services.shared.models import AssignmentRecord, FixedTaskRecord, WorkHoursRecord

FIXED_TASKS = [
    FixedTaskRecord(id=1, title="Lecture", start_time="08:00", end_time="10:00", start_date="2025-04-14")
]
ASSIGNMENTS = [AssignmentRecord(id="a1", title="Essay", due_date="2025-04-16T23:59:00")]
NOW = "2025-04-14T08:00:00"


@pytest.fixture
def service(monkeypatch: pytest.MonkeyPatch) -> None:
    """Route the wrapper's HTTP calls to the in-process service."""
    monkeypatch.setattr(httpx, "Client", lambda timeout=None: TestClient(app))


def test_schedule_work_sessions_over_http(service) -> None:
    sessions = mcp_service._schedule_work_sessions(
        FIXED_TASKS, ASSIGNMENTS, WorkHoursRecord(start="08:00", end="20:00"), NOW
    )

    assert [s.start_time for s in sessions] == [
        "2025-04-14T10:00:00",
        "2025-04-15T08:00:00",
        "2025-04-16T08:00:00",
    ]
    assert sessions[0].title == "Work on Essay"


def test_service_errors_become_runtime_errors(service) -> None:
    with pytest.raises(RuntimeError, match="400"):
        mcp_service._schedule_work_sessions(FIXED_TASKS, ASSIGNMENTS, None, NOW)

    with pytest.raises(RuntimeError, match="Work hours not set"):
        mcp_service._generate_master_schedule(FIXED_TASKS, ASSIGNMENTS, NOW)


def test_master_schedule_over_http(service) -> None:
    assert mcp_service._load_master_schedule() is None
    assert mcp_service._get_work_hours() is None

    saved = mcp_service._save_work_hours(WorkHoursRecord(start="08:00", end="12:00"))
    assert saved.end == "12:00"
    assert mcp_service._get_work_hours() == WorkHoursRecord(start="08:00", end="12:00")

    schedule = mcp_service._generate_master_schedule(FIXED_TASKS, ASSIGNMENTS, NOW)
    assert len(schedule.work_sessions) == 3
    assert mcp_service._load_master_schedule() == schedule
    assert "Total: 3 session(s)" in mcp_service._show_master_schedule()

    assert mcp_service._clear_master_schedule() == "Master schedule cleared."
    assert mcp_service._load_master_schedule() is None


def test_timeout_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    real_client = httpx.Client

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("service too slow", request=request)

    monkeypatch.setattr(
        httpx,
        "Client",
        lambda timeout=None: real_client(transport=httpx.MockTransport(handler), timeout=timeout),
    )

    with pytest.raises(RuntimeError, match="timed out"):
        mcp_service._show_master_schedule()
