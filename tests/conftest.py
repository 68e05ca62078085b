import itertools
import typing as t
from datetime import datetime

import pytest

from schedule_store import store

# 2025-04-14 is a Monday.
MONDAY_8AM = datetime(2025, 4, 14, 8, 0)


@pytest.fixture(autouse=True)
def empty_store(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test with no saved work hours or master schedule."""
    monkeypatch.setattr(store, "SCHEDULE_STORE_PATH", None)
    monkeypatch.setattr(store, "_master_schedule", None)
    monkeypatch.setattr(store, "_work_hours", None)


@pytest.fixture
def id_factory() -> t.Callable[[], str]:
    """Sequential session IDs so runs can be compared."""
    counter = itertools.count(1)
    return lambda: f"session-{next(counter)}"
