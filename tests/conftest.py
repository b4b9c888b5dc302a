"""Shared fixtures for orbit_lite tests.

Every engine function takes the evaluation instant explicitly, so tests pin
``now`` to a fixed naive local datetime instead of freezing the clock.
"""

from collections.abc import Generator
from datetime import datetime
from typing import Any, Callable

import pytest

from orbit_lite.calendar.models import Event, Task


@pytest.fixture
def now() -> datetime:
    """Friday 2024-03-01 at 09:45 local time."""
    return datetime(2024, 3, 1, 9, 45)


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for events with sensible defaults; keyword args override fields."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> Event:
        counter["n"] += 1
        data: dict[str, Any] = {
            "id": f"evt-{counter['n']}",
            "title": f"Event {counter['n']}",
            "date": "2024-03-01",
            "startTime": "10:00",
            "endTime": "11:00",
        }
        data.update(overrides)
        return Event.model_validate(data)

    return _make


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for tasks with sensible defaults; keyword args override fields."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> Task:
        counter["n"] += 1
        data: dict[str, Any] = {"id": f"task-{counter['n']}", "title": f"Task {counter['n']}"}
        data.update(overrides)
        return Task.model_validate(data)

    return _make


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Ensure ORBIT_* environment variables don't leak between tests."""
    for key in (
        "ORBIT_TEST_TIME",
        "ORBIT_DEBUG",
        "ORBIT_LOG_LEVEL",
        "ORBIT_INSIGHT_RANGE_DAYS",
        "ORBIT_DEFAULT_EVENT_DURATION",
        "ORBIT_STATE_PATH",
        "ORBIT_SHOW_COMPLETED_TASKS",
        "ORBIT_SHOW_FULL_TASK_LIST",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def broken_event() -> Event:
    """Urgent weekly event whose anchor date is impossible.

    Built with model_construct so validation is bypassed, the way a record
    mutated after loading would look. Any occurrence check on or after
    2024-02-30 raises InvalidDateError.
    """
    return Event.model_construct(
        id="evt-broken",
        title="Broken",
        date="2024-02-30",
        start_time="10:00",
        end_time="11:00",
        priority="urgent",
        repeat="Weekly",
    )
