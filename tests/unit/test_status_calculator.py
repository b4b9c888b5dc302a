"""Tests for event/task status calculation and due-soon escalation."""

from datetime import datetime

import pytest

from orbit_lite.calendar.models import Priority
from orbit_lite.domain.status_calculator import (
    EventStatus,
    TaskStatus,
    calculate_event_status,
    calculate_task_status,
    ensure_due_soon_urgency,
    escalate_due_soon_tasks,
    is_due_soon,
)

pytestmark = pytest.mark.unit


class TestEventStatus:
    """Tests for calculate_event_status."""

    def test_past_occurrence_is_completed(self, make_event, now):
        status = calculate_event_status(make_event(date="2024-02-29"), now)
        assert status.kind == EventStatus.COMPLETED
        assert status.label == "Completed"

    def test_future_occurrence_is_upcoming(self, make_event, now):
        status = calculate_event_status(make_event(date="2024-03-02", startTime="00:00"), now)
        assert status.kind == EventStatus.UPCOMING
        assert status.label == "Upcoming"

    def test_same_day_before_start_is_upcoming(self, make_event, now):
        event = make_event(startTime="10:00", endTime="11:00")
        assert calculate_event_status(event, now).kind == EventStatus.UPCOMING

    def test_same_day_within_span_is_running(self, make_event):
        event = make_event(startTime="10:00", endTime="11:00")
        status = calculate_event_status(event, datetime(2024, 3, 1, 10, 30))
        assert status.kind == EventStatus.RUNNING
        assert status.label == "Live now"

    def test_same_day_after_end_is_completed(self, make_event):
        event = make_event(startTime="08:00", endTime="09:00")
        assert calculate_event_status(event, datetime(2024, 3, 1, 9, 0, 1)).kind == EventStatus.COMPLETED

    @pytest.mark.parametrize(
        "instant",
        [datetime(2024, 3, 1, 10, 0, 0), datetime(2024, 3, 1, 11, 0, 0)],
    )
    def test_bounds_are_inclusive(self, make_event, instant):
        event = make_event(startTime="10:00", endTime="11:00")
        assert calculate_event_status(event, instant).kind == EventStatus.RUNNING

    @pytest.mark.smoke
    def test_all_day_event_running_all_day(self, make_event, now):
        event = make_event(allDay=True)
        assert calculate_event_status(event, now).kind == EventStatus.RUNNING
        late = datetime(2024, 3, 1, 23, 59, 59)
        assert calculate_event_status(event, late).kind == EventStatus.RUNNING

    def test_occurrence_date_overrides_anchor(self, make_event, now):
        series = make_event(date="2024-02-01", repeat="Daily", startTime="09:00", endTime="10:00")
        assert calculate_event_status(series, now).kind == EventStatus.COMPLETED
        assert calculate_event_status(series, now, "2024-03-01").kind == EventStatus.RUNNING
        assert calculate_event_status(series, now, "2024-03-04").kind == EventStatus.UPCOMING

    def test_every_instant_yields_exactly_one_status(self, make_event):
        event = make_event(startTime="10:00", endTime="11:00")
        kinds = {
            calculate_event_status(event, datetime(2024, 3, 1, hour, 30)).kind
            for hour in range(24)
        }
        assert kinds == {EventStatus.UPCOMING, EventStatus.RUNNING, EventStatus.COMPLETED}


class TestTaskStatus:
    """Tests for calculate_task_status."""

    def test_completed_wins(self, make_task, now):
        task = make_task(completed=True, dueDate="2024-01-01")
        status = calculate_task_status(task, now)
        assert status.kind == TaskStatus.COMPLETED

    def test_due_before_today_is_overdue(self, make_task, now):
        status = calculate_task_status(make_task(dueDate="2024-02-29"), now)
        assert status.kind == TaskStatus.OVERDUE
        assert status.label == "Overdue"

    def test_due_today_is_not_overdue(self, make_task, now):
        assert calculate_task_status(make_task(dueDate="2024-03-01"), now).kind == TaskStatus.ACTIVE

    def test_future_start_is_upcoming(self, make_task, now):
        status = calculate_task_status(make_task(startDate="2024-03-05", dueDate="2024-03-10"), now)
        assert status.kind == TaskStatus.UPCOMING
        assert status.label == "Starts soon"

    def test_overdue_beats_future_start(self, make_task, now):
        task = make_task(startDate="2024-03-05", dueDate="2024-02-28")
        assert calculate_task_status(task, now).kind == TaskStatus.OVERDUE

    def test_undated_task_is_active(self, make_task, now):
        status = calculate_task_status(make_task(), now)
        assert status.kind == TaskStatus.ACTIVE
        assert status.label == "In progress"


class TestEscalation:
    """Tests for the due-soon urgency rule."""

    def test_is_due_soon(self, make_task):
        assert is_due_soon(make_task(dueDate="2024-03-02"), "2024-03-02")
        assert is_due_soon(make_task(dueDate="2024-02-20"), "2024-03-02")
        assert not is_due_soon(make_task(dueDate="2024-03-03"), "2024-03-02")
        assert not is_due_soon(make_task(), "2024-03-02")
        assert not is_due_soon(make_task(dueDate="2024-03-02", completed=True), "2024-03-02")

    def test_due_tomorrow_becomes_urgent_and_stays_active(self, make_task, now):
        task = make_task(dueDate="2024-03-02", priority="normal")
        assert ensure_due_soon_urgency(task, now) is True
        assert task.priority == Priority.URGENT
        assert calculate_task_status(task, now).kind == TaskStatus.ACTIVE

    def test_escalation_is_idempotent(self, make_task, now):
        task = make_task(dueDate="2024-03-01", priority="important")
        assert ensure_due_soon_urgency(task, now) is True
        assert ensure_due_soon_urgency(task, now) is False
        assert task.priority == Priority.URGENT

    def test_never_downgrades(self, make_task, now):
        task = make_task(dueDate="2024-04-01", priority="urgent")
        assert ensure_due_soon_urgency(task, now) is False
        assert task.priority == Priority.URGENT

    def test_completed_task_untouched(self, make_task, now):
        task = make_task(dueDate="2024-03-01", completed=True)
        assert ensure_due_soon_urgency(task, now) is False
        assert task.priority == Priority.NORMAL

    def test_escalate_due_soon_tasks_counts_changes(self, make_task, now):
        tasks = [
            make_task(dueDate="2024-03-02"),
            make_task(dueDate="2024-02-01"),
            make_task(dueDate="2024-03-20"),
            make_task(dueDate="2024-03-02", priority="urgent"),
        ]
        assert escalate_due_soon_tasks(tasks, now) == 2
        assert [t.priority for t in tasks] == ["urgent", "urgent", "normal", "urgent"]
        assert escalate_due_soon_tasks(tasks, now) == 0
