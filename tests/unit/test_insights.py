"""Tests for upcoming insights aggregation."""

import logging

import pytest

from orbit_lite.domain.insights import upcoming_insights

pytestmark = pytest.mark.unit


class TestInsightEvents:
    """Important/urgent events in the window, one occurrence each."""

    def test_normal_priority_events_excluded(self, make_event, now):
        result = upcoming_insights([make_event(date="2024-03-02", priority="normal")], [], now)
        assert result.events == []

    def test_important_and_urgent_included(self, make_event, now):
        events = [
            make_event(title="Review", date="2024-03-03", priority="important"),
            make_event(title="Launch", date="2024-03-02", priority="urgent"),
        ]
        result = upcoming_insights(events, [], now)
        assert [occ.title for occ in result.events] == ["Launch", "Review"]

    def test_recurring_event_appears_once_at_first_occurrence(self, make_event, now):
        series = make_event(date="2024-01-01", repeat="Weekly", priority="urgent")  # Mondays
        result = upcoming_insights([series], [], now)
        assert [occ.date for occ in result.events] == ["2024-03-04"]

    def test_window_end_is_inclusive(self, make_event, now):
        inside = make_event(title="in", date="2024-03-08", priority="urgent")
        outside = make_event(title="out", date="2024-03-09", priority="urgent")
        result = upcoming_insights([inside, outside], [], now)
        assert [occ.title for occ in result.events] == ["in"]

    def test_completed_same_day_event_dropped(self, make_event, now):
        finished = make_event(date="2024-03-01", startTime="08:00", endTime="09:00", priority="urgent")
        result = upcoming_insights([finished], [], now)
        assert result.events == []
        assert result.total_count == 0

    def test_running_same_day_event_kept(self, make_event, now):
        live = make_event(date="2024-03-01", startTime="09:00", endTime="10:00", priority="urgent")
        result = upcoming_insights([live], [], now)
        assert len(result.events) == 1

    def test_event_items_carry_display_labels(self, make_event, now):
        event = make_event(title="Launch", date="2024-03-02", startTime="14:00", endTime="15:00",
                           priority="urgent")
        item = upcoming_insights([event], [], now).event_items[0]
        assert item.title == "Launch"
        assert item.time == "14:00"
        assert item.label == "Tomorrow · 02:00 PM"

    def test_all_day_item_has_no_time(self, make_event, now):
        event = make_event(date="2024-03-02", allDay=True, priority="important")
        item = upcoming_insights([event], [], now).event_items[0]
        assert item.time is None
        assert item.label == "Tomorrow"


class TestInsightTasks:
    """Incomplete tasks due on or before the end of the window."""

    @pytest.mark.smoke
    def test_due_within_window_included(self, make_task, now):
        tasks = [make_task(title="edge", dueDate="2024-03-08"), make_task(title="late", dueDate="2024-03-09")]
        result = upcoming_insights([], tasks, now)
        assert [t.title for t in result.tasks] == ["edge"]

    def test_overdue_tasks_included(self, make_task, now):
        result = upcoming_insights([], [make_task(dueDate="2024-02-20")], now)
        assert len(result.tasks) == 1

    def test_completed_and_undated_excluded(self, make_task, now):
        tasks = [make_task(dueDate="2024-03-02", completed=True), make_task(startDate="2024-03-02")]
        assert upcoming_insights([], tasks, now).tasks == []

    def test_tasks_ordered_by_due_date(self, make_task, now):
        tasks = [make_task(title="b", dueDate="2024-03-05"), make_task(title="a", dueDate="2024-03-02")]
        result = upcoming_insights([], tasks, now)
        assert [t.title for t in result.tasks] == ["a", "b"]
        assert result.task_items[0].label == "Tomorrow"

    def test_custom_window(self, make_task, now):
        tasks = [make_task(dueDate="2024-03-04")]
        assert upcoming_insights([], tasks, now, window_days=2).tasks == []
        assert len(upcoming_insights([], tasks, now, window_days=3).tasks) == 1


class TestInsightSummary:
    """Tests for the aggregate counts."""

    def test_total_count_and_summary(self, make_event, make_task, now):
        result = upcoming_insights(
            [make_event(date="2024-03-02", priority="urgent")],
            [make_task(dueDate="2024-03-03")],
            now,
        )
        assert result.window_start == "2024-03-01"
        assert result.window_end == "2024-03-08"
        assert result.total_count == 2
        assert result.summary == "2 items soon"

    def test_empty_summary(self, now):
        assert upcoming_insights([], [], now).summary == "No upcoming items"

    def test_inputs_not_mutated(self, make_event, make_task, now):
        task = make_task(dueDate="2024-03-02", priority="normal")
        upcoming_insights([make_event(priority="urgent")], [task], now)
        assert task.priority == "normal"


def test_debug_log_emitted(make_event, now, caplog):
    with caplog.at_level(logging.DEBUG, logger="orbit_lite.domain.insights"):
        upcoming_insights([make_event(date="2024-03-02", priority="urgent")], [], now)
    assert "Insights 2024-03-01..2024-03-08" in caplog.text


def test_malformed_event_skipped_with_warning(broken_event, make_event, now, caplog):
    good = make_event(title="Launch", date="2024-03-02", priority="urgent")
    with caplog.at_level(logging.WARNING):
        result = upcoming_insights([broken_event, good], [], now)
    assert [occ.title for occ in result.events] == ["Launch"]
    assert "Skipping event evt-broken in insights" in caplog.text
