"""Lifecycle status calculation for events and tasks.

This module is the single source of truth for the status shown on every
surface (agenda, preview, insights, week grid). Status is derived from the
evaluation instant on every call and never cached.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from orbit_lite.calendar.date_utils import combine, to_local_naive, today_iso, tomorrow_iso
from orbit_lite.calendar.models import Event, Priority, Task

logger = logging.getLogger(__name__)


class EventStatus(str, Enum):
    """Lifecycle of one event occurrence."""

    UPCOMING = "upcoming"
    RUNNING = "running"
    COMPLETED = "completed"


class TaskStatus(str, Enum):
    """Lifecycle of a task."""

    COMPLETED = "completed"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"
    ACTIVE = "active"


@dataclass(frozen=True)
class StatusInfo:
    """Status information for display."""

    kind: str
    label: str


EVENT_LABELS = {
    EventStatus.UPCOMING: "Upcoming",
    EventStatus.RUNNING: "Live now",
    EventStatus.COMPLETED: "Completed",
}

TASK_LABELS = {
    TaskStatus.COMPLETED: "Completed",
    TaskStatus.OVERDUE: "Overdue",
    TaskStatus.UPCOMING: "Starts soon",
    TaskStatus.ACTIVE: "In progress",
}


def _event_info(status: EventStatus) -> StatusInfo:
    return StatusInfo(kind=status.value, label=EVENT_LABELS[status])


def _task_info(status: TaskStatus) -> StatusInfo:
    return StatusInfo(kind=status.value, label=TASK_LABELS[status])


def calculate_event_status(
    event: Event,
    now: datetime.datetime,
    occurrence_date: Optional[str] = None,
) -> StatusInfo:
    """Calculate the status of one occurrence of an event.

    Args:
        event: Event definition
        now: Evaluation instant (aware values are converted to local time)
        occurrence_date: Date of the occurrence being shown; defaults to the
            event's anchor date

    Returns:
        StatusInfo with kind upcoming, running or completed
    """
    local_now = to_local_naive(now)
    today = local_now.date().isoformat()
    occurrence = occurrence_date or event.date

    if occurrence < today:
        return _event_info(EventStatus.COMPLETED)
    if occurrence > today:
        return _event_info(EventStatus.UPCOMING)

    # Same day: compare against the occurrence's start and end instants
    if event.all_day:
        start = combine(occurrence, "00:00")
        end = combine(occurrence, "23:59", second=59)
    else:
        start = combine(occurrence, event.start_time or "00:00")
        end = combine(occurrence, event.end_time or "23:59")

    if start <= local_now <= end:
        return _event_info(EventStatus.RUNNING)
    if local_now > end:
        return _event_info(EventStatus.COMPLETED)
    return _event_info(EventStatus.UPCOMING)


def calculate_task_status(task: Task, now: datetime.datetime) -> StatusInfo:
    """Calculate the status of a task (no time-of-day component)."""
    if task.completed:
        return _task_info(TaskStatus.COMPLETED)

    today = today_iso(now)
    if task.due_date and task.due_date < today:
        return _task_info(TaskStatus.OVERDUE)
    if task.start_date and task.start_date > today:
        return _task_info(TaskStatus.UPCOMING)
    return _task_info(TaskStatus.ACTIVE)


def is_due_soon(task: Task, tomorrow: str) -> bool:
    """Incomplete task due tomorrow, today or earlier."""
    return not task.completed and bool(task.due_date) and task.due_date <= tomorrow


def ensure_due_soon_urgency(task: Task, now: datetime.datetime) -> bool:
    """Raise a due-soon task's priority to urgent.

    This is the only write the engine performs on stored data. It never
    lowers a priority.

    Returns:
        True if the task's priority was changed
    """
    if is_due_soon(task, tomorrow_iso(now)) and task.priority != Priority.URGENT:
        logger.debug("Escalating task %s (due %s) to urgent", task.id, task.due_date)
        task.priority = Priority.URGENT.value
        return True
    return False


def escalate_due_soon_tasks(tasks: Iterable[Task], now: datetime.datetime) -> int:
    """Apply the due-soon escalation to every task.

    Returns:
        Number of tasks whose priority changed, so the caller knows whether
        the collection needs saving
    """
    changed = sum(1 for task in tasks if ensure_due_soon_urgency(task, now))
    if changed:
        logger.info("Escalated %d due-soon task(s) to urgent", changed)
    return changed
