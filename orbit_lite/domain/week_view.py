"""Weekly calendar grid materialization.

Expands a Sunday-to-Saturday window into per-day event occurrences and task
instances for the week view.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from orbit_lite.calendar.date_utils import (
    WEEKDAY_NAMES,
    WEEKDAY_TAGS,
    time_to_minutes,
    today_iso,
    weekday_index,
    week_dates,
    week_start_for,
)
from orbit_lite.calendar.models import Event, EventOccurrence, Task
from orbit_lite.domain.occurrence import occurs_on
from orbit_lite.domain.status_calculator import (
    StatusInfo,
    TaskStatus,
    calculate_event_status,
    calculate_task_status,
)

logger = logging.getLogger(__name__)


class TaskMarker(str, Enum):
    """Where a day falls within a task's start/due span."""

    STARTS = "starts"
    DUE = "due"
    STARTS_AND_DUE = "starts-and-due"
    ONGOING = "ongoing"


@dataclass(frozen=True)
class CalendarEventInstance:
    occurrence: EventOccurrence
    status: StatusInfo

    @property
    def event(self) -> Event:
        return self.occurrence.event


@dataclass(frozen=True)
class CalendarTaskInstance:
    task: Task
    date: str
    marker: TaskMarker
    status: StatusInfo

    @property
    def is_due_today(self) -> bool:
        return self.marker in (TaskMarker.DUE, TaskMarker.STARTS_AND_DUE)

    @property
    def is_overdue(self) -> bool:
        return self.status.kind == TaskStatus.OVERDUE


@dataclass
class CalendarDay:
    """One column of the week grid."""

    date: str
    is_today: bool
    events: list[CalendarEventInstance] = field(default_factory=list)
    tasks: list[CalendarTaskInstance] = field(default_factory=list)

    @property
    def weekday_tag(self) -> str:
        return WEEKDAY_TAGS[weekday_index(self.date)]

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[weekday_index(self.date)]

    @property
    def is_empty(self) -> bool:
        return not self.events and not self.tasks


def calendar_sort_key(event: Event) -> tuple[int, int, int]:
    """All-day events first, then start time, then end time.

    All-day events share one key so their input order is kept.
    """
    if event.all_day:
        return (0, 0, 0)
    return (
        1,
        time_to_minutes(event.start_time or "00:00"),
        time_to_minutes(event.end_time or "23:59"),
    )


def sort_calendar_events(events: Iterable[Event]) -> list[Event]:
    return sorted(events, key=calendar_sort_key)


def task_spans_date(task: Task, date: str) -> bool:
    """True if ``date`` lies within the task's start/due bounds.

    A missing bound is unconstrained on that side; a task with neither bound
    never spans any date.
    """
    if not task.is_schedulable:
        return False
    if task.start_date and date < task.start_date:
        return False
    if task.due_date and date > task.due_date:
        return False
    return True


def task_marker(task: Task, date: str) -> TaskMarker:
    is_start = task.start_date == date
    is_due = task.due_date == date
    if is_start and is_due:
        return TaskMarker.STARTS_AND_DUE
    if is_start:
        return TaskMarker.STARTS
    if is_due:
        return TaskMarker.DUE
    return TaskMarker.ONGOING


def materialize_week(
    events: Iterable[Event],
    tasks: Iterable[Task],
    week_start: str,
    now: datetime.datetime,
) -> list[CalendarDay]:
    """Build the seven day columns starting at ``week_start``.

    Args:
        events: Event snapshot
        tasks: Task snapshot; completed tasks are left off the grid
        week_start: Sunday opening the week; other dates snap back to the
            Sunday of their week
        now: Evaluation instant, used for statuses and the today flag

    Returns:
        Seven CalendarDay objects in date order
    """
    sunday = week_start_for(week_start)
    if sunday != week_start:
        logger.debug("Week start %s is not a Sunday; using %s", week_start, sunday)

    today = today_iso(now)
    event_list = list(events)
    open_tasks = [t for t in tasks if not t.completed and t.is_schedulable]

    days: list[CalendarDay] = []
    for date in week_dates(sunday):
        day = CalendarDay(date=date, is_today=date == today)

        matching: list[Event] = []
        for event in event_list:
            try:
                if occurs_on(event, date):
                    matching.append(event)
            except ValueError as e:
                logger.warning("Skipping event %s on %s: %s", event.id, date, e)

        for event in sort_calendar_events(matching):
            day.events.append(
                CalendarEventInstance(
                    occurrence=EventOccurrence(event=event, date=date),
                    status=calculate_event_status(event, now, date),
                )
            )

        for task in open_tasks:
            if task_spans_date(task, date):
                day.tasks.append(
                    CalendarTaskInstance(
                        task=task,
                        date=date,
                        marker=task_marker(task, date),
                        status=calculate_task_status(task, now),
                    )
                )

        days.append(day)

    logger.debug(
        "Materialized week %s: %d event instances, %d task instances",
        sunday,
        sum(len(d.events) for d in days),
        sum(len(d.tasks) for d in days),
    )
    return days
