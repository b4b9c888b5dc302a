"""Daily agenda, next-day preview, summary metrics and task list view."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from orbit_lite.calendar.date_utils import pluralize, time_to_minutes, today_iso, tomorrow_iso
from orbit_lite.calendar.models import PRIORITY_RANK, Event, EventOccurrence, Priority, Task
from orbit_lite.domain.occurrence import events_on
from orbit_lite.domain.status_calculator import (
    EventStatus,
    StatusInfo,
    TaskStatus,
    calculate_event_status,
    calculate_task_status,
    escalate_due_soon_tasks,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgendaEntry:
    occurrence: EventOccurrence
    status: StatusInfo


@dataclass
class DayAgenda:
    """Events occurring on one date, in start-time order."""

    date: str
    entries: list[AgendaEntry] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def running_count(self) -> int:
        return sum(1 for e in self.entries if e.status.kind == EventStatus.RUNNING)

    def priority_count(self, priority: Priority) -> int:
        return sum(1 for e in self.entries if e.occurrence.event.priority == priority)

    @property
    def subtitle(self) -> str:
        if self.running_count:
            return f"{self.running_count} in progress right now"
        return "No live events right now"

    @property
    def summary(self) -> str:
        if not self.entries:
            return "No events"
        return f"{self.count} today · {self.running_count} live"


@dataclass
class TomorrowPreview:
    agenda: DayAgenda

    @property
    def subtitle(self) -> str:
        urgent = self.agenda.priority_count(Priority.URGENT)
        if urgent:
            return pluralize(urgent, "urgent event")
        important = self.agenda.priority_count(Priority.IMPORTANT)
        if important:
            return pluralize(important, "important event")
        return ""


@dataclass(frozen=True)
class SummaryMetrics:
    events_today: int
    tasks_in_progress: int
    tasks_overdue: int


@dataclass
class TaskListEntry:
    task: Task
    status: StatusInfo


@dataclass
class TaskListView:
    entries: list[TaskListEntry] = field(default_factory=list)
    escalated: int = 0

    @property
    def active_count(self) -> int:
        return sum(1 for e in self.entries if not e.task.completed)

    @property
    def overdue_count(self) -> int:
        return sum(1 for e in self.entries if e.status.kind == TaskStatus.OVERDUE)

    @property
    def summary(self) -> str:
        if not self.active_count:
            return "No tasks"
        overdue = f" · {self.overdue_count} overdue" if self.overdue_count else ""
        return f"{self.active_count} tasks{overdue}"


def daily_agenda(events: Iterable[Event], date: str, now: datetime.datetime) -> DayAgenda:
    """Events on ``date`` ordered by start time, each with its status."""
    matching = sorted(events_on(events, date), key=lambda e: time_to_minutes(e.start_time))
    agenda = DayAgenda(date=date)
    for event in matching:
        agenda.entries.append(
            AgendaEntry(
                occurrence=EventOccurrence(event=event, date=date),
                status=calculate_event_status(event, now, date),
            )
        )
    return agenda


def tomorrow_preview(events: Iterable[Event], now: datetime.datetime) -> TomorrowPreview:
    return TomorrowPreview(agenda=daily_agenda(events, tomorrow_iso(now), now))


def summary_metrics(
    events: Iterable[Event], tasks: Iterable[Task], now: datetime.datetime
) -> SummaryMetrics:
    """Counts for the metrics strip.

    In-progress tasks are incomplete tasks with no start date or a start date
    on or before today.
    """
    today = today_iso(now)
    task_list = list(tasks)
    in_progress = sum(
        1 for t in task_list if not t.completed and (not t.start_date or t.start_date <= today)
    )
    overdue = sum(1 for t in task_list if not t.completed and t.due_date and t.due_date < today)
    return SummaryMetrics(
        events_today=len(events_on(events, today)),
        tasks_in_progress=in_progress,
        tasks_overdue=overdue,
    )


def _open_task_key(task: Task) -> tuple[int, str]:
    return (PRIORITY_RANK.get(task.priority, 2), task.sort_date or "9999-12-31")


def task_list_view(
    tasks: Sequence[Task],
    now: datetime.datetime,
    show_completed: bool = True,
    show_full_list: bool = False,
) -> TaskListView:
    """Filter and order tasks for the task list panel.

    Due-soon tasks are escalated to urgent first; the returned view reports
    how many changed so the caller can persist them.

    Args:
        tasks: Task collection
        now: Evaluation instant
        show_completed: Include completed tasks whose due date has not passed
        show_full_list: Include tasks that have not started yet

    Returns:
        TaskListView with ordered entries and counts
    """
    escalated = escalate_due_soon_tasks(tasks, now)
    today = today_iso(now)

    visible: list[Task] = []
    for task in tasks:
        if task.completed and task.due_date and task.due_date < today:
            continue
        if task.completed and not show_completed:
            continue
        if not show_full_list and not task.completed and task.start_date and task.start_date > today:
            continue
        visible.append(task)

    # Open tasks by priority then earliest date; completed tasks last, latest date first
    open_tasks = sorted((t for t in visible if not t.completed), key=_open_task_key)
    done_tasks = sorted(
        (t for t in visible if t.completed), key=lambda t: t.sort_date, reverse=True
    )
    view = TaskListView(escalated=escalated)
    view.entries = [
        TaskListEntry(task=t, status=calculate_task_status(t, now))
        for t in open_tasks + done_tasks
    ]
    return view
