"""Upcoming insights aggregation over a forward-looking date window."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from orbit_lite.calendar.date_utils import add_days, format_insight_date, today_iso
from orbit_lite.calendar.models import Event, EventOccurrence, Priority, Task
from orbit_lite.domain.occurrence import first_occurrence
from orbit_lite.domain.status_calculator import EventStatus, calculate_event_status

logger = logging.getLogger(__name__)

DEFAULT_INSIGHT_RANGE_DAYS = 7

_INSIGHT_PRIORITIES = (Priority.IMPORTANT, Priority.URGENT)


@dataclass(frozen=True)
class InsightItem:
    """Presentation-ready insight line."""

    title: str
    date: str
    time: Optional[str]
    label: str


@dataclass
class InsightsResult:
    """Events and tasks surfaced for the insight window."""

    window_start: str
    window_end: str
    events: list[EventOccurrence] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    event_items: list[InsightItem] = field(default_factory=list)
    task_items: list[InsightItem] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.events) + len(self.tasks)

    @property
    def summary(self) -> str:
        if self.total_count:
            return f"{self.total_count} items soon"
        return "No upcoming items"


def upcoming_insights(
    events: Iterable[Event],
    tasks: Iterable[Task],
    now: datetime.datetime,
    window_days: int = DEFAULT_INSIGHT_RANGE_DAYS,
) -> InsightsResult:
    """Collect important events and due-soon tasks for the next ``window_days``.

    Business rules:
    1. Only important or urgent events are surfaced
    2. Each event is represented by its first occurrence in the window
    3. Events whose representative occurrence already finished are dropped
    4. Incomplete tasks with a due date up to the end of the window are
       surfaced, including ones already overdue

    Args:
        events: Event snapshot
        tasks: Task snapshot
        now: Evaluation instant
        window_days: Window length; the window is ``[today, today + window_days]``

    Returns:
        InsightsResult with ordered events, tasks and display items
    """
    today = today_iso(now)
    window_end = add_days(today, window_days)
    result = InsightsResult(window_start=today, window_end=window_end)

    occurrences: list[EventOccurrence] = []
    for event in events:
        if event.priority not in _INSIGHT_PRIORITIES:
            continue
        try:
            next_date = first_occurrence(event, today, window_days)
            if next_date is None:
                continue
            status = calculate_event_status(event, now, next_date)
        except ValueError as e:
            logger.warning("Skipping event %s in insights: %s", event.id, e)
            continue
        if status.kind == EventStatus.COMPLETED:
            logger.debug("Insight event %s on %s already completed", event.id, next_date)
            continue
        occurrences.append(EventOccurrence(event=event, date=next_date))

    occurrences.sort(key=lambda occ: occ.date)
    result.events = occurrences
    result.event_items = [
        InsightItem(
            title=occ.title,
            date=occ.date,
            time=occ.start_time,
            label=format_insight_date(occ.date, occ.start_time, today),
        )
        for occ in occurrences
    ]

    due_tasks = [
        task
        for task in tasks
        if not task.completed and task.due_date and task.due_date <= window_end
    ]
    due_tasks.sort(key=lambda t: t.sort_date)
    result.tasks = due_tasks
    result.task_items = [
        InsightItem(
            title=task.title,
            date=task.due_date,
            time=None,
            label=format_insight_date(task.due_date, None, today),
        )
        for task in due_tasks
    ]

    logger.debug(
        "Insights %s..%s: %d events, %d tasks",
        today,
        window_end,
        len(result.events),
        len(result.tasks),
    )
    return result
