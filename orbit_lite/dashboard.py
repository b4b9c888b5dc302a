"""Plain-text dashboard built from one evaluation pass of the engine."""

from __future__ import annotations

import datetime
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from orbit_lite.calendar.date_utils import (
    format_date_range,
    format_time,
    format_week_range,
    pluralize,
    shift_week,
    today_iso,
    week_start_for,
)
from orbit_lite.calendar.models import Event, Task, load_events, load_tasks
from orbit_lite.core.config_loader import Config
from orbit_lite.domain.agenda import (
    DayAgenda,
    daily_agenda,
    summary_metrics,
    task_list_view,
    tomorrow_preview,
)
from orbit_lite.domain.insights import upcoming_insights
from orbit_lite.domain.week_view import CalendarDay, materialize_week
from orbit_lite.exceptions import OrbitError

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Events and tasks read from a state file."""

    events: list[Event] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_duration_minutes: int = 60) -> Snapshot:
        # The front end stores tasks under "todos"
        raw_tasks = data.get("todos", data.get("tasks", []))
        return cls(
            events=load_events(data.get("events", []), default_duration_minutes),
            tasks=load_tasks(raw_tasks),
        )


def load_snapshot(path: str | Path, default_duration_minutes: int = 60) -> Snapshot:
    """Read a JSON state snapshot; malformed entities are skipped with a warning.

    Raises:
        OrbitError: If the file cannot be read or is not a JSON object
    """
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise OrbitError(f"Unable to read state file {p}: {e}") from e
    if not isinstance(data, dict):
        raise OrbitError(f"State file {p} must contain a JSON object")
    snapshot = Snapshot.from_dict(data, default_duration_minutes)
    logger.info(
        "Loaded %d events and %d tasks from %s", len(snapshot.events), len(snapshot.tasks), p
    )
    return snapshot


def _time_label(event: Event) -> str:
    if event.all_day:
        return "All day"
    return f"{format_time(event.start_time)} - {format_time(event.end_time)}"


def _render_agenda(title: str, agenda: DayAgenda, empty: str) -> list[str]:
    lines = [f"{title} ({pluralize(agenda.count, 'event')})"]
    if not agenda.entries:
        lines.append(f"  {empty}")
    for entry in agenda.entries:
        event = entry.occurrence.event
        lines.append(
            f"  [{entry.status.label:<9}] {_time_label(event):<19} {event.title} ({event.priority})"
        )
    return lines


def _render_week(days: list[CalendarDay]) -> list[str]:
    lines = [f"Week of {format_week_range(days[0].date)}"]
    for day in days:
        marker = " (today)" if day.is_today else ""
        lines.append(f"  {day.weekday_tag} {day.date}{marker}")
        if day.is_empty:
            lines.append("    No events or tasks")
        for inst in day.events:
            lines.append(f"    {_time_label(inst.event):<19} {inst.event.title} [{inst.status.label}]")
        for t in day.tasks:
            lines.append(f"    task: {t.task.title} [{t.marker.value}] {t.status.label}")
    return lines


def render_dashboard(
    snapshot: Snapshot,
    now: datetime.datetime,
    config: Optional[Config] = None,
    show_week: bool = False,
    week_offset: int = 0,
) -> str:
    """Run every view over the snapshot and format it as text."""
    config = config or Config()
    today = today_iso(now)
    events, tasks = snapshot.events, snapshot.tasks

    lines: list[str] = [f"Orbit dashboard · {today} {now.strftime('%H:%M')}", ""]

    agenda = daily_agenda(events, today, now)
    lines += _render_agenda("Today", agenda, "No events yet.")
    lines.append(f"  {agenda.subtitle}")
    lines.append("")

    preview = tomorrow_preview(events, now)
    lines += _render_agenda("Tomorrow", preview.agenda, "No events scheduled for tomorrow.")
    if preview.subtitle:
        lines.append(f"  {preview.subtitle}")
    lines.append("")

    view = task_list_view(
        tasks,
        now,
        show_completed=config.show_completed_tasks,
        show_full_list=config.show_full_task_list,
    )
    if view.escalated:
        logger.info("%d task(s) escalated to urgent; save the snapshot to keep them", view.escalated)
    lines.append(f"Tasks ({view.summary})")
    if not view.entries:
        lines.append("  No tasks.")
    for entry in view.entries:
        task = entry.task
        lines.append(
            f"  [{entry.status.label:<11}] {task.title} ({task.priority}) "
            f"{format_date_range(task.start_date, task.due_date)}"
        )
    lines.append("")

    days = config.insight_range_days
    insights = upcoming_insights(events, tasks, now, days)
    lines.append(f"Insights ({insights.summary})")
    if not insights.event_items:
        lines.append(f"  No urgent events in the next {days} days.")
    for item in insights.event_items:
        lines.append(f"  event: {item.title} · {item.label}")
    if not insights.task_items:
        lines.append(f"  No due dates within {days} days.")
    for item in insights.task_items:
        lines.append(f"  due: {item.title} · {item.label}")
    lines.append("")

    metrics = summary_metrics(events, tasks, now)
    lines.append(
        f"Metrics: {metrics.events_today} events today · "
        f"{metrics.tasks_in_progress} tasks in progress · {metrics.tasks_overdue} overdue"
    )

    if show_week:
        week_start = week_start_for(today)
        if week_offset:
            week_start = shift_week(week_start, week_offset)
        lines.append("")
        lines += _render_week(materialize_week(events, tasks, week_start, now))

    return "\n".join(lines)
