"""Data models for dashboard events and tasks - Orbit Lite version."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .date_utils import (
    LAST_MINUTE_OF_DAY,
    WEEKDAY_TAGS,
    add_minutes_to_time,
    normalize_iso_date,
    normalize_time_of_day,
    time_to_minutes,
)

logger = logging.getLogger(__name__)

DEFAULT_EVENT_DURATION_MINUTES = 60
ALL_DAY_START = "00:00"
ALL_DAY_END = LAST_MINUTE_OF_DAY


class Priority(str, Enum):
    """Priority levels shared by events and tasks."""

    NORMAL = "normal"
    IMPORTANT = "important"
    URGENT = "urgent"


# urgent > important > normal
PRIORITY_RANK: dict[str, int] = {
    Priority.URGENT.value: 0,
    Priority.IMPORTANT.value: 1,
    Priority.NORMAL.value: 2,
}


class Recurrence(str, Enum):
    """Supported repeat rules for events."""

    NONE = "None"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    CUSTOM = "Custom"


def _coerce_priority(value: Any) -> str:
    if isinstance(value, Priority):
        return value.value
    if isinstance(value, str) and value.strip().lower() in PRIORITY_RANK:
        return value.strip().lower()
    if value not in (None, ""):
        logger.debug("Unknown priority %r; using normal", value)
    return Priority.NORMAL.value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Event(BaseModel):
    """Calendar event, possibly recurring.

    Accepts both snake_case field names and the camelCase keys stored by the
    dashboard front end (``startTime``, ``allDay``, ``repeatDays``,
    ``excludedDates``).
    """

    # Core properties
    id: str = Field(..., description="Opaque unique identifier")
    title: str = Field(default="", description="Event title")
    date: str = Field(..., description="Anchor date, the first date the event can occur on")

    # Time information
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    all_day: bool = Field(default=False, alias="allDay")

    priority: Priority = Field(default=Priority.NORMAL)

    # Recurrence
    repeat: Recurrence = Field(default=Recurrence.NONE)
    repeat_days: list[str] = Field(default_factory=list, alias="repeatDays")
    excluded_dates: list[str] = Field(default_factory=list, alias="excludedDates")

    # Descriptive fields, no bearing on scheduling
    location: str = ""
    link: str = ""
    guests: str = ""
    description: str = ""
    color: str = "#6c7bff"
    calendar: str = ""
    visibility: str = ""
    reminder: str = ""

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)

    @field_validator("date")
    @classmethod
    def _validate_date(cls, v: str) -> str:
        return normalize_iso_date(v)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _validate_time(cls, v: Any) -> Optional[str]:
        v = _blank_to_none(v)
        if v is None:
            return None
        return normalize_time_of_day(v)

    @field_validator("priority", mode="before")
    @classmethod
    def _validate_priority(cls, v: Any) -> str:
        return _coerce_priority(v)

    @field_validator("repeat", mode="before")
    @classmethod
    def _validate_repeat(cls, v: Any) -> str:
        if isinstance(v, Recurrence):
            return v.value
        for rule in Recurrence:
            if isinstance(v, str) and v.strip().lower() == rule.value.lower():
                return rule.value
        if v not in (None, ""):
            logger.debug("Unknown repeat rule %r; treating as non-recurring", v)
        return Recurrence.NONE.value

    @field_validator("repeat_days", mode="before")
    @classmethod
    def _validate_repeat_days(cls, v: Any) -> list[str]:
        if not v:
            return []
        days: list[str] = []
        for raw in v:
            tag = str(raw).strip()[:3].title()
            if tag not in WEEKDAY_TAGS:
                logger.debug("Ignoring unknown weekday tag %r", raw)
                continue
            if tag not in days:
                days.append(tag)
        return days

    @field_validator("excluded_dates", mode="before")
    @classmethod
    def _validate_excluded_dates(cls, v: Any) -> list[str]:
        if not v:
            return []
        return [normalize_iso_date(d) for d in v]

    @field_validator("location", "link", "guests", "description", "color", "calendar",
                     "visibility", "reminder", "title", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @model_validator(mode="after")
    def _normalize_time_bounds(self, info: ValidationInfo) -> Event:
        """Fill all-day bounds and repair a missing or inverted end time."""
        if not self.all_day and self.start_time is None:
            self.all_day = True

        if self.all_day:
            self.start_time = ALL_DAY_START
            self.end_time = ALL_DAY_END
            return self

        duration = DEFAULT_EVENT_DURATION_MINUTES
        if info.context and info.context.get("default_duration_minutes"):
            duration = int(info.context["default_duration_minutes"])

        if self.end_time is None or time_to_minutes(self.end_time) <= time_to_minutes(
            self.start_time
        ):
            repaired = add_minutes_to_time(self.start_time, duration)
            logger.debug(
                "Event %s end %r not after start %r; using %s",
                self.id,
                self.end_time,
                self.start_time,
                repaired,
            )
            self.end_time = repaired
        return self

    @property
    def is_recurring(self) -> bool:
        return self.repeat != Recurrence.NONE

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], default_duration_minutes: int = DEFAULT_EVENT_DURATION_MINUTES
    ) -> Event:
        """Build an Event from a plain mapping (raises ValidationError on bad data)."""
        return cls.model_validate(
            data, context={"default_duration_minutes": default_duration_minutes}
        )


class Task(BaseModel):
    """Task with optional start and due dates. Tasks never recur."""

    id: str = Field(..., description="Opaque unique identifier")
    title: str = ""
    start_date: Optional[str] = Field(default=None, alias="startDate")
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    priority: Priority = Field(default=Priority.NORMAL)
    completed: bool = False
    notes: str = ""
    link: str = ""

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def _validate_dates(cls, v: Any) -> Optional[str]:
        v = _blank_to_none(v)
        if v is None:
            return None
        return normalize_iso_date(v)

    @field_validator("priority", mode="before")
    @classmethod
    def _validate_priority(cls, v: Any) -> str:
        return _coerce_priority(v)

    @field_validator("title", "notes", "link", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def is_schedulable(self) -> bool:
        """True when the task has at least one date bound."""
        return bool(self.start_date or self.due_date)

    @property
    def sort_date(self) -> str:
        return self.due_date or self.start_date or ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        return cls.model_validate(data)


@dataclass(frozen=True)
class EventOccurrence:
    """An event paired with one concrete date on which it manifests."""

    event: Event
    date: str

    @property
    def title(self) -> str:
        return self.event.title

    @property
    def start_time(self) -> Optional[str]:
        return None if self.event.all_day else self.event.start_time


def load_events(
    items: Iterable[Any], default_duration_minutes: int = DEFAULT_EVENT_DURATION_MINUTES
) -> list[Event]:
    """Build events from raw mappings, skipping malformed entries.

    Already-constructed Event instances pass through unchanged.
    """
    events: list[Event] = []
    for item in items or []:
        if isinstance(item, Event):
            events.append(item)
            continue
        try:
            events.append(Event.from_dict(item, default_duration_minutes))
        except (ValidationError, TypeError) as e:
            logger.warning("Skipping malformed event %r: %s", _item_id(item), e)
    return events


def load_tasks(items: Iterable[Any]) -> list[Task]:
    """Build tasks from raw mappings, skipping malformed entries."""
    tasks: list[Task] = []
    for item in items or []:
        if isinstance(item, Task):
            tasks.append(item)
            continue
        try:
            tasks.append(Task.from_dict(item))
        except (ValidationError, TypeError) as e:
            logger.warning("Skipping malformed task %r: %s", _item_id(item), e)
    return tasks


def _item_id(item: Any) -> Any:
    if isinstance(item, dict):
        return item.get("id")
    return item
