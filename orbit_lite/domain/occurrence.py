"""Occurrence resolution for recurring dashboard events.

Decides whether an event manifests on a given calendar date. Exclusions are
checked before the repeat rule so a single occurrence of a series can be
removed without touching the rest of the series.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from orbit_lite.calendar.date_utils import (
    date_range,
    days_between,
    normalize_iso_date,
    parse_iso_date,
    weekday_index,
    weekday_tag,
)
from orbit_lite.calendar.models import Event, Recurrence
from orbit_lite.exceptions import NonRecurringExclusionError

logger = logging.getLogger(__name__)


def occurs_on(event: Event, date: str) -> bool:
    """Return True if the event manifests on ``date``.

    Args:
        event: Event definition
        date: Candidate ISO date

    Returns:
        True when the repeat rule matches and the date is not excluded

    Raises:
        InvalidDateError: If ``date`` is not a valid ISO date
    """
    normalize_iso_date(date)

    if date in event.excluded_dates:
        return False

    if event.repeat == Recurrence.NONE:
        return date == event.date

    # Recurrence never reaches back before the anchor date
    if date < event.date:
        return False

    if event.repeat == Recurrence.DAILY:
        return True

    if event.repeat == Recurrence.WEEKLY:
        return weekday_index(date) == weekday_index(event.date)

    if event.repeat == Recurrence.MONTHLY:
        # Months without the anchor day-of-month are skipped
        return parse_iso_date(date).day == parse_iso_date(event.date).day

    if event.repeat == Recurrence.CUSTOM:
        if not event.repeat_days:
            return False
        return weekday_tag(date) in event.repeat_days

    return date == event.date


def first_occurrence(event: Event, start: str, days: int) -> Optional[str]:
    """First date in ``[start, start + days]`` on which the event occurs."""
    for candidate in date_range(start, days):
        if occurs_on(event, candidate):
            return candidate
    return None


def occurrences_between(event: Event, start: str, end: str) -> list[str]:
    """All occurrence dates in the inclusive range ``[start, end]``."""
    span = days_between(start, end)
    if span < 0:
        return []
    return [d for d in date_range(start, span) if occurs_on(event, d)]


def events_on(events: Iterable[Event], date: str) -> list[Event]:
    """Events occurring on ``date``, in input order.

    A malformed event is logged and treated as not occurring.
    """
    normalize_iso_date(date)
    matches = []
    for event in events:
        try:
            if occurs_on(event, date):
                matches.append(event)
        except ValueError as e:
            logger.warning("Skipping event %s on %s: %s", getattr(event, "id", "?"), date, e)
    return matches


def exclude_occurrence(event: Event, date: str) -> Event:
    """Return a copy of a recurring event with ``date`` suppressed.

    Raises:
        NonRecurringExclusionError: If the event does not recur
        InvalidDateError: If ``date`` is not a valid ISO date
    """
    normalize_iso_date(date)
    if not event.is_recurring:
        raise NonRecurringExclusionError(
            f"Event {event.id} does not recur; delete it instead of excluding {date}"
        )
    if date in event.excluded_dates:
        return event.model_copy(deep=True)
    return event.model_copy(update={"excluded_dates": [*event.excluded_dates, date]}, deep=True)


def delete_event(
    events: Iterable[Event],
    event_id: str,
    occurrence_date: Optional[str] = None,
    scope: str = "all",
) -> list[Event]:
    """Delete an event or one of its occurrences, returning a new list.

    Args:
        events: Current event collection (not modified)
        event_id: Identifier of the event to delete
        occurrence_date: Occurrence being deleted; falls back to the anchor date
        scope: ``"single"`` removes only that occurrence of a recurring event,
            anything else removes the whole event

    Returns:
        New event list
    """
    result: list[Event] = []
    for event in events:
        if event.id != event_id:
            result.append(event)
            continue
        if scope == "single" and event.is_recurring:
            target = occurrence_date or event.date
            logger.debug("Excluding occurrence %s of event %s", target, event_id)
            result.append(exclude_occurrence(event, target))
        else:
            logger.debug("Deleting event %s", event_id)
    return result
