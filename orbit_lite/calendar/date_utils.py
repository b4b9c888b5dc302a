"""Date and time-of-day helpers for the orbit_lite engine.

All dates are exchanged as zero-padded ISO calendar strings (``YYYY-MM-DD``)
and all times-of-day as 24-hour ``HH:MM`` strings. Zero padding makes plain
string comparison equivalent to chronological comparison, which the status
classifier relies on.
"""

from __future__ import annotations

import datetime
import logging
import re

from orbit_lite.exceptions import InvalidDateError

logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")

WEEKDAY_TAGS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE_OF_DAY = "23:59"


def parse_iso_date(value: str) -> datetime.date:
    """Parse a ``YYYY-MM-DD`` string into a date.

    Raises:
        InvalidDateError: If the value is not a valid zero-padded ISO date
    """
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise InvalidDateError(f"Expected ISO date YYYY-MM-DD, got: {value!r}")
    try:
        return datetime.date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateError(f"Invalid calendar date: {value!r}") from e


def normalize_iso_date(value: str) -> str:
    """Validate an ISO date string and return it unchanged."""
    parse_iso_date(value)
    return value


def to_iso(value: datetime.date) -> str:
    return value.isoformat()


def add_days(date_str: str, days: int) -> str:
    """Shift an ISO date by a number of days (negative values go back)."""
    return to_iso(parse_iso_date(date_str) + datetime.timedelta(days=days))


def days_between(start: str, end: str) -> int:
    """Whole days from ``start`` to ``end`` (negative if ``end`` is earlier)."""
    return (parse_iso_date(end) - parse_iso_date(start)).days


def date_range(start: str, days: int) -> list[str]:
    """Inclusive list of ISO dates ``[start, start + days]``."""
    first = parse_iso_date(start)
    return [to_iso(first + datetime.timedelta(days=i)) for i in range(days + 1)]


def weekday_index(date_str: str) -> int:
    """Day-of-week with Sunday as 0, matching the weekday tag order."""
    # date.weekday() is Monday=0
    return (parse_iso_date(date_str).weekday() + 1) % 7


def weekday_tag(date_str: str) -> str:
    return WEEKDAY_TAGS[weekday_index(date_str)]


def parse_time_of_day(value: str) -> tuple[int, int]:
    """Parse ``HH:MM`` (seconds tolerated and ignored) into (hour, minute).

    Raises:
        InvalidDateError: If the value is not a valid 24-hour time
    """
    match = _TIME_RE.match(value) if isinstance(value, str) else None
    if not match:
        raise InvalidDateError(f"Expected time HH:MM, got: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidDateError(f"Time out of range: {value!r}")
    return hour, minute


def normalize_time_of_day(value: str) -> str:
    """Return a zero-padded ``HH:MM`` form of a time string."""
    hour, minute = parse_time_of_day(value)
    return f"{hour:02d}:{minute:02d}"


def time_to_minutes(value: str | None) -> int:
    """Minutes since midnight; a missing time counts as midnight."""
    if not value:
        return 0
    hour, minute = parse_time_of_day(value)
    return hour * 60 + minute


def minutes_to_time(total: int) -> str:
    total %= MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def add_minutes_to_time(value: str, minutes: int, clamp: bool = True) -> str:
    """Add minutes to a time-of-day.

    With ``clamp`` the result is capped at 23:59 instead of wrapping past
    midnight, so the end of a same-day span never precedes its start.
    """
    total = time_to_minutes(value) + minutes
    if clamp and total >= MINUTES_PER_DAY:
        return LAST_MINUTE_OF_DAY
    return minutes_to_time(total)


def combine(date_str: str, time_str: str, second: int = 0) -> datetime.datetime:
    """Build a naive local datetime from an ISO date and ``HH:MM`` time."""
    hour, minute = parse_time_of_day(time_str)
    return datetime.datetime.combine(parse_iso_date(date_str), datetime.time(hour, minute, second))


def to_local_naive(now: datetime.datetime) -> datetime.datetime:
    """Express an instant as a naive local wall-clock datetime.

    Aware datetimes are converted to the host's local zone first; "today" is
    always derived from local midnight.
    """
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def today_iso(now: datetime.datetime) -> str:
    return to_local_naive(now).date().isoformat()


def tomorrow_iso(now: datetime.datetime) -> str:
    return add_days(today_iso(now), 1)


def week_start_for(date_str: str) -> str:
    """Sunday on or before the given date."""
    return add_days(date_str, -weekday_index(date_str))


def week_dates(week_start: str) -> list[str]:
    return date_range(week_start, 6)


def shift_week(week_start: str, weeks: int) -> str:
    return add_days(week_start, 7 * weeks)


def format_week_range(week_start: str) -> str:
    """Label a week, e.g. ``Mar 3 - 9, 2024`` or ``Mar 31 - Apr 6, 2024``."""
    start = parse_iso_date(week_start)
    end = start + datetime.timedelta(days=6)
    start_month = start.strftime("%b")
    end_month = end.strftime("%b")
    if start_month == end_month:
        return f"{start_month} {start.day} - {end.day}, {start.year}"
    return f"{start_month} {start.day} - {end_month} {end.day}, {start.year}"


def format_time(value: str | None) -> str:
    """12-hour display form of ``HH:MM``, e.g. ``09:30 AM``."""
    if not value:
        return "--:--"
    hour, minute = parse_time_of_day(value)
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour:02d}:{minute:02d} {suffix}"


def format_short_date(date_str: str) -> str:
    d = parse_iso_date(date_str)
    return f"{d.strftime('%b')} {d.day}"


def format_relative_date(date_str: str, today: str) -> str:
    """Describe a date relative to today.

    Examples:
        >>> format_relative_date("2024-03-02", "2024-03-01")
        'Tomorrow'
        >>> format_relative_date("2024-02-27", "2024-03-01")
        '3 days ago'
    """
    diff = days_between(today, date_str)
    if diff == 0:
        return "Today"
    if diff == 1:
        return "Tomorrow"
    if diff == -1:
        return "Yesterday"
    if diff > 1:
        return f"In {diff} days"
    return f"{abs(diff)} days ago"


def format_insight_date(date_str: str, time_str: str | None, today: str) -> str:
    day = format_relative_date(date_str, today)
    if time_str:
        return f"{day} · {format_time(time_str)}"
    return day


def format_date_range(start: str | None, due: str | None) -> str:
    if start and due:
        return f"{format_short_date(start)} - {format_short_date(due)}"
    if start:
        return f"Starts {format_short_date(start)}"
    if due:
        return f"Due {format_short_date(due)}"
    return "No dates"


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"
