"""Custom exception hierarchy for the orbit_lite engine.

Malformed entity data is skipped and logged by the aggregation passes; the
exceptions below surface only for caller mistakes (bad query arguments,
invalid configuration, unsupported edits).
"""


class OrbitError(Exception):
    """Base exception for all orbit_lite errors."""


class InvalidDateError(OrbitError, ValueError):
    """A date or time-of-day string could not be parsed.

    Raised when:
    - A date is not a zero-padded ISO calendar date (``YYYY-MM-DD``)
    - A time-of-day is not a 24-hour ``HH:MM`` string

    Subclasses ValueError so pydantic validators convert it into a
    ValidationError on model construction.
    """


class NonRecurringExclusionError(OrbitError):
    """A single-occurrence exclusion was requested on a non-recurring event.

    Non-recurring events are deleted outright rather than excluded.
    """


class ConfigError(OrbitError):
    """Configuration file could not be loaded or has the wrong shape."""
