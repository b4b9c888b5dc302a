"""Evaluation clock for orbit_lite with test time override support."""

from __future__ import annotations

import datetime
import logging
import os

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

TEST_TIME_ENV = "ORBIT_TEST_TIME"


class TimeProvider:
    """Provides the current local wall-clock time.

    The engine itself never reads the clock; callers obtain ``now`` here once
    per render pass and thread it through every engine function.
    """

    def now_local(self) -> datetime.datetime:
        """Return the current local time as a naive datetime.

        Can be overridden for testing via the ORBIT_TEST_TIME environment
        variable. Format: ISO 8601 datetime string (e.g. "2024-03-01T09:45:00"
        or "2024-03-01T09:45:00-08:00"). Offset-aware values are converted to
        the host's local time.
        """
        test_time = os.environ.get(TEST_TIME_ENV)
        if test_time:
            try:
                dt = date_parser.isoparse(test_time)
                if dt.tzinfo is not None:
                    return dt.astimezone().replace(tzinfo=None)
                return dt
            except (ValueError, OverflowError) as e:
                logger.warning("Failed to parse %s=%r: %s", TEST_TIME_ENV, test_time, e)
                # Fall through to real time

        return datetime.datetime.now()


# Singleton instance for global use
_time_provider = TimeProvider()


def now_local() -> datetime.datetime:
    """Get the current local time (convenience function)."""
    return _time_provider.now_local()
