"""Command-line entry for orbit_lite.

Prints the dashboard views (today, tomorrow, tasks, insights, metrics and
optionally the week grid) for a JSON state snapshot or the built-in sample.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from . import _init_logging
from .calendar.date_utils import today_iso
from .core.config_loader import load_config
from .core.config_manager import ConfigManager
from .core.time_provider import now_local
from .dashboard import Snapshot, load_snapshot, render_dashboard
from .exceptions import OrbitError
from .lite_logging import configure_lite_logging
from .sample_data import sample_state

logger = logging.getLogger(__name__)


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the orbit_lite CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="orbit-lite",
        description="Orbit Lite - print the dashboard views for a state snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m orbit_lite state.json              # Today, tasks, insights, metrics
  python -m orbit_lite state.json --week       # Also print the current week grid
  python -m orbit_lite --week state.json       # Same, options may come first
  python -m orbit_lite --sample --week-offset 1  # Sample data, next week's grid
  ORBIT_TEST_TIME=2024-03-01T09:45 python -m orbit_lite state.json
        """,
    )

    parser.add_argument(
        "state",
        nargs="?",
        metavar="STATE",
        help="JSON snapshot with 'events' and 'todos' lists (default: config state_path)",
    )
    parser.add_argument("--sample", action="store_true", help="Use built-in sample data")
    parser.add_argument("--config", metavar="PATH", help="YAML or JSON config file")
    parser.add_argument("--week", action="store_true", help="Print the current week grid")
    parser.add_argument(
        "--week-offset",
        type=int,
        metavar="N",
        help="Print the week grid shifted by N weeks (implies --week)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run the orbit_lite CLI and return a process exit code."""
    args = _create_parser().parse_args(argv)

    env_overrides = ConfigManager().load_full_config()
    _init_logging("DEBUG" if args.debug else env_overrides.get("log_level", "INFO"))

    try:
        config = load_config(args.config, overrides=env_overrides)
        configure_lite_logging(debug_mode=args.debug, log_level=config.log_level)
        now = now_local()

        if args.sample:
            snapshot = Snapshot.from_dict(
                sample_state(today_iso(now)), config.default_event_duration_minutes
            )
        else:
            path = args.state or config.state_path
            if not path:
                print("No state file given. Pass STATE, set state_path, or use --sample.")
                return 2
            snapshot = load_snapshot(path, config.default_event_duration_minutes)

        print(
            render_dashboard(
                snapshot,
                now,
                config,
                show_week=args.week or args.week_offset is not None,
                week_offset=args.week_offset or 0,
            )
        )
    except OrbitError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
