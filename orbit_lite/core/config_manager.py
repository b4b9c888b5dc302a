"""Environment-driven configuration for orbit_lite.

Settings come from three layers, lowest precedence first: the YAML/JSON
config file, a ``.env`` file beside the working directory, and ``ORBIT_*``
variables already present in the process environment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Environment variable -> config key
ENV_CONFIG_KEYS: dict[str, str] = {
    "ORBIT_STATE_PATH": "state_path",
    "ORBIT_INSIGHT_RANGE_DAYS": "insight_range_days",
    "ORBIT_DEFAULT_EVENT_DURATION": "default_event_duration_minutes",
    "ORBIT_SHOW_COMPLETED_TASKS": "show_completed_tasks",
    "ORBIT_SHOW_FULL_TASK_LIST": "show_full_task_list",
    "ORBIT_LOG_LEVEL": "log_level",
}

_QUOTES = ('"', "'")


def _split_env_line(line: str) -> Optional[tuple[str, str]]:
    """Split one ``.env`` line into ``(key, value)``, or None if it holds no assignment.

    Accepts an optional ``export`` prefix. A value wrapped in matching quotes
    is taken verbatim; an unquoted value loses any trailing `` # comment``.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export "):].lstrip()

    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None

    value = value.strip()
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return key, value[1:-1]
    return key, value.split(" #", 1)[0].rstrip()


def parse_env_file(path: Path) -> dict[str, str]:
    """Read ``KEY=VALUE`` assignments from a ``.env`` file.

    A missing or unreadable file yields an empty mapping; later assignments
    of the same key win.
    """
    if not path.exists():
        return {}
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning("Ignoring unreadable .env file %s: %s", path, e)
        return {}

    return dict(pair for pair in map(_split_env_line, lines) if pair is not None)


class ConfigManager:
    """Collects ORBIT_* settings from a ``.env`` file and the environment."""

    def __init__(
        self,
        env_file_path: Path | None = None,
        environ: MutableMapping[str, str] | None = None,
    ):
        """
        Args:
            env_file_path: ``.env`` location, defaulting to the working directory
            environ: Environment mapping to read and update (defaults to os.environ)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"
        self.environ = os.environ if environ is None else environ

    def load_env_file(self) -> list[str]:
        """Copy ``.env`` assignments into the environment as defaults.

        Variables already set in the environment are left alone.

        Returns:
            Keys that were taken from the file
        """
        defaults = parse_env_file(self.env_file_path)
        applied = [key for key in defaults if key not in self.environ]
        for key in applied:
            self.environ[key] = defaults[key]

        if applied:
            logger.debug("Applied .env defaults from %s: %s", self.env_file_path, ", ".join(applied))
        return applied

    def build_config_from_env(self) -> dict[str, Any]:
        """Map non-empty ORBIT_* variables onto config keys.

        Values stay strings; Config.from_dict coerces them.
        """
        cfg = {
            cfg_key: self.environ[env_key]
            for env_key, cfg_key in ENV_CONFIG_KEYS.items()
            if self.environ.get(env_key)
        }
        if cfg:
            logger.debug("Environment config overrides: %s", ", ".join(sorted(cfg)))
        return cfg

    def load_full_config(self) -> dict[str, Any]:
        """Apply ``.env`` defaults, then return the environment overrides."""
        self.load_env_file()
        return self.build_config_from_env()
