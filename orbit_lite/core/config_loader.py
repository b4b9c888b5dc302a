"""orbit_lite.core.config_loader

Config loader for orbit_lite.

- Reads YAML (PyYAML) or JSON, chosen by file suffix.
- Exposes a typed dataclass `Config` and a `load_config()` helper that accepts
  an optional path override.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from orbit_lite.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("orbit_lite") / "config.yaml"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Config:
    """Typed configuration for orbit_lite.

    Fields:
        state_path: optional JSON snapshot of events/todos for the CLI
        insight_range_days: length of the upcoming-insights window (1..60)
        default_event_duration_minutes: end-time repair duration (5..720)
        show_completed_tasks: include completed tasks in the task list
        show_full_task_list: include not-yet-started tasks in the task list
        log_level: logging level name
    """

    state_path: str | None = None
    insight_range_days: int = 7
    default_event_duration_minutes: int = 60
    show_completed_tasks: bool = True
    show_full_task_list: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Numeric-like values are coerced to int and clamped to their allowed
        range; a warning is logged whenever a value is coerced.
        """
        if data is None:
            data = {}

        def _coerce_int(key: str, default: int, lo: int, hi: int) -> int:
            raw = data.get(key, default)
            try:
                value = int(raw)
            except (TypeError, ValueError):
                logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
                return default
            if value < lo:
                logger.warning("%s %d below minimum; coercing to %d", key, value, lo)
                return lo
            if value > hi:
                logger.warning("%s %d above maximum; coercing to %d", key, value, hi)
                return hi
            return value

        def _coerce_bool(key: str, default: bool) -> bool:
            raw = data.get(key, default)
            if isinstance(raw, bool):
                return raw
            return str(raw).strip().lower() in _TRUTHY

        state_path = data.get("state_path")
        log_level = data.get("log_level", "INFO")

        return cls(
            state_path=str(state_path) if state_path else None,
            insight_range_days=_coerce_int("insight_range_days", 7, 1, 60),
            default_event_duration_minutes=_coerce_int(
                "default_event_duration_minutes", 60, 5, 720
            ),
            show_completed_tasks=_coerce_bool("show_completed_tasks", True),
            show_full_task_list=_coerce_bool("show_full_task_list", False),
            log_level=str(log_level).upper() if log_level is not None else "INFO",
        )


def _load_yaml_or_json(path: Path) -> Any:
    """Load a mapping from a YAML or JSON file, chosen by suffix."""
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        loaded = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unable to parse config file {path}: {exc}") from exc
    # safe_load returns None for empty files
    return {} if loaded is None else loaded


def load_config(path: str | None = None, overrides: dict[str, Any] | None = None) -> Config:
    """Load configuration from a YAML/JSON file and return a Config instance.

    Args:
        path: Optional path to the config file. Defaults to
              ./orbit_lite/config.yaml (relative to current working dir).
        overrides: Optional mapping (e.g. from environment variables) applied
              on top of the file values.

    Returns:
        Config dataclass instance with values from file (or defaults).

    Raises:
        ConfigError: If the file cannot be parsed or its top level is not a mapping
    """
    p = Path(path) if path else Path.cwd() / DEFAULT_CONFIG_PATH
    logger.debug("Attempting to load config from %s", p)

    raw: Any = {}
    if p.exists():
        raw = _load_yaml_or_json(p)
        if not isinstance(raw, dict):
            logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, raw)
            raise ConfigError("Config file must contain a mapping at top level")
        logger.info("Loaded configuration from %s", p)
    else:
        logger.info("Config file %s not found; using defaults", p)

    merged = {**raw, **(overrides or {})}
    cfg = Config.from_dict(merged)
    logger.debug("Configuration values: %s", cfg)
    return cfg
