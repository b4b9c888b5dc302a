"""
Central logging configuration for orbit_lite.

Sets orbit_lite module loggers to INFO (or DEBUG when requested) and keeps
third-party libraries at WARNING so diagnostic output stays readable.
"""

import logging
import os
from typing import Optional

LITE_MODULES = [
    "orbit_lite",
    "orbit_lite.calendar.models",
    "orbit_lite.domain.occurrence",
    "orbit_lite.domain.status_calculator",
    "orbit_lite.domain.insights",
    "orbit_lite.domain.week_view",
    "orbit_lite.domain.agenda",
    "orbit_lite.core.config_loader",
]

NOISY_LOGGERS = [
    "pydantic",
    "yaml",
    "asyncio",
]

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_lite_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> None:
    """
    Configure logging levels for orbit_lite.

    Args:
        debug_mode: Whether to enable debug logging for orbit_lite modules
        force_debug: Override debug mode setting (None to use env var detection)
        log_level: Configured level name (e.g. from config.yaml); ignored in debug mode

    Environment Variables:
        ORBIT_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        ORBIT_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("ORBIT_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("ORBIT_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    configured = (log_level or "").upper()
    if not final_debug and configured in VALID_LEVELS:
        root_level = getattr(logging, configured)
    if env_log_level in VALID_LEVELS:
        root_level = getattr(logging, env_log_level)

    # Don't use force=True to preserve the colorized handler from __init__.py
    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s")
        )
        root_logger.addHandler(handler)

    logger_config: dict[str, int] = {name: logging.WARNING for name in NOISY_LOGGERS}

    # Package loggers never log below the root threshold outside debug mode
    lite_level = logging.DEBUG if final_debug else max(logging.INFO, root_level)
    for module in LITE_MODULES:
        logger_config[module] = lite_level

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    if final_debug:
        root_logger.debug("Debug logging enabled for orbit_lite modules.")
    else:
        root_logger.debug("Production logging configuration applied.")


def reset_logging_to_debug() -> None:
    """
    Reset all loggers to DEBUG level for troubleshooting.
    """
    logging.getLogger().setLevel(logging.DEBUG)

    for logger_name in NOISY_LOGGERS + LITE_MODULES:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)

    logging.getLogger().info("All loggers reset to DEBUG level for troubleshooting")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}

    for logger_name in ["orbit_lite", *NOISY_LOGGERS]:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)

    return status
