"""
Central logging configuration for icalevent.

Sets up a colorized console handler on the root logger and keeps noisy
third-party loggers quiet while icalevent modules follow the debug setting.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

from .config import EventParserSettings

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

PACKAGE_LOGGERS = [
    "icalevent",
    "icalevent.event_builder",
    "icalevent.datetime_utils",
    "icalevent.recurrence",
    "icalevent.reader",
    "icalevent.config",
]

THIRD_PARTY_LOGGERS = ["icalendar", "dateutil"]


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    level_name: Optional[str] = None,
) -> None:
    """
    Configure logging levels for icalevent.

    Args:
        debug_mode: Whether to enable debug logging for icalevent modules
        force_debug: Override debug mode setting (None to use env var detection)
        level_name: Root log level used when no environment override is set

    Environment Variables:
        ICALEVENT_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        ICALEVENT_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("ICALEVENT_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("ICALEVENT_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if level_name and not final_debug:
        root_level = getattr(logging, level_name.upper(), logging.INFO)
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if none exist to avoid duplicate output
    if not root_logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setLevel(root_level)
        handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))
        root_logger.addHandler(handler)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    package_level = logging.DEBUG if final_debug else logging.INFO
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(package_level)

    if final_debug:
        root_logger.debug("Debug logging enabled for icalevent modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for name in ["icalevent", *THIRD_PARTY_LOGGERS]:
        status[name] = logging.getLevelName(logging.getLogger(name).level)
    return status


def configure_logging_from_settings(settings: EventParserSettings) -> None:
    """Apply the debug flag and log level from parser settings."""
    configure_logging(debug_mode=settings.debug, level_name=settings.log_level)
