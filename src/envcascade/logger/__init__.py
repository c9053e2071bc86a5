"""
envcascade logger module

Usage:
    from envcascade.logger import get_logger, create_logger

    # Configured from ENVCASCADE_LOG_* environment variables
    logger = get_logger()

    # Or explicitly
    logger = create_logger(name="my-app", level=logging.DEBUG, json_format=True)

Environment Variables:
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name (e.g., MY_APP for "my-app")
"""

import os
from typing import Optional

from envcascade.config.settings import LogSettings
from envcascade.exceptions import ConfigurationError

from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter


def _get_env_prefix(name: str) -> str:
    """Convert a logger name to its environment prefix: "my-app" -> "MY_APP"."""
    return name.upper().replace("-", "_").replace(".", "_")


def _env_log_settings(prefix: str) -> LogSettings:
    try:
        return LogSettings.from_env(prefix)
    except ConfigurationError:
        # Unknown level names fall back to INFO
        return LogSettings.from_env(prefix, {
            key: value
            for key, value in os.environ.items()
            if key != f"{prefix}_LOG_LEVEL"
        })


def create_logger(
    name: str = "envcascade",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> Logger:
    """Create a new logger instance.

    Parameters left as None are read from {PREFIX}_LOG_LEVEL,
    {PREFIX}_LOG_FILE and {PREFIX}_LOG_JSON, PREFIX being derived from name.

    Args:
        name: Logger name
        level: Logging level (defaults to INFO or env var)
        log_file: Optional file path for log output
        json_format: If True, output logs as JSON

    Returns:
        A configured Logger instance
    """
    env_settings = _env_log_settings(_get_env_prefix(name))

    return StructuredLogger(
        name=name,
        level=env_settings.level_number if level is None else level,
        log_file=env_settings.log_file if log_file is None else log_file,
        json_format=env_settings.json_format if json_format is None else json_format,
    )


def get_logger(name: str = "envcascade") -> Logger:
    """Get a logger configured entirely from environment variables."""
    return create_logger(name=name)


__all__ = [
    "Logger",
    "StructuredLogger",
    "JsonFormatter",
    "TextFormatter",
    "create_logger",
    "get_logger",
]
