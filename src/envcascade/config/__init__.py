"""Configuration for envcascade itself.

Example:
    from envcascade.config import get_settings

    settings = get_settings()
    if settings.loader.strict:
        ...
"""

from envcascade.config.settings import (
    DEFAULT_PREFIX,
    LoaderSettings,
    LogSettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "DEFAULT_PREFIX",
    "LoaderSettings",
    "LogSettings",
    "Settings",
    "get_settings",
    "reset_settings",
]
