"""Dataclass-based settings for envcascade itself.

envcascade's own behaviour (strict parsing, default dotenv file name,
logging) is configured through environment variables read with the
package's typed accessors:

    {prefix}_STRICT        "true" to fail candidates on malformed input
    {prefix}_DOTENV_NAME   file name discovered when load_env() gets no paths
    {prefix}_LOG_LEVEL     DEBUG, INFO, WARNING, ERROR, CRITICAL
    {prefix}_LOG_JSON      "true" for JSON log records
    {prefix}_LOG_FILE      optional log file path

The default prefix is ENVCASCADE.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from envcascade.accessors import get_env_bool, get_env_str
from envcascade.exceptions import ConfigurationError

DEFAULT_PREFIX = "ENVCASCADE"

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class LogSettings:
    """Logging configuration

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON records instead of text
        log_file: Optional file path for log output
    """

    level: str = "INFO"
    json_format: bool = False
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        self.level = self.level.upper()
        self.validate()

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_PREFIX, environ: Optional[Mapping[str, str]] = None
    ) -> "LogSettings":
        """Load logging settings from environment variables

        Args:
            prefix: Environment variable prefix
            environ: Mapping to read from (default: os.environ)
        """
        return cls(
            level=get_env_str(f"{prefix}_LOG_LEVEL", "INFO", environ),
            json_format=get_env_bool(f"{prefix}_LOG_JSON", False, environ),
            log_file=get_env_str(f"{prefix}_LOG_FILE", "", environ) or None,
        )

    @property
    def level_number(self) -> int:
        """Numeric logging level for the standard logging module."""
        return getattr(logging, self.level)

    def validate(self) -> None:
        if self.level not in _ALLOWED_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level '{self.level}'",
                details={"allowed": sorted(_ALLOWED_LOG_LEVELS)},
            )


@dataclass
class LoaderSettings:
    """Loader behaviour

    Attributes:
        strict: Fail a candidate file on malformed lines or unserializable
            sequences instead of skipping them
        dotenv_name: File name searched for when a load gets no paths
    """

    strict: bool = False
    dotenv_name: str = ".env"

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_PREFIX, environ: Optional[Mapping[str, str]] = None
    ) -> "LoaderSettings":
        return cls(
            strict=get_env_bool(f"{prefix}_STRICT", False, environ),
            dotenv_name=get_env_str(f"{prefix}_DOTENV_NAME", ".env", environ),
        )

    def validate(self) -> None:
        if not self.dotenv_name or "/" in self.dotenv_name or "\\" in self.dotenv_name:
            raise ConfigurationError(
                f"dotenv_name must be a bare file name, got {self.dotenv_name!r}"
            )


@dataclass
class Settings:
    """Complete envcascade settings

    Attributes:
        loader: Loader behaviour
        log: Logging settings
        prefix: Environment variable prefix used
    """

    loader: LoaderSettings = field(default_factory=LoaderSettings)
    log: LogSettings = field(default_factory=LogSettings)
    prefix: str = DEFAULT_PREFIX

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_PREFIX, environ: Optional[Mapping[str, str]] = None
    ) -> "Settings":
        """Load all settings from environment variables

        Args:
            prefix: Environment variable prefix
            environ: Mapping to read from (default: os.environ)
        """
        return cls(
            loader=LoaderSettings.from_env(prefix, environ),
            log=LogSettings.from_env(prefix, environ),
            prefix=prefix,
        )


# Global settings storage per prefix
_global_settings: Dict[str, Settings] = {}


def get_settings(prefix: str = DEFAULT_PREFIX, reload: bool = False) -> Settings:
    """Get or create the settings instance for a given prefix

    Args:
        prefix: Environment variable prefix
        reload: If True, re-read settings from the environment
    """
    if prefix not in _global_settings or reload:
        _global_settings[prefix] = Settings.from_env(prefix=prefix)
    return _global_settings[prefix]


def reset_settings(prefix: Optional[str] = None) -> None:
    """Reset cached settings (primarily for testing)

    Args:
        prefix: Specific prefix to reset, or None to reset all
    """
    if prefix:
        _global_settings.pop(prefix, None)
    else:
        _global_settings.clear()
