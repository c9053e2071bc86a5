"""envcascade - load process configuration from .env, JSON or YAML files.

This package provides:
- loader: first-success-wins loading of candidate files into the environment
- parsers: the .env line scanner and the JSON/YAML tree flattener
- accessors: typed reads with default fallback and dot-notation keys
- config: envcascade's own settings
- logger: structured logging with text or JSON output
- exceptions: structured exception classes
"""

__version__ = "1.0.0"

from envcascade.exceptions import (
    ConfigurationError,
    DocumentFormatError,
    EnvCascadeError,
    LoadError,
    ParseError,
    UnsupportedFormatError,
)

from envcascade.formats import FileFormat, detect_format

from envcascade.accessors import (
    get_env,
    get_env_bool,
    get_env_duration,
    get_env_float,
    get_env_int,
    get_env_nested,
    get_env_str,
    nested_key,
    register_converter,
)

from envcascade.config import Settings, get_settings, reset_settings

from envcascade.logger import Logger, StructuredLogger, create_logger, get_logger

from envcascade.parsers import flatten, scan_line

from envcascade.loader import EnvLoader, load_discovered_env, load_env, load_env_with_format

__all__ = [
    "__version__",
    # Loading
    "EnvLoader",
    "load_discovered_env",
    "load_env",
    "load_env_with_format",
    "FileFormat",
    "detect_format",
    "flatten",
    "scan_line",
    # Accessors
    "get_env",
    "get_env_nested",
    "get_env_str",
    "get_env_int",
    "get_env_bool",
    "get_env_float",
    "get_env_duration",
    "nested_key",
    "register_converter",
    # Config
    "Settings",
    "get_settings",
    "reset_settings",
    # Logger
    "Logger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
    # Exceptions
    "EnvCascadeError",
    "LoadError",
    "DocumentFormatError",
    "ParseError",
    "UnsupportedFormatError",
    "ConfigurationError",
]
