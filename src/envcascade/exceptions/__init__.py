"""Exceptions raised by envcascade.

Usage:
    from envcascade.exceptions import EnvCascadeError, LoadError

    try:
        load_env("local.env", "config.yaml")
    except LoadError as exc:
        print(exc.to_dict())
"""

from envcascade.exceptions.base import (
    ConfigurationError,
    DocumentFormatError,
    EnvCascadeError,
    LoadError,
    ParseError,
    UnsupportedFormatError,
)

__all__ = [
    "EnvCascadeError",
    "LoadError",
    "DocumentFormatError",
    "ParseError",
    "UnsupportedFormatError",
    "ConfigurationError",
]
