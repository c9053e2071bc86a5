"""Typed access to environment values.

Values are read back out of an environment table (``os.environ`` unless a
mapping is passed in) and converted to the type of the supplied default.
Absent keys, empty values, values that fail to convert and defaults of an
unrecognized type all yield the default unchanged; nothing here raises on
bad input.

Example:
    from envcascade import get_env, get_env_nested

    port = get_env("PORT", 8080)                # int
    debug = get_env("DEBUG", False)             # bool
    host = get_env_nested("db.host", "localhost")  # reads DB_HOST
"""

from __future__ import annotations

import math
import os
import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

T = TypeVar("T")

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

# One "<number><unit>" element of a duration string
_DURATION_ELEMENT = re.compile(r"([0-9]*(?:\.[0-9]*)?)([^0-9.]*)")

_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_MAX_DURATION_NANOS = 2**63 - 1


def parse_bool(value: str) -> bool:
    """Parse the literal forms 1/t/T/TRUE/true/True and their false counterparts."""
    if value in _TRUE_LITERALS:
        return True
    if value in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal: {value!r}")


def parse_int(value: str) -> int:
    """Parse an optionally signed run of ASCII decimal digits."""
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid integer literal: {value!r}")
    return int(value)


def parse_float(value: str) -> float:
    """Parse a decimal, exponent, inf or nan literal.

    Stricter than ``float()``: surrounding whitespace and digit-grouping
    underscores are rejected, and a finite literal too large for a float
    (``1e400``) is out of range rather than infinite.
    """
    if value != value.strip() or "_" in value:
        raise ValueError(f"invalid float literal: {value!r}")
    result = float(value)
    if math.isinf(result) and value.lstrip("+-").lower() not in ("inf", "infinity"):
        raise ValueError(f"float literal out of range: {value!r}")
    return result


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``"300ms"``, ``"1h30m"`` or ``"-1.5h"``.

    Valid units are ns, us (or µs), ms, s, m and h. A bare ``0`` is allowed
    without a unit. The total must fit in a signed 64-bit nanosecond count;
    the result is truncated to microsecond resolution.
    """
    text = value
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration: {value!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_ELEMENT.match(text, pos)
        number, unit = match.group(1), match.group(2)
        if number in ("", "."):
            raise ValueError(f"invalid duration: {value!r}")
        if not unit:
            raise ValueError(f"missing unit in duration: {value!r}")
        if unit not in _NANOS_PER_UNIT:
            raise ValueError(f"unknown unit {unit!r} in duration: {value!r}")
        try:
            total += Decimal(number) * _NANOS_PER_UNIT[unit]
        except InvalidOperation as exc:
            raise ValueError(f"invalid duration: {value!r}") from exc
        pos = match.end()

    nanos = int(total)
    limit = _MAX_DURATION_NANOS + (1 if negative else 0)
    if nanos > limit:
        raise ValueError(f"duration out of range: {value!r}")

    micros = nanos // 1_000
    return timedelta(microseconds=-micros if negative else micros)


_CONVERTERS: Dict[type, Callable[[str], Any]] = {
    str: str,
    bool: parse_bool,
    int: parse_int,
    float: parse_float,
    timedelta: parse_duration,
}


def register_converter(type_: type, converter: Callable[[str], Any]) -> None:
    """Teach :func:`get_env` to convert values for defaults of ``type_``.

    The converter receives the raw, non-empty string and should raise on
    invalid input; any exception it raises makes :func:`get_env` fall back
    to the default. Subclasses of ``type_`` use it too unless they have a
    converter of their own.

    Args:
        type_: Type of the defaults this converter serves
        converter: Callable turning the raw string into a ``type_`` value
    """
    _CONVERTERS[type_] = converter


def _find_converter(type_: type) -> Optional[Callable[[str], Any]]:
    for cls in type_.__mro__:
        if cls in _CONVERTERS:
            return _CONVERTERS[cls]
    return None


def get_env(key: str, default: T, environ: Optional[Mapping[str, str]] = None) -> T:
    """Read ``key`` and convert it to the type of ``default``.

    Args:
        key: Exact, case-sensitive environment key
        default: Returned when the key is absent, empty, unconvertible, or
            when its type has no registered converter
        environ: Mapping to read from (default: ``os.environ``)

    Returns:
        The converted value or ``default``
    """
    env = os.environ if environ is None else environ
    raw = env.get(key)
    if raw is None or raw == "":
        return default

    converter = _find_converter(type(default))
    if converter is None:
        return default

    try:
        return converter(raw)
    except Exception:
        return default


def nested_key(dot_key: str) -> str:
    """Translate dot notation to an environment key: ``db.host`` -> ``DB_HOST``."""
    return dot_key.replace(".", "_").upper()


def get_env_nested(dot_key: str, default: T, environ: Optional[Mapping[str, str]] = None) -> T:
    """Like :func:`get_env`, addressing the key in dot notation."""
    return get_env(nested_key(dot_key), default, environ)


def get_env_str(key: str, default: str, environ: Optional[Mapping[str, str]] = None) -> str:
    return get_env(key, default, environ)


def get_env_int(key: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    return get_env(key, default, environ)


def get_env_bool(key: str, default: bool, environ: Optional[Mapping[str, str]] = None) -> bool:
    return get_env(key, default, environ)


def get_env_float(key: str, default: float, environ: Optional[Mapping[str, str]] = None) -> float:
    return get_env(key, default, environ)


def get_env_duration(
    key: str, default: timedelta, environ: Optional[Mapping[str, str]] = None
) -> timedelta:
    return get_env(key, default, environ)


__all__ = [
    "get_env",
    "get_env_nested",
    "get_env_str",
    "get_env_int",
    "get_env_bool",
    "get_env_float",
    "get_env_duration",
    "nested_key",
    "parse_bool",
    "parse_int",
    "parse_float",
    "parse_duration",
    "register_converter",
]
