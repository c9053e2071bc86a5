"""Line scanner for ``KEY=VALUE`` (.env style) files.

Rules, applied per line:

- blank lines and lines starting with ``#`` are skipped
- a ``#`` outside a quoted span starts a trailing comment; a span opens on
  ``"`` or ``'`` and closes only on the same character
- the line is split on the first ``=``; lines without one are skipped
- one pair of matching surrounding quotes is stripped from the value, with
  no escape processing of what is inside
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, MutableMapping, Optional, Tuple, Union

from envcascade.exceptions import ParseError
from envcascade.logger import Logger

from .sink import write_entry

_QUOTES = ("\"", "'")


def _strip_inline_comment(line: str) -> str:
    quote = None
    for index, char in enumerate(line):
        if quote is None:
            if char == "#":
                return line[:index].strip()
            if char in _QUOTES:
                quote = char
        elif char == quote:
            quote = None
    return line


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def scan_line(line: str, strict: bool = False) -> Optional[Tuple[str, str]]:
    """Extract a ``(key, value)`` pair from one line.

    Args:
        line: Raw line, with or without its newline
        strict: Raise ParseError for a line that has content but no ``=``

    Returns:
        The pair, or None when the line carries no assignment
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    line = _strip_inline_comment(line)
    if not line:
        return None

    key, sep, value = line.partition("=")
    if not sep:
        if strict:
            raise ParseError(
                "Line has no '=' assignment",
                code="MALFORMED_LINE",
                details={"line": line},
            )
        return None

    return key.strip(), _unquote(value.strip())


def iter_key_values(lines: Iterable[str], strict: bool = False) -> Iterator[Tuple[str, str]]:
    """Yield every pair found in ``lines``, in order."""
    for line in lines:
        pair = scan_line(line, strict=strict)
        if pair is not None:
            yield pair


def load_key_value_file(
    path: Union[str, Path],
    environ: MutableMapping[str, str],
    strict: bool = False,
    logger: Optional[Logger] = None,
) -> int:
    """Scan ``path`` and write each pair into ``environ`` as it is found.

    Bytes that are not valid UTF-8 are kept as surrogate escapes, which
    os.environ writes back as the original bytes. Open and read errors
    propagate; pairs written before such an error stay written.

    Returns:
        Number of entries written
    """
    written = 0
    with open(path, encoding="utf-8", errors="surrogateescape") as stream:
        for key, value in iter_key_values(stream, strict=strict):
            if write_entry(environ, key, value, logger):
                written += 1
    return written
