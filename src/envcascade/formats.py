"""Supported configuration file formats and extension sniffing."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Union

from envcascade.exceptions import UnsupportedFormatError


class FileFormat(Enum):
    """File formats understood by the loader.

    AUTO is never parsed directly; it is resolved per path by
    :func:`detect_format`.
    """

    AUTO = "auto"
    KEY_VALUE = "env"
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def parse(cls, name: str) -> "FileFormat":
        """Resolve a case-insensitive format name such as ``"yml"`` or ``"env"``."""
        normalized = name.strip().lower()
        try:
            return _FORMAT_ALIASES[normalized]
        except KeyError:
            raise UnsupportedFormatError(
                f"Unknown file format {name!r}",
                details={"accepted": sorted(_FORMAT_ALIASES)},
            ) from None


_FORMAT_ALIASES = {
    "auto": FileFormat.AUTO,
    "env": FileFormat.KEY_VALUE,
    "dotenv": FileFormat.KEY_VALUE,
    "keyvalue": FileFormat.KEY_VALUE,
    "key_value": FileFormat.KEY_VALUE,
    "json": FileFormat.JSON,
    "yaml": FileFormat.YAML,
    "yml": FileFormat.YAML,
}

_EXTENSION_FORMATS = {
    ".env": FileFormat.KEY_VALUE,
    ".json": FileFormat.JSON,
    ".yaml": FileFormat.YAML,
    ".yml": FileFormat.YAML,
}


def detect_format(path: Union[str, Path]) -> FileFormat:
    """Pick a format from the file extension, case-insensitively.

    The extension runs from the last dot of the file name, so a file named
    ``.json`` is JSON. Unknown or missing extensions fall back to KEY_VALUE,
    so this never fails.
    """
    name = os.path.basename(os.fspath(path))
    dot = name.rfind(".")
    ext = name[dot:] if dot != -1 else ""
    return _EXTENSION_FORMATS.get(ext.lower(), FileFormat.KEY_VALUE)


def resolve_format(fmt: FileFormat, path: Union[str, Path]) -> FileFormat:
    """Return ``fmt`` unless it is AUTO, in which case sniff ``path``."""
    if not isinstance(fmt, FileFormat):
        raise UnsupportedFormatError(f"Not a FileFormat: {fmt!r}")
    if fmt is FileFormat.AUTO:
        return detect_format(path)
    return fmt
