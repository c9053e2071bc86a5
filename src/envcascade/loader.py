"""Load environment variables from the first usable candidate file.

Candidates are tried in order; the first one that parses wins and the rest
are never opened. Missing, unreadable or malformed candidates are skipped.
Only when every candidate has failed does the caller see an error, a single
LoadError without per-file detail.

Example:
    from envcascade import load_env, FileFormat, load_env_with_format

    load_env("config.local.yaml", "config.yaml", ".env")
    load_env_with_format(FileFormat.JSON, "settings.conf")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import MutableMapping, Optional, Union

import yaml
from dotenv import find_dotenv

from envcascade.config.settings import Settings, get_settings
from envcascade.exceptions import EnvCascadeError, LoadError
from envcascade.formats import FileFormat, resolve_format
from envcascade.logger import Logger, get_logger
from envcascade.parsers.keyvalue import load_key_value_file
from envcascade.parsers.structured import flatten_into, read_json_document, read_yaml_document

PathLike = Union[str, Path]

# Failures that disqualify one candidate; ValueError covers JSON and
# Unicode decoding errors
_CANDIDATE_ERRORS = (OSError, ValueError, yaml.YAMLError, EnvCascadeError)

_default_logger: Optional[Logger] = None


def _get_default_logger() -> Logger:
    global _default_logger
    if _default_logger is None:
        _default_logger = get_logger()
    return _default_logger


class EnvLoader:
    """Load one of several candidate files into an environment table.

    Attributes:
        environ: Table the entries are written to (os.environ by default)
        strict: Fail a candidate on malformed lines or unserializable
            sequences instead of skipping them
        dotenv_name: File searched for, walking up from the working
            directory, by load_discovered()
    """

    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        strict: bool = False,
        logger: Optional[Logger] = None,
        dotenv_name: str = ".env",
    ) -> None:
        self.environ = os.environ if environ is None else environ
        self.strict = strict
        self.dotenv_name = dotenv_name
        self.logger = logger or _get_default_logger()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        environ: Optional[MutableMapping[str, str]] = None,
        logger: Optional[Logger] = None,
    ) -> "EnvLoader":
        """Build a loader from envcascade settings (get_settings() by default)."""
        settings = settings or get_settings()
        return cls(
            environ=environ,
            strict=settings.loader.strict,
            logger=logger,
            dotenv_name=settings.loader.dotenv_name,
        )

    def load(self, *paths: PathLike, fmt: Union[FileFormat, str] = FileFormat.AUTO) -> Path:
        """Load the first candidate that parses successfully.

        Args:
            *paths: Candidate files in priority order; empty entries are
                skipped. With no usable paths the call fails.
            fmt: Format forced on every candidate, or AUTO to sniff each
                path's extension

        Returns:
            Path of the candidate that was loaded

        Raises:
            LoadError: No candidate could be loaded
            UnsupportedFormatError: fmt is not a known format
        """
        if isinstance(fmt, str):
            fmt = FileFormat.parse(fmt)

        for candidate in paths:
            if not candidate:
                continue

            path = Path(candidate)
            effective = resolve_format(fmt, path)
            self.logger.debug("Trying environment file", path=str(path), format=effective.value)

            try:
                entries = self.load_file(path, effective)
            except _CANDIDATE_ERRORS as exc:
                self.logger.debug(
                    "Skipping environment file",
                    path=str(path),
                    error=type(exc).__name__,
                )
                continue

            self.logger.debug(
                "Loaded environment file",
                path=str(path),
                format=effective.value,
                entries=entries,
            )
            return path

        raise LoadError(
            "Failed to load any of the specified files",
            details={"candidates": [str(p) for p in paths if p]},
        )

    def discover(self) -> str:
        """Find the nearest dotenv file above the working directory, or ""."""
        return find_dotenv(self.dotenv_name, usecwd=True)

    def load_discovered(self, fmt: Union[FileFormat, str] = FileFormat.AUTO) -> Path:
        """Load the nearest ``dotenv_name`` file found by :meth:`discover`.

        Raises:
            LoadError: No such file exists above the working directory, or
                it could not be loaded
        """
        return self.load(self.discover(), fmt=fmt)

    def load_file(self, path: Path, fmt: FileFormat) -> int:
        """Parse one file and write its entries; AUTO sniffs the extension.

        Unlike load(), failures propagate to the caller.

        Returns:
            Number of entries written
        """
        fmt = resolve_format(fmt, path)
        if fmt is FileFormat.JSON:
            return self._load_json(path)
        if fmt is FileFormat.YAML:
            return self._load_yaml(path)
        return self._load_key_value(path)

    def _load_key_value(self, path: Path) -> int:
        return load_key_value_file(path, self.environ, strict=self.strict, logger=self.logger)

    def _load_json(self, path: Path) -> int:
        document = read_json_document(path)
        return flatten_into(document, self.environ, strict=self.strict, logger=self.logger)

    def _load_yaml(self, path: Path) -> int:
        document = read_yaml_document(path)
        return flatten_into(document, self.environ, strict=self.strict, logger=self.logger)


def load_env(*paths: PathLike) -> Path:
    """Load the first usable file into os.environ, sniffing each format.

    Raises:
        LoadError: No candidate could be loaded
    """
    return EnvLoader.from_settings().load(*paths)


def load_env_with_format(fmt: Union[FileFormat, str], *paths: PathLike) -> Path:
    """Like load_env, with ``fmt`` forced on every candidate unless it is AUTO."""
    return EnvLoader.from_settings().load(*paths, fmt=fmt)


def load_discovered_env() -> Path:
    """Load the nearest dotenv file above the working directory into os.environ.

    Raises:
        LoadError: No dotenv file was found or it could not be loaded
    """
    return EnvLoader.from_settings().load_discovered()


__all__ = ["EnvLoader", "load_discovered_env", "load_env", "load_env_with_format"]
