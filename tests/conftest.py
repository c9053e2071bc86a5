"""Shared fixtures for envcascade tests."""

from pathlib import Path
from typing import Callable, Dict

import pytest

from envcascade.config import reset_settings
from envcascade.loader import EnvLoader
from envcascade.logger import create_logger


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def environ() -> Dict[str, str]:
    """An isolated environment table."""
    return {}


@pytest.fixture
def loader(environ: Dict[str, str]) -> EnvLoader:
    """EnvLoader writing into the isolated table."""
    return EnvLoader(environ=environ, logger=create_logger("envcascade-test", json_format=False))


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
