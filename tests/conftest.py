"""Shared pytest fixtures for the full sconfig test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest
from loguru import logger


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """Provide a factory writing UTF-8 config files below `tmp_path`."""

    def _write(name: str, content: str) -> Path:
        """Write `content` verbatim to `tmp_path / name` and return the path."""

        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks added by CLI invocations so later tests log nowhere."""

    yield
    logger.remove()
    logger.disable("sconfig")
