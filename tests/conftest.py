"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Drop root handlers added by configure_logging and restore the level."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    try:
        yield
    finally:
        for handler in list(root_logger.handlers):
            if handler not in handlers:
                root_logger.removeHandler(handler)
        root_logger.setLevel(level)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper writing YAML configuration text to a temporary file."""

    def _write(content: str, name: str = "telegram-queue.yaml") -> Path:
        path = tmp_path / name
        _ = path.write_text(content, encoding="utf-8")
        return path

    return _write
