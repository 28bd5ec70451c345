"""Application module for telegram-queue."""

from __future__ import annotations

from telegram_queue.app.cli import cli

__all__ = [
    "cli",
]
