"""Telegram message formatting utilities."""

from __future__ import annotations

from telegram_queue.formatting.html import (
    ALLOWED_TAGS,
    OVERFLOW_MARKER,
    enable_allowed_tags,
    escape_text,
    sanitize_html,
)

__all__ = [
    "ALLOWED_TAGS",
    "OVERFLOW_MARKER",
    "enable_allowed_tags",
    "escape_text",
    "sanitize_html",
]
