"""Telegram Queue - build and sanitize Telegram status messages.

This package composes status messages (emoji, job name, content) for a
Telegram delivery queue and sanitizes their text down to the HTML subset
Telegram renders, bounded to the platform's message length.
"""

from telegram_queue.formatting.html import ALLOWED_TAGS, sanitize_html
from telegram_queue.messages import (
    MessageStatus,
    QueueMessageDecodeError,
    TelegramMessageBuilder,
    TelegramQueueMessage,
    telegram_msg,
)

__all__ = [
    "ALLOWED_TAGS",
    "MessageStatus",
    "QueueMessageDecodeError",
    "TelegramMessageBuilder",
    "TelegramQueueMessage",
    "sanitize_html",
    "telegram_msg",
]
