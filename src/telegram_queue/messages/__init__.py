"""Queue message model, status vocabulary and message builder."""

from __future__ import annotations

from telegram_queue.messages.builder import TelegramMessageBuilder, telegram_msg
from telegram_queue.messages.queue_message import QueueMessageDecodeError, TelegramQueueMessage
from telegram_queue.messages.status import MessageStatus

__all__ = [
    "MessageStatus",
    "QueueMessageDecodeError",
    "TelegramMessageBuilder",
    "TelegramQueueMessage",
    "telegram_msg",
]
