"""Fluent builder for formatted Telegram queue messages.

The rendered message format is::

    {emoji} - <i>{job_name}</i>
    {content}

The ``{emoji} - `` prefix is omitted for :attr:`MessageStatus.NONE`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from telegram_queue.messages.queue_message import TelegramQueueMessage
from telegram_queue.messages.status import MessageStatus


@dataclass(slots=True, frozen=True)
class TelegramMessageBuilder:
    """Accumulates the parts of a formatted TelegramQueueMessage.

    Each ``with_*`` call returns an updated builder; :meth:`build` produces
    the message. The job name is placed inside ``<i>`` markup as-is, so it
    should be a short static label.
    """

    chat_id: int
    status: MessageStatus = MessageStatus.NONE
    job_name: str = ""
    content: str = ""
    force_send: bool = False

    @classmethod
    def create(cls, chat_id: int) -> TelegramMessageBuilder:
        """Initialize a new builder with the required chat_id."""
        return cls(chat_id=chat_id)

    def with_status(self, status: MessageStatus) -> TelegramMessageBuilder:
        """Set the status level, which adds an emoji prefix."""
        return replace(self, status=status)

    def with_job_name(self, job_name: str) -> TelegramMessageBuilder:
        """Set the job name, which is formatted in italics."""
        return replace(self, job_name=job_name)

    def with_content(self, content: str) -> TelegramMessageBuilder:
        """Set the message content."""
        return replace(self, content=content)

    def with_force_send(self, force_send: bool) -> TelegramMessageBuilder:
        """Set whether the message bypasses delivery batching."""
        return replace(self, force_send=force_send)

    def render(self) -> str:
        """Render the message text from the accumulated parts."""
        if self.status is MessageStatus.NONE:
            status_prefix = ""
        else:
            status_prefix = f"{self.status.emoji} - "

        return f"{status_prefix}<i>{self.job_name}</i>\n{self.content}"

    def build(self) -> TelegramQueueMessage:
        """Build the TelegramQueueMessage with the rendered text."""
        return TelegramQueueMessage(
            chat_id=self.chat_id,
            message=self.render(),
            force_send=self.force_send,
        )


def telegram_msg(
    chat_id: int,
    status: MessageStatus | str,
    job: str,
    content: str,
    *args: object,
    force_send: bool = False,
) -> TelegramQueueMessage:
    """Create a formatted TelegramQueueMessage in one call.

    Positional ``args`` are applied to ``content`` with :meth:`str.format`;
    without them the content is used verbatim.

    Example:
        >>> msg = telegram_msg(123, "error", "ftp", "failed: {}", "timeout")
        >>> msg.message
        '🚨 - <i>ftp</i>\\nfailed: timeout'

    Raises:
        ValueError: If ``status`` is a string that names no status
    """
    text = content.format(*args) if args else content
    return (
        TelegramMessageBuilder.create(chat_id)
        .with_status(MessageStatus.parse(status))
        .with_job_name(job)
        .with_content(text)
        .with_force_send(force_send)
        .build()
    )
