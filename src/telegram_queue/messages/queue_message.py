"""Queue message model exchanged with the Telegram delivery queue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, override

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from telegram_queue.formatting.html import sanitize_html

if TYPE_CHECKING:
    from telegram_queue.messages.builder import TelegramMessageBuilder

logger = logging.getLogger(__name__)


class QueueMessageDecodeError(ValueError):
    """Raised when a queue payload cannot be decoded into a message."""

    def __init__(self, message: str, validation_error: ValidationError | None = None) -> None:
        """Initialize QueueMessageDecodeError.

        Args:
            message: Error message
            validation_error: Original pydantic ValidationError
        """
        super().__init__(message)
        self.validation_error: ValidationError | None = validation_error


class TelegramQueueMessage(BaseModel):
    """A message received from the queue to be sent to Telegram.

    Serialized with the wire names ``chatId``, ``message`` and ``forceSend``.
    """

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        populate_by_name=True,
        strict=True,
        extra="ignore",
    )

    chat_id: Annotated[
        int,
        Field(
            alias="chatId",
            description="Target chat or channel identifier",
        ),
    ]
    message: Annotated[
        str,
        Field(
            description="Message body, Telegram HTML once sanitized",
        ),
    ]
    force_send: Annotated[
        bool,
        Field(
            alias="forceSend",
            description="Bypass batching or suppression in the delivery service",
        ),
    ]

    @classmethod
    def builder(cls, chat_id: int) -> TelegramMessageBuilder:
        """Return a builder for a formatted message to ``chat_id``."""
        # Import here to avoid circular dependency at module level
        from telegram_queue.messages.builder import TelegramMessageBuilder

        return TelegramMessageBuilder.create(chat_id)

    def sanitize_message(self, max_message_length: int) -> None:
        """Sanitize the message text in place for safe Telegram display.

        The text is trimmed to ``max_message_length`` characters (``...`` is
        appended when something was cut), HTML-escaped, and the allow-listed
        formatting tags are re-enabled. See
        :func:`telegram_queue.formatting.html.sanitize_html`.

        Args:
            max_message_length: Maximum number of characters to keep
        """
        self.message = sanitize_html(self.message, max_message_length)

    def to_wire(self) -> dict[str, object]:
        """Return the message as a dict keyed by wire field names."""
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        """Serialize the message to its JSON wire form."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> TelegramQueueMessage:
        """Decode a message from its JSON wire form.

        Args:
            data: JSON document with ``chatId``, ``message`` and ``forceSend``

        Returns:
            Decoded message

        Raises:
            QueueMessageDecodeError: If the payload is not valid JSON or does
                not match the wire format
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(loc) for loc in err["loc"]) or "<root>" for err in exc.errors())
            logger.debug(
                "Failed to decode queue message",
                extra={"error_count": exc.error_count(), "fields": fields},
            )
            msg = f"Invalid queue message ({exc.error_count()} error(s) in: {fields})"
            raise QueueMessageDecodeError(msg, validation_error=exc) from exc

    @override
    def __str__(self) -> str:
        """String representation of the message."""
        return f"TelegramQueueMessage(chat_id={self.chat_id}, force_send={self.force_send})"
