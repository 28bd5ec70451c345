"""Tests for the queue message model and its wire format."""

from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from telegram_queue.messages.queue_message import QueueMessageDecodeError, TelegramQueueMessage


@pytest.mark.unit
class TestTelegramQueueMessage:
    """Test construction and in-place sanitization."""

    def test_construct_by_field_name(self) -> None:
        """Messages can be constructed with Python field names."""
        message = TelegramQueueMessage(chat_id=42, message="hello", force_send=True)

        assert message.chat_id == 42
        assert message.message == "hello"
        assert message.force_send is True

    def test_construct_by_alias(self) -> None:
        """Messages can be constructed with wire field names."""
        message = TelegramQueueMessage.model_validate({"chatId": 5, "message": "x", "forceSend": False})

        assert message.chat_id == 5

    def test_sanitize_message_in_place(self) -> None:
        """sanitize_message replaces only the message text."""
        message = TelegramQueueMessage(chat_id=1, message="<b>bold</b> and more", force_send=True)

        message.sanitize_message(10)

        assert message.message == "<b>bold&lt;/b..."
        assert message.chat_id == 1
        assert message.force_send is True

    def test_sanitize_built_message_keeps_label_markup(self) -> None:
        """The italic label of a built message survives sanitization."""
        message = TelegramQueueMessage.builder(42).with_job_name("ftp").with_content("x > y").build()

        message.sanitize_message(4096)

        assert message.message == "<i>ftp</i>\nx &gt; y"

    def test_str(self) -> None:
        """String form shows routing fields but not the text."""
        message = TelegramQueueMessage(chat_id=3, message="secret text", force_send=False)

        assert str(message) == "TelegramQueueMessage(chat_id=3, force_send=False)"

    def test_chat_id_must_be_int(self) -> None:
        """Strict validation rejects a numeric string chat ID."""
        with pytest.raises(ValidationError):
            _ = TelegramQueueMessage(chat_id="42", message="x", force_send=False)  # pyright: ignore[reportArgumentType]


@pytest.mark.unit
class TestWireFormat:
    """Test JSON encoding and decoding under the wire field names."""

    def test_to_wire_uses_aliases(self) -> None:
        """to_wire keys are chatId, message and forceSend."""
        message = TelegramQueueMessage(chat_id=-100, message="hi", force_send=True)

        assert message.to_wire() == {"chatId": -100, "message": "hi", "forceSend": True}

    def test_to_json(self) -> None:
        """to_json produces the wire document."""
        message = TelegramQueueMessage(chat_id=42, message="🚨 - <i>ftp</i>\nfailed", force_send=False)

        assert json.loads(message.to_json()) == {
            "chatId": 42,
            "message": "🚨 - <i>ftp</i>\nfailed",
            "forceSend": False,
        }

    def test_from_json(self) -> None:
        """from_json decodes a producer's payload."""
        message = TelegramQueueMessage.from_json('{"chatId": 42, "message": "hello", "forceSend": true}')

        assert message == TelegramQueueMessage(chat_id=42, message="hello", force_send=True)

    def test_from_json_bytes(self) -> None:
        """Byte payloads are accepted."""
        message = TelegramQueueMessage.from_json(b'{"chatId": 1, "message": "x", "forceSend": false}')

        assert message.chat_id == 1

    def test_from_json_ignores_unknown_fields(self) -> None:
        """Extra fields from producers are ignored."""
        message = TelegramQueueMessage.from_json('{"chatId": 1, "message": "x", "forceSend": false, "retries": 3}')

        assert message.to_wire() == {"chatId": 1, "message": "x", "forceSend": False}

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            "[]",
            '{"chatId": 1, "message": "x"}',
            '{"chatId": "1", "message": "x", "forceSend": false}',
            '{"chatId": 1, "message": 5, "forceSend": false}',
            '{"chatId": 1, "message": "x", "forceSend": "yes"}',
        ],
    )
    def test_from_json_invalid(self, payload: str) -> None:
        """Malformed payloads raise QueueMessageDecodeError."""
        with pytest.raises(QueueMessageDecodeError) as exc_info:
            _ = TelegramQueueMessage.from_json(payload)

        assert exc_info.value.validation_error is not None
        assert isinstance(exc_info.value, ValueError)

    def test_from_json_error_names_fields(self) -> None:
        """The error message lists the offending fields."""
        with pytest.raises(QueueMessageDecodeError, match="forceSend"):
            _ = TelegramQueueMessage.from_json('{"chatId": 1, "message": "x"}')

    def test_from_json_invalid_utf8_bytes(self) -> None:
        """Bytes that are not valid UTF-8 raise QueueMessageDecodeError."""
        with pytest.raises(QueueMessageDecodeError):
            _ = TelegramQueueMessage.from_json(b'{"chatId": 1, "message": "\xff\xfe", "forceSend": false}')

    def test_decode_failure_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """Decode failures are left to the caller to report above DEBUG."""
        caplog.set_level(logging.DEBUG, logger="telegram_queue.messages.queue_message")

        with pytest.raises(QueueMessageDecodeError):
            _ = TelegramQueueMessage.from_json("not json")

        records = [r for r in caplog.records if r.name == "telegram_queue.messages.queue_message"]
        assert [r.levelno for r in records] == [logging.DEBUG]
        assert records[0].getMessage() == "Failed to decode queue message"
