"""Status levels used to prefix queue messages with an emoji."""

from __future__ import annotations

from enum import Enum
from typing import Final


class MessageStatus(Enum):
    """Status level of a message, used only for visual formatting."""

    NONE = "none"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    OK = "ok"

    @property
    def emoji(self) -> str:
        """Return the emoji associated with the status (empty for NONE)."""
        return _EMOJI[self]

    @classmethod
    def parse(cls, value: str | MessageStatus) -> MessageStatus:
        """Resolve a status from an enum member or its case-insensitive name.

        Args:
            value: Status member or name such as ``"error"`` or ``"Warn"``

        Returns:
            Matching MessageStatus

        Raises:
            ValueError: If the name does not match any status
        """
        if isinstance(value, MessageStatus):
            return value

        normalized = value.strip().lower()
        for status in cls:
            if status.value == normalized:
                return status

        valid = ", ".join(status.value for status in cls)
        msg = f"Unknown message status '{value}'. Valid options: {valid}"
        raise ValueError(msg)


_EMOJI: Final[dict[MessageStatus, str]] = {
    MessageStatus.NONE: "",
    MessageStatus.INFO: "ℹ️",
    MessageStatus.WARN: "⚠️",
    MessageStatus.ERROR: "🚨",
    MessageStatus.OK: "✅",
}
