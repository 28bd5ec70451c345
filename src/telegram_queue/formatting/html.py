"""Telegram HTML sanitization.

Telegram renders a small subset of HTML. Message text is bounded to the
configured length, fully escaped, and then a fixed allow-list of simple inline
tags is turned back into live markup:

    >>> sanitize_html("<b>bold</b> and <script>x</script>", 100)
    '<b>bold</b> and &lt;script&gt;x&lt;/script&gt;'

    >>> sanitize_html("<b>bold</b> and more", 10)
    '<b>bold&lt;/b...'

Length is counted in characters (code points) for both the overflow check and
the truncation. Tags with attributes, unknown tags and mixed-case spellings
stay escaped and render as literal text.
"""

from __future__ import annotations

import html
import logging
from typing import Final

logger = logging.getLogger(__name__)

ALLOWED_TAGS: Final[tuple[str, ...]] = (
    "b",
    "strong",
    "i",
    "em",
    "u",
    "ins",
    "s",
    "strike",
    "del",
    "code",
    "pre",
    "blockquote",
    "tg-spoiler",
)

OVERFLOW_MARKER: Final[str] = "..."

_ESCAPED_TAGS: Final[tuple[tuple[str, str], ...]] = tuple(
    pair
    for tag in ALLOWED_TAGS
    for pair in (
        (f"&lt;{tag}&gt;", f"<{tag}>"),
        (f"&lt;/{tag}&gt;", f"</{tag}>"),
    )
)


def escape_text(text: str) -> str:
    """Escape HTML special characters, quotes included.

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text
    """
    return html.escape(text, quote=True)


def enable_allowed_tags(escaped: str) -> str:
    """Turn escaped allow-listed tags back into live markup.

    Every exact ``&lt;tag&gt;`` / ``&lt;/tag&gt;`` occurrence is replaced on its
    own; open and close tags are not checked for balance.

    Args:
        escaped: Text that already went through :func:`escape_text`

    Returns:
        Text with allow-listed tags re-enabled
    """
    for escaped_tag, live_tag in _ESCAPED_TAGS:
        escaped = escaped.replace(escaped_tag, live_tag)
    return escaped


def sanitize_html(text: str, max_length: int) -> str:
    """Bound, escape and selectively re-format text for Telegram HTML.

    Args:
        text: Raw, untrusted message text
        max_length: Maximum number of characters kept from ``text``; negative
            values behave like 0

    Returns:
        Safe message text, suffixed with ``...`` when ``text`` was truncated
    """
    limit = max(max_length, 0)
    overflow = len(text) > limit

    escaped = escape_text(text[:limit])
    if overflow:
        logger.debug(
            "Message truncated",
            extra={"original_length": len(text), "max_length": limit},
        )
        escaped = f"{escaped}{OVERFLOW_MARKER}"

    return enable_allowed_tags(escaped)
