"""Command-line interface for telegram-queue."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import BinaryIO

import click

from telegram_queue.core.config import ConfigurationError, MainConfig, load_config
from telegram_queue.messages import MessageStatus, QueueMessageDecodeError, TelegramQueueMessage
from telegram_queue.utils.logging import configure_logging, correlation_id_context

logger = logging.getLogger(__name__)

try:
    __version__ = version("telegram-queue")
except PackageNotFoundError:
    __version__ = "unknown"

VALID_CONFIG_EXTENSIONS = {".yaml", ".yml"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

EXIT_SKIPPED_MESSAGES = 1


def validate_config_path(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Validate configuration file path.

    Raises:
        click.BadParameter: If the path is a directory or not a YAML file
    """
    if value is None:
        return value

    if value.exists() and value.is_dir():
        raise click.BadParameter("Configuration path must be a file, not a directory")

    if value.suffix.lower() not in VALID_CONFIG_EXTENSIONS:
        extensions_str = ", ".join(sorted(VALID_CONFIG_EXTENSIONS))
        raise click.BadParameter(f"Invalid configuration file extension. Supported extensions: {extensions_str}")

    return value


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level to upper case.

    Raises:
        click.BadParameter: If the level is unknown
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}')

    return normalized_value


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    default=None,
    callback=validate_config_path,
    help="YAML configuration file. Built-in defaults are used when omitted.",
)
@click.option(
    "--log-level",
    "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Logging verbosity level (overrides application.log_level)",
)
@click.version_option(version=__version__, prog_name="telegram-queue")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, log_level: str | None) -> None:
    """Telegram Queue - build and sanitize Telegram status messages.

    Messages are exchanged as JSON objects with the fields chatId, message
    and forceSend, one per line.

    Examples:

        # Build an error message for chat 42
        telegram-queue build --chat-id 42 --status error --job ftp "failed: timeout"

        # Sanitize queued messages before delivery
        telegram-queue sanitize queue.jsonl
    """
    try:
        main_config = load_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    configure_logging(
        log_level=log_level or main_config.application.log_level,
        enable_syslog=main_config.application.syslog_enabled,
    )
    ctx.obj = main_config


@cli.command()
@click.option("--chat-id", type=int, default=None, help="Target chat ID (default: telegram.default_chat_id)")
@click.option(
    "--status",
    "-s",
    type=click.Choice([status.value for status in MessageStatus], case_sensitive=False),
    default=MessageStatus.NONE.value,
    show_default=True,
    help="Status level, shown as an emoji prefix",
)
@click.option("--job", "-j", default="", help="Job name, shown in italics")
@click.option("--force-send", is_flag=True, help="Bypass batching in the delivery service")
@click.option("--sanitize/--no-sanitize", default=False, show_default=True, help="Sanitize the rendered text")
@click.option("--max-length", type=click.IntRange(min=1), default=None, help="Override telegram.max_message_length")
@click.argument("content", nargs=-1)
@click.pass_obj
def build(
    config: MainConfig,
    chat_id: int | None,
    status: str,
    job: str,
    force_send: bool,
    sanitize: bool,
    max_length: int | None,
    content: tuple[str, ...],
) -> None:
    """Build a formatted queue message and print it as JSON.

    CONTENT words are joined with single spaces.
    """
    target = chat_id if chat_id is not None else config.telegram.default_chat_id
    if target is None:
        raise click.UsageError("No chat ID given: pass --chat-id or set telegram.default_chat_id")

    message = (
        TelegramQueueMessage.builder(target)
        .with_status(MessageStatus.parse(status))
        .with_job_name(job)
        .with_content(" ".join(content))
        .with_force_send(force_send)
        .build()
    )

    if sanitize:
        message.sanitize_message(max_length or config.telegram.max_message_length)

    logger.debug("Built queue message", extra={"chat_id": message.chat_id, "sanitized": sanitize})
    click.echo(message.to_json())


@cli.command(name="sanitize")
@click.option("--max-length", type=click.IntRange(min=1), default=None, help="Override telegram.max_message_length")
@click.argument("input_file", type=click.File("rb"), default="-")
@click.pass_context
def sanitize_command(ctx: click.Context, max_length: int | None, input_file: BinaryIO) -> None:
    """Sanitize JSON-lines queue messages from INPUT_FILE (default: stdin).

    Each line is decoded as UTF-8 JSON on its own. Each valid line is
    written to stdout with its message text sanitized. Lines that cannot be
    decoded (including invalid UTF-8) are reported and skipped; the exit
    status is 1 when any line was skipped.
    """
    config: MainConfig = ctx.obj  # pyright: ignore[reportAny]  # click context boundary
    limit = max_length or config.telegram.max_message_length

    processed = 0
    skipped = 0
    for line_number, line in enumerate(input_file, start=1):
        if not line.strip():
            continue

        with correlation_id_context(f"line-{line_number}"):
            try:
                message = TelegramQueueMessage.from_json(line)
            except QueueMessageDecodeError as exc:
                skipped += 1
                logger.warning(
                    "Skipping undecodable queue message on line %d: %s",
                    line_number,
                    exc,
                    extra={"line_number": line_number},
                )
                continue

            message.sanitize_message(limit)
            logger.debug(
                "Sanitized queue message",
                extra={"chat_id": message.chat_id, "force_send": message.force_send},
            )
            click.echo(message.to_json())
            processed += 1

    logger.info("Sanitized %d queue message(s), skipped %d", processed, skipped)
    if skipped:
        ctx.exit(EXIT_SKIPPED_MESSAGES)
