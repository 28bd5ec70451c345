"""Allow running the CLI with ``python -m telegram_queue``."""

from telegram_queue.app.cli import cli

if __name__ == "__main__":
    cli()
