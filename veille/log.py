"""Logging setup."""

import logging

from rich.logging import RichHandler

QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "postgrest")


def configure_logging(level: str = "INFO") -> None:
    """Route standard logging through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
