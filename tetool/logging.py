"""Logger setup for tetool runs."""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "tetool"

CONSOLE_FORMAT = "[tetool] %(levelname)s %(message)s"
VERBOSE_CONSOLE_FORMAT = "[tetool:%(component)s] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ComponentFilter(logging.Filter):
    """Expose the part of the logger name below ``tetool`` as ``%(component)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        _, _, component = record.name.partition(".")
        record.component = component or "main"
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``tetool.<name>``, or the package logger when no name is given."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(_ComponentFilter())
    logger.addHandler(handler)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send tetool records to stderr, and to ``log_file`` when given.

    Calling this again replaces the handlers installed by an earlier call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(
        logger,
        logging.StreamHandler(),
        level,
        VERBOSE_CONSOLE_FORMAT if verbose else CONSOLE_FORMAT,
    )
    if log_file is not None:
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT)
    return logger


__all__ = ["configure_logging", "get_logger"]
