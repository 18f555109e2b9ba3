"""Logging utilities for taskdocs commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "taskdocs"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the taskdocs hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the taskdocs logger with console output and an optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[taskdocs] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
