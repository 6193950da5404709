"""Logger hierarchy and handler setup for the implgen command line."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List

ROOT_LOGGER = "implgen"
CONSOLE_FORMAT = "[implgen] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``implgen.<name>``, or the root implgen logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send implgen records to stderr and, when given, append them to ``log_file``.

    Stdout is left to the command result. The file sink always records at
    DEBUG so a build can be inspected after a quiet run.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = []

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers.append(console)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(sink)

    logger = logging.getLogger(ROOT_LOGGER)
    reset_logging(logger)
    logger.setLevel(min(handler.level for handler in handlers))
    logger.propagate = False
    for handler in handlers:
        logger.addHandler(handler)
    return logger


def reset_logging(logger: logging.Logger | None = None) -> None:
    """Detach and close the handlers installed by :func:`configure_logging`."""
    logger = logger or logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


__all__ = ["configure_logging", "get_logger", "reset_logging"]
