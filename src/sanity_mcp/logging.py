"""Logging setup shared by the server entry point."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s — %(message)s"

_NOISY_LOGGERS = ("httpx", "httpcore", "mcp", "dateparser", "tzlocal")


def configure_logging(level: str = "INFO", *, log_file: str | None = None) -> None:
    """Route application logs to stderr and, optionally, a log file.

    Stdout carries the MCP stdio transport, so nothing may be logged there.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
