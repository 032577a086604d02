"""Tests for logging setup."""

from __future__ import annotations

import logging
import sys

import pytest

from sanity_mcp.logging import LOG_FORMAT, configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Restore root logger handlers after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.unit
def test_logs_to_stderr_only():
    configure_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr
    assert handler.formatter._fmt == LOG_FORMAT  # noqa: SLF001


@pytest.mark.unit
def test_adds_file_handler(tmp_path):
    log_file = tmp_path / "server.log"
    configure_logging("INFO", log_file=str(log_file))
    handlers = logging.getLogger().handlers
    assert any(isinstance(h, logging.FileHandler) for h in handlers)

    logging.getLogger("sanity_mcp.test").info("hello")
    for handler in handlers:
        handler.flush()
    assert "hello" in log_file.read_text()


@pytest.mark.unit
def test_quiets_http_loggers():
    configure_logging("DEBUG")
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


@pytest.mark.unit
def test_replaces_existing_handlers():
    configure_logging("INFO")
    configure_logging("INFO")
    assert len(logging.getLogger().handlers) == 1
