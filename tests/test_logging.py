# tests/test_logging.py
from __future__ import annotations

import logging

from rich.logging import RichHandler

from falling_blocks.utils.logging import setup_logger


def test_setup_logger_uses_rich_by_default() -> None:
    logger = setup_logger(name="falling_blocks.test.rich", level="debug")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_setup_logger_plain_stream_handler() -> None:
    logger = setup_logger(name="falling_blocks.test.plain", use_rich=False, level="warning")
    (handler,) = logger.handlers
    assert type(handler) is logging.StreamHandler
    assert logger.level == logging.WARNING


def test_setup_logger_replaces_handlers_and_defaults_unknown_level() -> None:
    setup_logger(name="falling_blocks.test.repeat")
    logger = setup_logger(name="falling_blocks.test.repeat", level="chatty")
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
