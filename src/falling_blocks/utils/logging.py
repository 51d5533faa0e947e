from __future__ import annotations

import logging

from rich.logging import RichHandler

PLAIN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def _build_handler(use_rich: bool) -> logging.Handler:
    if not use_rich:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        return handler
    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logger(*, name: str, use_rich: bool = True, level: str = "info") -> logging.Logger:
    """Configure ``name`` with a single handler; rich output unless ``use_rich`` is off."""
    logger = logging.getLogger(str(name))
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    logger.addHandler(_build_handler(use_rich))
    return logger


__all__ = ["setup_logger"]
