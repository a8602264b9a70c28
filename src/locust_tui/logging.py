"""
Logging utilities for locust-tui.

All engine components log through children of the ``locust_tui`` logger so
a host application can tune or silence the whole package in one place.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("locust_tui")
_root_logger.addHandler(logging.NullHandler())

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Above CRITICAL; child loggers inherit it
_DISABLED_LEVEL = logging.CRITICAL + 1
_level_before_disable: int | None = None


def _coerce_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for the engine.

    Terminal UIs usually own stdout/stderr while drawing, so hosts that keep
    logging on during a session will normally pass *file* and leave the
    stream handler writing to a stream they do not render over.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs

    Example:
        from locust_tui.logging import setup_logging

        setup_logging("DEBUG", file="locust.log")
    """
    level = _coerce_level(level)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    formatter = logging.Formatter(format or DEFAULT_FORMAT)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    _root_logger.addHandler(stream_handler)

    if file:
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "hints", "tooltip")

    Returns:
        Logger instance
    """
    if name.startswith("locust_tui."):
        return logging.getLogger(name)
    return logging.getLogger(f"locust_tui.{name}")


def set_level(level: str | int) -> None:
    """Set the log level for the engine."""
    _root_logger.setLevel(_coerce_level(level))


def disable() -> None:
    """Disable all logging for the engine, child loggers included."""
    global _level_before_disable
    if _level_before_disable is None:
        _level_before_disable = _root_logger.level
    _root_logger.setLevel(_DISABLED_LEVEL)


def enable() -> None:
    """Re-enable logging for the engine at the level it had before."""
    global _level_before_disable
    if _level_before_disable is not None:
        _root_logger.setLevel(_level_before_disable)
        _level_before_disable = None
