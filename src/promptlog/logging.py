"""
Diagnostic logging for promptlog itself.

The user-facing output goes through :class:`~promptlog.logger.Logger`;
this module only configures the package's own ``logging`` tree, which is
silent unless :func:`setup_logging` is called.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Package root logger; every module logger is a child of it.
_root_logger = logging.getLogger("promptlog")
_root_logger.addHandler(logging.NullHandler())

# Level saved by disable()
_saved_level: int | None = None


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Send promptlog's diagnostics to a stream.

    Widgets redraw stdout in place, so diagnostics default to stderr; point
    *stream* at a file to keep them off the terminal entirely.

    Args:
        level: Level name (``"DEBUG"``, ``"INFO"``, ...) or ``logging`` int
        format: Record format, :data:`DEFAULT_FORMAT` when omitted
        stream: Destination stream (defaults to stderr)

    Example:
        from promptlog.logging import setup_logging

        setup_logging("DEBUG", stream=open("promptlog.debug", "w"))
    """
    resolved = _resolve_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    handler.setLevel(resolved)

    _root_logger.handlers.clear()
    _root_logger.addHandler(handler)
    _root_logger.setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """
    Module logger under the ``promptlog`` tree.

    Args:
        name: Dotted module path relative to the package, e.g. ``"tui.keys"``

    Returns:
        The ``promptlog.<name>`` logger
    """
    if name.startswith("promptlog."):
        return logging.getLogger(name)
    return logging.getLogger(f"promptlog.{name}")


def set_level(level: str | int) -> None:
    """Change the diagnostic level without touching handlers."""
    _root_logger.setLevel(_resolve_level(level))


def disable() -> None:
    """Silence all diagnostic logging for promptlog until :func:`enable`."""
    global _saved_level
    if _saved_level is None:
        _saved_level = _root_logger.level
    # Children inherit the effective level of the package root.
    _root_logger.setLevel(logging.CRITICAL + 1)


def enable() -> None:
    """Restore the level in effect before :func:`disable`."""
    global _saved_level
    if _saved_level is not None:
        _root_logger.setLevel(_saved_level)
        _saved_level = None
