"""
Exception types raised by promptlog.
"""

from __future__ import annotations


class PromptLogError(Exception):
    """Base class for all promptlog errors."""


class NoTerminalAttachedError(PromptLogError):
    """
    Raised when an interactive widget needs a terminal and none is attached.

    The prompt text that was already due is written before this is raised.
    """

    def __init__(self, message: str = "No terminal attached to stdout.") -> None:
        super().__init__(message)


class ConfigError(PromptLogError, ValueError):
    """Raised for an invalid :class:`~promptlog.config.LoggerConfig` value."""
