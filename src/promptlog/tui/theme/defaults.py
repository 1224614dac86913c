"""
Built-in category styles.

``info`` is left unstyled; every other category has a colour.
"""

from __future__ import annotations

from promptlog.tui import styles
from promptlog.tui.styles import StyleFunction


def _identity(text: str) -> str:
    return text


def _warn(text: str) -> str:
    return styles.yellow(styles.bold(text))


def _alert(text: str) -> str:
    return styles.background_red(styles.bold(styles.white(text)))


DEFAULT_STYLES: dict[str, StyleFunction] = {
    "info": _identity,
    "warn": _warn,
    "err": styles.light_red,
    "alert": _alert,
    "detail": styles.dark_gray,
    "success": styles.light_green,
}


def default_style(category: str) -> StyleFunction:
    """Return the built-in style for *category*."""
    return DEFAULT_STYLES[category]
