"""Theme system for the leveled output methods."""
from __future__ import annotations

from promptlog.tui.theme.defaults import DEFAULT_STYLES, default_style
from promptlog.tui.theme.loader import theme_from_definitions
from promptlog.tui.theme.models import CATEGORIES, LogTheme

__all__ = [
    "CATEGORIES",
    "DEFAULT_STYLES",
    "LogTheme",
    "default_style",
    "theme_from_definitions",
]
