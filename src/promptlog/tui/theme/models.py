"""
Theme data model.

A theme maps each message category to an optional style function.  Missing
entries fall back to the built-in defaults in
:mod:`promptlog.tui.theme.defaults`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from promptlog.tui.styles import StyleFunction

# Categories a theme may style, in display order.
CATEGORIES: list[str] = ["info", "warn", "err", "alert", "detail", "success"]


@dataclass
class LogTheme:
    """
    Per-category style overrides.

    Attributes
    ----------
    info, warn, err, alert, detail, success:
        ``(str) -> str`` style function for the category, or ``None`` to
        use the built-in default.
    """

    info: StyleFunction | None = None
    warn: StyleFunction | None = None
    err: StyleFunction | None = None
    alert: StyleFunction | None = None
    detail: StyleFunction | None = None
    success: StyleFunction | None = None

    def get(self, category: str) -> StyleFunction | None:
        """Return the override for *category*, or ``None`` if absent."""
        if category not in CATEGORIES:
            raise KeyError(category)
        return getattr(self, category)

    def __contains__(self, category: str) -> bool:
        return category in CATEGORIES and getattr(self, category) is not None

    def overridden(self) -> list[str]:
        """Categories that carry an override."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]
