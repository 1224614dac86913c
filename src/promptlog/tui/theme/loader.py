"""Theme construction from style definitions."""
from __future__ import annotations

from collections.abc import Mapping

from promptlog.errors import ConfigError
from promptlog.tui import styles
from promptlog.tui.theme.models import CATEGORIES, LogTheme


def theme_from_definitions(definitions: Mapping[str, str]) -> LogTheme:
    """Build a :class:`LogTheme` from category -> rich style definition.

    Example::

        theme_from_definitions({"info": "cyan", "warn": "bold magenta"})

    Raises :class:`~promptlog.errors.ConfigError` for an unknown category
    or a definition rich cannot parse.
    """
    overrides = {}
    for category, definition in definitions.items():
        if category not in CATEGORIES:
            raise ConfigError(
                f"Unknown theme category {category!r}; expected one of {', '.join(CATEGORIES)}"
            )
        if not isinstance(definition, str) or not styles.is_valid_definition(definition):
            raise ConfigError(f"Invalid style definition for {category!r}: {definition!r}")
        overrides[category] = styles.from_definition(definition)
    return LogTheme(**overrides)
