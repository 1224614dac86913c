"""
Named style functions.

Every style is a pure ``(str) -> str`` wrapper rendered with
:class:`rich.style.Style`, so they can be nested freely and compared in
tests by calling the same function.
"""

from __future__ import annotations

from collections.abc import Callable

from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

StyleFunction = Callable[[str], str]


def from_definition(definition: str) -> StyleFunction:
    """
    Build a style function from a rich style definition.

    Parameters
    ----------
    definition:
        Any string accepted by :meth:`rich.style.Style.parse`, e.g.
        ``"bold yellow"`` or ``"white on red"``.

    Raises
    ------
    rich.errors.StyleSyntaxError
        If *definition* cannot be parsed.
    """
    style = Style.parse(definition)

    def wrap(text: str) -> str:
        return style.render(text, color_system=ColorSystem.STANDARD)

    wrap.__name__ = definition.replace(" ", "_")
    wrap.__doc__ = f"Wrap text in the {definition!r} style."
    return wrap


def is_valid_definition(definition: str) -> bool:
    """Return ``True`` if *definition* parses as a rich style."""
    try:
        Style.parse(definition)
    except StyleSyntaxError:
        return False
    return True


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------

green = from_definition("green")
red = from_definition("red")
yellow = from_definition("yellow")
white = from_definition("white")
light_cyan = from_definition("bright_cyan")
light_green = from_definition("bright_green")
light_red = from_definition("bright_red")
dark_gray = from_definition("bright_black")
background_red = from_definition("on red")

# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------

bold = from_definition("bold")
dim = from_definition("dim")
