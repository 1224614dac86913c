"""
ANSI escape sequences used by the redraw choreography.

Terminals, and the tests, compare these byte for byte, so every widget
builds its output from the helpers below instead of spelling sequences
inline.
"""

from __future__ import annotations

ESC = "\x1b"
CSI = ESC + "["


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------

def cursor_save() -> str:
    """``ESC 7``: remember the position a widget redraws from."""
    return ESC + "7"


def cursor_restore() -> str:
    """``ESC 8``: jump back to the position stored by :func:`cursor_save`."""
    return ESC + "8"


def cursor_up(lines: int | None = None) -> str:
    """
    Move the cursor up.

    ``cursor_up()`` gives the bare ``ESC [A`` form; ``cursor_up(3)`` gives
    ``ESC [3A``.
    """
    return f"{CSI}A" if lines is None else f"{CSI}{lines}A"


def hide_cursor() -> str:
    return CSI + "?25l"


def show_cursor() -> str:
    return CSI + "?25h"


# ---------------------------------------------------------------------------
# Erasing
# ---------------------------------------------------------------------------

def clear_line() -> str:
    """``ESC [2K``: blank the whole line the cursor is on."""
    return CSI + "2K"


def clear_to_line_end() -> str:
    """``ESC [K``: blank from the cursor to the end of the line."""
    return CSI + "K"


def clear_screen_down() -> str:
    """``ESC [J``: blank from the cursor to the end of the screen."""
    return CSI + "J"
