"""
Redraw controller for interactive widgets.

Owns the cursor choreography around a widget's screen region: save and
hide before the first pass, restore and clear before every later pass,
and collapse everything into one permanent summary line on commit.
"""

from __future__ import annotations

from promptlog.logging import get_logger
from promptlog.tui import ansi, styles
from promptlog.tui.terminal import OutputSink

logger = get_logger("tui.renderer")


def message_line_count(text: str) -> int:
    """Number of line breaks inside *text*."""
    return text.count("\n")


def line_reset_prefix(prompt_text: str) -> str:
    """
    Prefix that moves a line-mode prompt back to its first line.

    After the user pressed Enter the cursor sits one line below the prompt:
    go up one line and clear it, then go up once more for every line break
    inside *prompt_text*.
    """
    prefix = f"{ansi.cursor_up()}{ansi.clear_line()}"
    lines = message_line_count(prompt_text)
    if lines > 0:
        prefix += ansi.cursor_up(lines)
    return prefix


def summary_value(text: str) -> str:
    """Style used for the committed answer."""
    return styles.dim(styles.light_cyan(text))


class RedrawController:
    """
    Redraws a message plus a widget body in place.

    Parameters
    ----------
    stdout:
        Output sink for all writes.
    message:
        Prompt message shown above the body; may span several lines.
    """

    def __init__(self, stdout: OutputSink, message: str) -> None:
        self._stdout = stdout
        self._message = message
        self._passes = 0

    @property
    def passes(self) -> int:
        """Number of render passes performed so far."""
        return self._passes

    def render(self, lines: list[str]) -> None:
        """Save and hide the cursor, then write the message and body."""
        out = self._stdout
        out.write(ansi.cursor_save())
        out.write(ansi.hide_cursor())
        out.writeln(self._message)
        for index, line in enumerate(lines):
            if index:
                out.write("\n")
            out.write(line)
        self._passes += 1

    def rerender(self, lines: list[str]) -> None:
        """Return to the saved position, clear, and render again."""
        self._stdout.write(ansi.cursor_restore())
        self._stdout.write(ansi.clear_line())
        self.render(lines)

    def commit(self, summary: str) -> None:
        """Replace the region with ``message summary`` and show the cursor."""
        out = self._stdout
        out.write(ansi.cursor_restore())
        out.write(ansi.clear_screen_down())
        out.write(f"{self._message} ")
        out.writeln(summary_value(summary))
        out.write(ansi.show_cursor())
        logger.debug("Committed widget after %d render passes", self._passes)
