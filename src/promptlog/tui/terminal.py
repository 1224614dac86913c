"""
Terminal boundary: the output sink, the input source and key reading.

Widgets only talk to these three objects, which keeps them testable with
recording fakes (see ``tests/conftest.py``).
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from rich.console import Console

from promptlog.tui.keys import KeyStroke, KeystrokeDecoder


class OutputSink:
    """
    Writable side of the terminal.

    Terminal detection is delegated to a :class:`rich.console.Console`
    bound to the same stream.

    Parameters
    ----------
    stream:
        Text stream to write to, defaults to ``sys.stdout``.
    console:
        Pre-built console; *stream* is ignored when given.
    """

    def __init__(self, stream: TextIO | None = None, console: Console | None = None) -> None:
        self._console = console or Console(file=stream or sys.stdout)

    @property
    def has_terminal(self) -> bool:
        return self._console.is_terminal

    @property
    def supports_ansi_escapes(self) -> bool:
        return self._console.is_terminal and not self._console.is_dumb_terminal

    @property
    def terminal_columns(self) -> int:
        return self._console.width

    def write(self, text: str) -> None:
        stream = self._console.file
        stream.write(text)
        stream.flush()

    def writeln(self, text: str = "") -> None:
        self.write(f"{text}\n")


class InputSource:
    """
    Readable side of the terminal.

    Parameters
    ----------
    stream:
        Text stream to read from, defaults to ``sys.stdin``.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdin

    def read_line(self) -> str | None:
        """
        Read one line without its terminator, ``None`` at end of input.

        Raises
        ------
        UnicodeDecodeError
            If the line is not valid in the stream's encoding.
        """
        line = self._stream.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def read_byte(self) -> int:
        """Read one raw byte, bypassing Python's buffering; ``-1`` at end of input."""
        data = os.read(self._stream.fileno(), 1)
        return data[0] if data else -1

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Disable echo and line buffering for the duration of the block (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - just yield
            yield
            return

        try:
            fd = self._stream.fileno()
        except (AttributeError, ValueError, OSError):
            yield
            return
        if not os.isatty(fd):
            yield
            return

        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


class Terminal:
    """
    Reads decoded keystrokes from an :class:`InputSource`.

    Raw mode is entered for each key and left immediately after, so
    output written between keys keeps normal newline translation.
    """

    def __init__(self, stdin: InputSource | None = None) -> None:
        self._stdin = stdin or InputSource()
        self._decoder = KeystrokeDecoder(self._stdin.read_byte)

    def read_key(self) -> KeyStroke:
        with self._stdin.raw_mode():
            return self._decoder.read_key()
