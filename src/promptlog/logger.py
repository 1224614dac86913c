"""
The :class:`Logger` facade.

Leveled output methods are a thin filter-and-format layer over the output
sinks.  The interactive methods each own the terminal for the duration of
one call and return the user's answer.
"""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Protocol, TypeVar

from promptlog.errors import NoTerminalAttachedError
from promptlog.levels import CATEGORY_LEVELS, Level, should_emit
from promptlog.logging import get_logger
from promptlog.progress import Progress, ProgressOptions
from promptlog.tui import ansi, styles
from promptlog.tui.component import Component
from promptlog.tui.input_widget import (
    HIDDEN_MASK,
    MaskedBuffer,
    MultiValueBuffer,
    parse_confirmation,
    yes_no_hint,
)
from promptlog.tui.keybindings import KeybindingsManager
from promptlog.tui.keys import KeyStroke
from promptlog.tui.renderer import RedrawController, line_reset_prefix, summary_value
from promptlog.tui.select_list import MultiSelect, SingleSelect
from promptlog.tui.styles import StyleFunction
from promptlog.tui.terminal import InputSource, OutputSink, Terminal
from promptlog.tui.theme import LogTheme, default_style

if TYPE_CHECKING:
    from promptlog.config import LoggerConfig

logger = get_logger("logger")

T = TypeVar("T")
R = TypeVar("R")

# Conventional exit status for a process ended by SIGINT.
INTERRUPT_EXIT_CODE = 130

_CTRL_C_BYTE = 0x03


class KeyReader(Protocol):
    def read_key(self) -> KeyStroke: ...


class Logger:
    """
    Leveled output plus interactive prompts.

    Parameters
    ----------
    level:
        Initial verbosity; messages below it are dropped.
    theme:
        Per-category style overrides.
    progress_options:
        Default options for :meth:`progress`.
    stdout, stderr:
        Output sinks.  Default to sinks over ``sys.stdout`` / ``sys.stderr``.
    stdin:
        Input source for line and byte reads.
    terminal:
        Keystroke reader for the key-driven widgets, a :class:`Terminal`
        over *stdin* by default.
    keybindings:
        Action bindings shared by all widgets.
    exit_fn:
        Called with ``130`` when Ctrl+C is pressed, ``sys.exit`` by default.
    clock:
        Monotonic clock handed to :class:`Progress`.
    """

    def __init__(
        self,
        level: Level | str | int = Level.INFO,
        theme: LogTheme | None = None,
        progress_options: ProgressOptions | None = None,
        stdout: OutputSink | None = None,
        stderr: OutputSink | None = None,
        stdin: InputSource | None = None,
        terminal: KeyReader | None = None,
        keybindings: KeybindingsManager | None = None,
        exit_fn: Callable[[int], object] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.level = Level.parse(level)
        self.theme = theme or LogTheme()
        self.progress_options = progress_options or ProgressOptions()
        self._stdout = stdout or OutputSink()
        self._stderr = stderr or OutputSink(sys.stderr)
        self._stdin = stdin or InputSource()
        self._terminal: KeyReader = terminal or Terminal(self._stdin)
        self._keybindings = keybindings or KeybindingsManager()
        self._exit = exit_fn or sys.exit
        self._clock = clock
        self._queue: list[str] = []

    @classmethod
    def from_config(cls, config: LoggerConfig, **kwargs: object) -> Logger:
        """Build a logger from a :class:`~promptlog.config.LoggerConfig`.

        Extra keyword arguments (sinks, terminal, ...) are passed through.
        """
        return cls(
            level=config.level,
            theme=config.build_theme(),
            progress_options=config.build_progress_options(),
            keybindings=config.build_keybindings(),
            **kwargs,  # type: ignore[arg-type]
        )

    # ------------------------------------------------------------------
    # Leveled output
    # ------------------------------------------------------------------

    def write(self, message: str) -> None:
        """Write *message* to stdout as is, whatever the level."""
        self._stdout.write(message)

    def info(self, message: str, *, style: StyleFunction | None = None) -> None:
        self._emit("info", message, style, self._stdout)

    def detail(self, message: str, *, style: StyleFunction | None = None) -> None:
        self._emit("detail", message, style, self._stdout)

    def success(self, message: str, *, style: StyleFunction | None = None) -> None:
        self._emit("success", message, style, self._stdout)

    def warn(
        self,
        message: str,
        *,
        tag: str = "WARN",
        style: StyleFunction | None = None,
    ) -> None:
        """Write a warning to stderr as ``[tag] message``; an empty tag drops the prefix."""
        text = f"[{tag}] {message}" if tag else message
        self._emit("warn", text, style, self._stderr)

    def err(self, message: str, *, style: StyleFunction | None = None) -> None:
        self._emit("err", message, style, self._stderr)

    def alert(self, message: str, *, style: StyleFunction | None = None) -> None:
        self._emit("alert", message, style, self._stderr)

    def delayed(self, message: str) -> None:
        """
        Queue *message* for the next :meth:`flush`.

        The info level check happens here, not at flush time.
        """
        if should_emit(self.level, CATEGORY_LEVELS["info"]):
            self._queue.append(message)

    def flush(self, print_fn: Callable[[str], object] | None = None) -> None:
        """Write every queued message in order, then empty the queue."""
        pending, self._queue = self._queue, []
        for message in pending:
            if print_fn is not None:
                print_fn(message)
            else:
                self._stdout.writeln(message)

    def _emit(
        self,
        category: str,
        message: str,
        style: StyleFunction | None,
        sink: OutputSink,
    ) -> None:
        if not should_emit(self.level, CATEGORY_LEVELS[category]):
            return
        sink.writeln(self._resolve_style(category, style)(message))

    def _resolve_style(self, category: str, style: StyleFunction | None) -> StyleFunction:
        if style is not None:
            return style
        return self.theme.get(category) or default_style(category)

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def progress(self, message: str, *, options: ProgressOptions | None = None) -> Progress:
        """Start an animated progress indicator and return its handle."""
        return Progress(
            message,
            self._stdout,
            level=self.level,
            options=options or self.progress_options,
            clock=self._clock,
        )

    # ------------------------------------------------------------------
    # Line prompts
    # ------------------------------------------------------------------

    def prompt(
        self,
        message: str,
        *,
        default_value: str | None = None,
        hidden: bool = False,
    ) -> str:
        """
        Ask for one line of text.

        Parameters
        ----------
        message:
            Question text; may span several lines.
        default_value:
            Returned when the response is empty.  A non-empty default is
            shown as a muted ``(default)`` annotation.
        hidden:
            Read without echo and show ``******`` in the summary.

        Raises
        ------
        NoTerminalAttachedError
            After writing the prompt, when stdout is not a terminal.
        """
        annotation = f" {styles.dark_gray(f'({default_value})')}" if default_value else ""
        prompt_text = f"{message}{annotation} "
        self._stdout.write(prompt_text)
        self._require_terminal()

        response = self._read_hidden() if hidden else self._read_line()
        if not response and default_value is not None:
            response = default_value

        shown = HIDDEN_MASK if hidden else response
        self._stdout.writeln(
            f"{line_reset_prefix(prompt_text)}{prompt_text}{summary_value(shown)}"
        )
        return response

    def confirm(self, message: str, *, default_value: bool = False) -> bool:
        """
        Ask a yes/no question.

        Unrecognised, empty or undecodable responses give *default_value*.
        """
        prompt_text = f"{message} {styles.dark_gray(f'({yes_no_hint(default_value)})')} "
        self._stdout.write(prompt_text)
        self._require_terminal()

        try:
            answer = parse_confirmation(self._read_line())
        except UnicodeDecodeError:
            logger.debug("Undecodable confirm response, using default")
            answer = None
        if answer is None:
            answer = default_value

        self._stdout.writeln(
            f"{line_reset_prefix(prompt_text)}{prompt_text}"
            f"{summary_value('Yes' if answer else 'No')}"
        )
        return answer

    def prompt_any(self, message: str, *, separator: str = ",") -> list[str]:
        """
        Ask for a list of values typed on one line.

        Returns the non-empty tokens between *separator* characters.
        """
        buffer = MultiValueBuffer(separator, keybindings=self._keybindings)
        self._stdout.write(f"{message} ")
        self._require_terminal()

        while not buffer.done:
            echo = buffer.feed(self._read_key())
            if echo:
                self._stdout.write(echo)
        self._stdout.writeln()
        return buffer.tokens

    def _read_line(self) -> str:
        return (self._stdin.read_line() or "").strip()

    def _read_hidden(self) -> str:
        buffer = MaskedBuffer()
        with self._stdin.raw_mode():
            while not buffer.done:
                byte = self._stdin.read_byte()
                if byte == _CTRL_C_BYTE:
                    self._interrupt()
                buffer.feed(byte)
        self._stdout.writeln()
        return buffer.value

    # ------------------------------------------------------------------
    # Selection widgets
    # ------------------------------------------------------------------

    def choose_one(
        self,
        message: str,
        choices: Sequence[T],
        *,
        default_value: T | None = None,
        display: Callable[[T], str] | None = None,
    ) -> T:
        """Let the user pick one of *choices* with the arrow keys."""
        widget = SingleSelect(
            choices,
            default_value=default_value,
            display=display,
            keybindings=self._keybindings,
        )
        return self._run_widget(message, widget)

    def choose_any(
        self,
        message: str,
        choices: Sequence[T],
        *,
        default_values: Iterable[T] | None = None,
        display: Callable[[T], str] | None = None,
    ) -> list[T]:
        """Let the user toggle any subset of *choices*; returned in choice order."""
        widget = MultiSelect(
            choices,
            default_values=default_values,
            display=display,
            keybindings=self._keybindings,
        )
        return self._run_widget(message, widget)

    def _run_widget(self, message: str, widget: Component[R]) -> R:
        if not self._stdout.has_terminal:
            self._stdout.writeln(message)
            raise NoTerminalAttachedError()

        redraw = RedrawController(self._stdout, message)
        logger.debug("Starting %s", type(widget).__name__)
        redraw.render(widget.render())
        while not widget.done:
            changed = widget.handle_input(self._read_key())
            if changed and not widget.done:
                redraw.rerender(widget.render())
        redraw.commit(widget.summary())
        return widget.result

    # ------------------------------------------------------------------
    # Terminal helpers
    # ------------------------------------------------------------------

    def _require_terminal(self) -> None:
        if not self._stdout.has_terminal:
            raise NoTerminalAttachedError()

    def _read_key(self) -> KeyStroke:
        key = self._terminal.read_key()
        if key.is_interrupt or self._keybindings.matches(key, "interrupt"):
            self._interrupt()
        return key

    def _interrupt(self) -> None:
        logger.debug("Interrupted, exiting with %d", INTERRUPT_EXIT_CODE)
        self._stdout.write(ansi.show_cursor())
        self._exit(INTERRUPT_EXIT_CODE)
        # Reached only when the exit collaborator returns.
        raise SystemExit(INTERRUPT_EXIT_CODE)
