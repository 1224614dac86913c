"""
Animated progress indicator.

A :class:`Progress` redraws ``<glyph> <message>... (<elapsed>)`` in place
from a background ticker thread until the caller completes, fails or
cancels it.  A single lock-guarded ``done`` flag is shared by the ticker
and by those terminal transitions, so exactly one final line is written
and nothing is written after it.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from promptlog.levels import Level, should_emit
from promptlog.logging import get_logger
from promptlog.tui import ansi, styles
from promptlog.tui.terminal import OutputSink

logger = get_logger("progress")

DEFAULT_FRAMES: tuple[str, ...] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
DONE_GLYPH = "✓"
FAIL_GLYPH = "✗"


@dataclass(frozen=True)
class ProgressAnimation:
    """
    Spinner frames and tick interval.

    An empty frame sequence disables the spinner; only the elapsed time is
    updated on each tick.
    """

    frames: Sequence[str] = DEFAULT_FRAMES
    interval: float = 0.1

    def __post_init__(self) -> None:
        object.__setattr__(self, "frames", tuple(self.frames))
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")


@dataclass(frozen=True)
class ProgressOptions:
    """Options for :meth:`promptlog.logger.Logger.progress`."""

    animation: ProgressAnimation = field(default_factory=ProgressAnimation)


class Progress:
    """
    Handle for a running progress indicator.

    Parameters
    ----------
    message:
        Text shown after the spinner glyph.
    stdout:
        Output sink.  Without a terminal the first frame is written once
        and no ticker is started.
    level:
        Logger level; output is suppressed above ``Level.INFO``.
    options:
        Animation options.
    clock:
        Monotonic clock in seconds, ``time.monotonic`` by default.
    """

    def __init__(
        self,
        message: str,
        stdout: OutputSink,
        level: Level = Level.INFO,
        options: ProgressOptions | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._message = message
        self._stdout = stdout
        self._level = level
        self._options = options or ProgressOptions()
        self._clock = clock
        self._started_at = clock()

        self._frame = 0
        self._width = 0
        self._done = False
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

        if not stdout.has_terminal:
            frames = self._options.animation.frames
            self._emit(self._line(frames[0] if frames else "", "...", with_time=False))
            return

        self._thread = threading.Thread(
            target=self._run, name="promptlog-progress", daemon=True
        )
        self._thread.start()
        logger.debug("Started progress ticker for %r", message)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def done(self) -> bool:
        """Whether the progress reached a terminal state."""
        return self._done

    @property
    def message(self) -> str:
        return self._message

    @property
    def elapsed(self) -> float:
        """Seconds since the progress started."""
        return self._clock() - self._started_at

    def tick(self) -> None:
        """Advance one frame and redraw.  Called by the ticker thread."""
        with self._lock:
            if self._done:
                return
            frames = self._options.animation.frames
            if frames:
                self._frame = (self._frame + 1) % len(frames)
            self._render_frame()

    def update(self, message: str) -> None:
        """Replace the message and redraw immediately."""
        with self._lock:
            if self._done:
                return
            self._message = message
            if self._stdout.has_terminal:
                self._render_frame()

    def complete(self, update: str | None = None) -> None:
        """
        Finish successfully.

        Writes ``✓ <message> (<elapsed>)`` followed by a newline.  Calling
        it again, or after :meth:`fail` / :meth:`cancel`, does nothing.
        """
        self._finish(styles.light_green(DONE_GLYPH), update)

    def fail(self, update: str | None = None) -> None:
        """Finish with ``✗ <message> (<elapsed>)``."""
        self._finish(styles.red(FAIL_GLYPH), update)

    def cancel(self) -> None:
        """Stop and erase the progress line without a summary."""
        with self._lock:
            if self._done:
                return
            self._done = True
            self._stop.set()
            self._emit(self._reset())
        logger.debug("Cancelled progress %r", self._message)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self) -> None:
        interval = self._options.animation.interval
        while not self._stop.wait(interval):
            self.tick()
        logger.debug("Progress ticker for %r stopped", self._message)

    def _finish(self, glyph: str, update: str | None) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
            self._stop.set()
            if update is not None:
                self._message = update
            time_text = styles.dark_gray(self._time())
            self._emit(f"{self._reset()}{glyph} {self._message} {time_text}\n")

    def _render_frame(self) -> None:
        frames = self._options.animation.frames
        glyph = frames[self._frame] if frames else ""
        line = self._line(glyph, "... ", with_time=True)
        self._emit(f"{self._erase()}{ansi.clear_to_line_end()}{line}")

    def _line(self, glyph: str, suffix: str, with_time: bool) -> str:
        """Styled line; records its visible width for the next erase."""
        prefix = f"{glyph} " if glyph else ""
        time_text = self._time() if with_time else ""
        self._width = len(prefix) + len(self._message) + len(suffix) + len(time_text)
        styled_prefix = f"{styles.light_green(glyph)} " if glyph else ""
        styled_time = styles.dark_gray(time_text) if with_time else ""
        return f"{styled_prefix}{self._message}{suffix}{styled_time}"

    def _erase(self) -> str:
        return "\b" * self._width

    def _reset(self) -> str:
        """Erase the running line, or start a new one when output is not a terminal."""
        if not self._stdout.has_terminal:
            return "\n"
        return f"{self._erase()}{ansi.clear_line()}"

    def _time(self) -> str:
        return f"({self.elapsed:.1f}s)"

    def _emit(self, text: str) -> None:
        if not should_emit(self._level, Level.INFO):
            return
        self._stdout.write(text)
