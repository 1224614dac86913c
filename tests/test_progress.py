"""Tests for the animated progress indicator."""

from __future__ import annotations

import time
from collections.abc import Callable

import pytest
from conftest import FakeClock, FakeOutput

from promptlog import Level, Logger, Progress, ProgressAnimation, ProgressOptions
from promptlog.tui import styles

# Long enough that the background ticker never fires during a test; ticks
# are driven by calling Progress.tick() directly.
IDLE = ProgressOptions(animation=ProgressAnimation(interval=60.0))

# Clear to end of line, written before every redrawn frame.
EOL = "\x1b[K"


def frame(glyph: str, message: str, seconds: str) -> str:
    return f"{styles.light_green(glyph)} {message}... {styles.dark_gray(f'({seconds}s)')}"


def start(stdout: FakeOutput, clock: FakeClock, message: str = "Building", **kwargs) -> Progress:
    options = kwargs.pop("options", IDLE)
    return Progress(message, stdout, options=options, clock=clock, **kwargs)


class TestProgressAnimation:
    def test_defaults(self) -> None:
        animation = ProgressAnimation()

        assert animation.frames == ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
        assert animation.interval == 0.1

    def test_frames_stored_as_tuple(self) -> None:
        assert ProgressAnimation(frames=["a", "b"]).frames == ("a", "b")

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            ProgressAnimation(interval=0)

    def test_options_equality(self) -> None:
        assert ProgressOptions() == ProgressOptions(animation=ProgressAnimation())


# ---------------------------------------------------------------------------
# Ticking and completion
# ---------------------------------------------------------------------------


class TestProgressTicks:
    """Frame rotation, elapsed time and the completion transition."""

    def test_nothing_written_before_first_tick(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock)

        assert stdout.calls == []
        progress.cancel()

    def test_ticks_rotate_frames_and_time(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock)
        width = len("⠙ Building... (0.1s)")

        clock.now = 0.1
        progress.tick()
        clock.now = 0.2
        progress.tick()

        assert stdout.calls == [
            ("write", EOL + frame("⠙", "Building", "0.1")),
            ("write", "\b" * width + EOL + frame("⠹", "Building", "0.2")),
        ]
        progress.cancel()

    def test_frames_wrap_around(self, stdout: FakeOutput, clock: FakeClock) -> None:
        options = ProgressOptions(animation=ProgressAnimation(frames=["a", "b"], interval=60.0))
        progress = start(stdout, clock, options=options)

        for _ in range(3):
            progress.tick()

        glyphs = [call[1].split(" ")[0].lstrip("\b").removeprefix(EOL) for call in stdout.calls]
        assert glyphs == [styles.light_green(g) for g in ("b", "a", "b")]
        progress.cancel()

    def test_empty_frames_show_text_only(self, stdout: FakeOutput, clock: FakeClock) -> None:
        options = ProgressOptions(animation=ProgressAnimation(frames=[], interval=60.0))
        progress = start(stdout, clock, options=options)

        clock.now = 1.3
        progress.tick()

        assert stdout.calls == [("write", f"{EOL}Building... {styles.dark_gray('(1.3s)')}")]
        progress.cancel()

    def test_complete_writes_final_line(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock)
        clock.now = 0.1
        progress.tick()
        stdout.clear()

        clock.now = 0.3
        progress.complete()

        width = len("⠙ Building... (0.1s)")
        assert stdout.calls == [
            (
                "write",
                "\b" * width
                + "\x1b[2K"
                + f"{styles.light_green('✓')} Building {styles.dark_gray('(0.3s)')}\n",
            )
        ]
        assert progress.done is True

    def test_complete_with_update(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock)
        clock.now = 2.0

        progress.complete("Built")

        assert stdout.text == f"\x1b[2K{styles.light_green('✓')} Built {styles.dark_gray('(2.0s)')}\n"

    def test_complete_is_idempotent(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock)
        progress.complete()
        progress.complete()
        progress.fail()
        progress.cancel()

        assert len(stdout.calls) == 1

    def test_no_writes_after_completion(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock)
        progress.complete()
        stdout.clear()

        progress.tick()
        progress.update("late")

        assert stdout.calls == []

    def test_fail(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock)
        clock.now = 0.5

        progress.fail("Broken")

        assert stdout.text == f"\x1b[2K{styles.red('✗')} Broken {styles.dark_gray('(0.5s)')}\n"

    def test_cancel_clears_line(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock, message="Go")
        progress.tick()
        stdout.clear()

        progress.cancel()

        assert stdout.calls == [("write", "\b" * len("⠙ Go... (0.0s)") + "\x1b[2K")]

    def test_update_redraws_with_new_message(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock, message="Step 1")
        progress.tick()
        stdout.clear()

        progress.update("Step 2")

        assert stdout.calls == [
            ("write", "\b" * len("⠙ Step 1... (0.0s)") + EOL + frame("⠙", "Step 2", "0.0"))
        ]
        assert progress.message == "Step 2"
        progress.cancel()

    def test_shorter_message_clears_leftover_text(
        self, stdout: FakeOutput, clock: FakeClock
    ) -> None:
        progress = start(stdout, clock, message="Downloading many files")
        progress.tick()
        stdout.clear()

        progress.update("Done")

        width = len("⠙ Downloading many files... (0.0s)")
        assert stdout.calls == [("write", "\b" * width + "\x1b[K" + frame("⠙", "Done", "0.0"))]
        progress.cancel()


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class TestProgressEnvironment:
    """Behaviour without a terminal and above the info level."""

    def test_no_terminal_writes_first_frame_once(self, clock: FakeClock) -> None:
        stdout = FakeOutput(has_terminal=False)
        progress = start(stdout, clock)

        assert stdout.calls == [("write", f"{styles.light_green('⠋')} Building...")]

        clock.now = 1.0
        progress.complete()

        assert stdout.calls[-1] == (
            "write",
            f"\n{styles.light_green('✓')} Building {styles.dark_gray('(1.0s)')}\n",
        )

    def test_suppressed_above_info(self, stdout: FakeOutput, clock: FakeClock) -> None:
        progress = start(stdout, clock, level=Level.WARNING)
        progress.tick()
        progress.complete()

        assert stdout.calls == []

    def test_logger_uses_its_options_and_level(
        self, make_logger: Callable[..., Logger], stdout: FakeOutput, clock: FakeClock
    ) -> None:
        log = make_logger(progress_options=IDLE)
        progress = log.progress("Fetching")
        clock.now = 0.4
        progress.tick()

        assert stdout.calls == [("write", EOL + frame("⠙", "Fetching", "0.4"))]
        progress.complete()

    def test_logger_quiet_progress_is_silent(
        self, make_logger: Callable[..., Logger], stdout: FakeOutput
    ) -> None:
        progress = make_logger(Level.QUIET).progress("Fetching", options=IDLE)
        progress.complete()

        assert stdout.calls == []

    def test_real_ticker_animates_until_complete(self, stdout: FakeOutput) -> None:
        options = ProgressOptions(animation=ProgressAnimation(interval=0.01))
        progress = Progress("Waiting", stdout, options=options)

        deadline = time.monotonic() + 2.0
        while len(stdout.calls) < 3 and time.monotonic() < deadline:
            time.sleep(0.01)
        progress.complete()
        final_count = len(stdout.calls)
        time.sleep(0.05)

        assert final_count >= 4
        assert len(stdout.calls) == final_count
        assert stdout.calls[-1][1].endswith("\n")
        assert "✓" in stdout.calls[-1][1]
