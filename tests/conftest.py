"""Shared pytest fixtures for promptlog tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

import pytest

from promptlog import Level, Logger
from promptlog.tui.keys import ControlCharacter, KeyStroke


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeOutput:
    """Output sink that records every write and writeln call in order."""

    def __init__(self, has_terminal: bool = True, columns: int = 80) -> None:
        self.has_terminal = has_terminal
        self.supports_ansi_escapes = has_terminal
        self.terminal_columns = columns
        self.calls: list[tuple[str, str]] = []

    def write(self, text: str) -> None:
        self.calls.append(("write", text))

    def writeln(self, text: str = "") -> None:
        self.calls.append(("writeln", text))

    @property
    def text(self) -> str:
        """Everything written, as the terminal would receive it."""
        return "".join(t if kind == "write" else f"{t}\n" for kind, t in self.calls)

    def clear(self) -> None:
        self.calls.clear()


class FakeInput:
    """Input source fed from scripted lines and bytes."""

    def __init__(
        self,
        lines: Iterable[str | Exception] = (),
        data: bytes = b"",
    ) -> None:
        self.lines: list[str | Exception] = list(lines)
        self.data = bytearray(data)
        self.raw_mode_entries = 0

    def read_line(self) -> str | None:
        if not self.lines:
            return None
        line = self.lines.pop(0)
        if isinstance(line, Exception):
            raise line
        return line

    def read_byte(self) -> int:
        if not self.data:
            return -1
        return self.data.pop(0)

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        self.raw_mode_entries += 1
        yield


class ScriptedTerminal:
    """Replays a fixed list of keystrokes."""

    def __init__(self, keys: Iterable[KeyStroke] = ()) -> None:
        self.keys: list[KeyStroke] = list(keys)

    def read_key(self) -> KeyStroke:
        if not self.keys:
            raise AssertionError("widget asked for more keys than scripted")
        return self.keys.pop(0)


class ExitCalled(Exception):
    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


class ExitRecorder:
    """Stand-in for ``sys.exit`` that records the status and aborts the call."""

    def __init__(self) -> None:
        self.codes: list[int] = []

    def __call__(self, code: int) -> None:
        self.codes.append(code)
        raise ExitCalled(code)


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


# ---------------------------------------------------------------------------
# Key helpers
# ---------------------------------------------------------------------------

ENTER = KeyStroke.of_control(ControlCharacter.CTRL_M)
LINE_FEED = KeyStroke.of_control(ControlCharacter.CTRL_J)
UP = KeyStroke.of_control(ControlCharacter.ARROW_UP)
DOWN = KeyStroke.of_control(ControlCharacter.ARROW_DOWN)
LEFT = KeyStroke.of_control(ControlCharacter.ARROW_LEFT)
SPACE = KeyStroke.of_char(" ")
BACKSPACE = KeyStroke.of_control(ControlCharacter.BACKSPACE)
DELETE = KeyStroke.of_control(ControlCharacter.DELETE)
CTRL_C = KeyStroke.of_control(ControlCharacter.CTRL_C)


def typed(text: str) -> list[KeyStroke]:
    """Keystrokes for typing *text* character by character."""
    return [KeyStroke.of_char(char) for char in text]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def stdout() -> FakeOutput:
    return FakeOutput()


@pytest.fixture
def stderr() -> FakeOutput:
    return FakeOutput()


@pytest.fixture
def stdin() -> FakeInput:
    return FakeInput()


@pytest.fixture
def terminal() -> ScriptedTerminal:
    return ScriptedTerminal()


@pytest.fixture
def exit_recorder() -> ExitRecorder:
    return ExitRecorder()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_logger(
    stdout: FakeOutput,
    stderr: FakeOutput,
    stdin: FakeInput,
    terminal: ScriptedTerminal,
    exit_recorder: ExitRecorder,
    clock: FakeClock,
) -> Callable[..., Logger]:
    """Factory for a :class:`Logger` wired to the fakes above."""

    def factory(level: Level = Level.INFO, **kwargs: object) -> Logger:
        options: dict[str, object] = {
            "stdout": stdout,
            "stderr": stderr,
            "stdin": stdin,
            "terminal": terminal,
            "exit_fn": exit_recorder,
            "clock": clock,
        }
        options.update(kwargs)
        return Logger(level=level, **options)  # type: ignore[arg-type]

    return factory
