"""
Arrow-key selection widgets.

``SingleSelect`` picks one value, ``MultiSelect`` toggles any subset.  Both
share the wrap-around cursor and row rendering of :class:`ChoiceList`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from abc import abstractmethod
from typing import Generic, TypeVar

from promptlog.tui import styles
from promptlog.tui.component import Component
from promptlog.tui.keybindings import KeybindingsManager
from promptlog.tui.keys import KeyStroke

T = TypeVar("T")
R = TypeVar("R")

POINTER = "❯"
CHECKED = "◉"
UNCHECKED = "◯"


class ChoiceList(Component[R], Generic[T, R]):
    """
    Cursor over an ordered, non-empty list of choices.

    Parameters
    ----------
    choices:
        The values to choose from.  Values are compared with ``==``.
    display:
        Projection from a value to its display string, ``str`` by default.
    keybindings:
        Action bindings; the defaults map ``cursor_up`` to Up/``k``,
        ``cursor_down`` to Down/``j``, ``toggle`` to Space and ``submit``
        to Enter.
    """

    def __init__(
        self,
        choices: Sequence[T],
        display: Callable[[T], str] | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        super().__init__()
        if not choices:
            raise ValueError("choices must not be empty")
        self._choices: list[T] = list(choices)
        self._display: Callable[[T], str] = display or str
        self._keybindings = keybindings or KeybindingsManager()
        self._cursor: int = 0

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def choices(self) -> list[T]:
        return list(self._choices)

    @property
    def cursor(self) -> int:
        """Index of the row under the pointer."""
        return self._cursor

    def display(self, value: T) -> str:
        return self._display(value)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move_down(self) -> None:
        self._cursor = (self._cursor + 1) % len(self._choices)

    def move_up(self) -> None:
        self._cursor = (self._cursor - 1 + len(self._choices)) % len(self._choices)

    def _navigate(self, action: str | None) -> bool:
        if action == "cursor_down":
            self.move_down()
            return True
        if action == "cursor_up":
            self.move_up()
            return True
        return False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @abstractmethod
    def is_marked(self, index: int) -> bool:
        """Whether row *index* shows the filled marker."""
        ...

    def render(self) -> list[str]:
        lines: list[str] = []
        for index, choice in enumerate(self._choices):
            pointer = styles.green(POINTER) if index == self._cursor else " "
            label = self._display(choice)
            if self.is_marked(index):
                row = f" {styles.light_cyan(CHECKED)}  {styles.light_cyan(label)}"
            elif index == self._cursor:
                row = f" {UNCHECKED}  {styles.light_cyan(label)}"
            else:
                row = f" {UNCHECKED}  {label}"
            lines.append(f"{pointer}{row}")
        return lines


class SingleSelect(ChoiceList[T, T]):
    """
    Single-choice state machine.

    The cursor starts on *default_value* when it is one of the choices.
    Enter returns the value under the cursor; Space returns the default
    value straight away and does nothing when there is none.
    """

    def __init__(
        self,
        choices: Sequence[T],
        default_value: T | None = None,
        display: Callable[[T], str] | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        super().__init__(choices, display=display, keybindings=keybindings)
        self._has_default = default_value is not None and default_value in self._choices
        self._default = default_value
        if self._has_default:
            self._cursor = self._choices.index(default_value)  # type: ignore[arg-type]

    @property
    def has_default(self) -> bool:
        return self._has_default

    def is_marked(self, index: int) -> bool:
        return index == self._cursor

    def handle_input(self, key: KeyStroke) -> bool:
        action = self._keybindings.find_action(key)
        if self._navigate(action):
            return True
        if action == "submit":
            self.finish(self._choices[self._cursor])
            return True
        if action == "toggle" and self._has_default:
            self.finish(self._default)  # type: ignore[arg-type]
            return True
        return False

    def summary(self) -> str:
        return self._display(self.result)


class MultiSelect(ChoiceList[T, list[T]]):
    """
    Multi-choice state machine.

    Space toggles the row under the cursor; Enter returns the selected
    values in choice order, not in the order they were toggled.
    """

    def __init__(
        self,
        choices: Sequence[T],
        default_values: Iterable[T] | None = None,
        display: Callable[[T], str] | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        super().__init__(choices, display=display, keybindings=keybindings)
        defaults = list(default_values or [])
        self._selected: set[int] = {
            index for index, choice in enumerate(self._choices) if choice in defaults
        }

    @property
    def selected(self) -> list[int]:
        """Selected indices in ascending order."""
        return sorted(self._selected)

    def toggle(self) -> None:
        if self._cursor in self._selected:
            self._selected.remove(self._cursor)
        else:
            self._selected.add(self._cursor)

    def is_marked(self, index: int) -> bool:
        return index in self._selected

    def handle_input(self, key: KeyStroke) -> bool:
        action = self._keybindings.find_action(key)
        if self._navigate(action):
            return True
        if action == "toggle":
            self.toggle()
            return True
        if action == "submit":
            self.finish([self._choices[index] for index in self.selected])
            return True
        return False

    def summary(self) -> str:
        return "[" + ", ".join(self._display(value) for value in self.result) + "]"
