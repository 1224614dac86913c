"""
Abstract base component for interactive widgets.

A widget is a state machine driven by :class:`KeyStroke` events that can
render its body as pre-styled text lines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from promptlog.tui.keys import KeyStroke

T = TypeVar("T")


class Component(ABC, Generic[T]):
    """
    Base class for widgets.

    Subclasses implement :meth:`render` and :meth:`handle_input`.  Once a
    key terminates the widget, :attr:`done` is ``True`` and :attr:`result`
    holds the final value.
    """

    def __init__(self) -> None:
        self._done: bool = False
        self._result: T | None = None

    # ------------------------------------------------------------------
    # Abstract API
    # ------------------------------------------------------------------

    @abstractmethod
    def render(self) -> list[str]:
        """
        Render the widget body.

        Returns
        -------
        list[str]
            One string per row, without line terminators.
        """
        ...

    @abstractmethod
    def handle_input(self, key: KeyStroke) -> bool:
        """
        Handle a keyboard event.

        Returns
        -------
        bool
            ``True`` if the event changed the widget state.
        """
        ...

    @abstractmethod
    def summary(self) -> str:
        """Unstyled one-line rendering of the final value."""
        ...

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def finish(self, result: T) -> None:
        """Enter the terminal state with *result*."""
        self._result = result
        self._done = True

    @property
    def done(self) -> bool:
        """Whether a terminating key has been handled."""
        return self._done

    @property
    def result(self) -> T:
        """The final value; only meaningful once :attr:`done` is ``True``."""
        return self._result  # type: ignore[return-value]
