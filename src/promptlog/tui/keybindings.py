"""
Action bindings for the interactive widgets.

Widgets dispatch on logical actions (``submit``, ``cursor_up``, ...) rather
than on raw keys, so extra keys such as the vi-style ``j`` / ``k`` can be
added or swapped through :attr:`promptlog.config.LoggerConfig.keybindings`.
"""

from __future__ import annotations

from promptlog.tui.keys import KeyStroke

# Action -> key descriptors.  ``interrupt`` comes first so it wins lookups.
DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "interrupt": ["ctrl+c"],
    "submit": ["enter"],
    "cursor_up": ["up", "k"],
    "cursor_down": ["down", "j"],
    "toggle": ["space"],
    "erase": ["backspace", "delete"],
}


def canonical_descriptor(descriptor: str) -> str:
    """
    Canonical spelling of a key descriptor.

    Names are lower-cased and modifiers sorted, so ``"Shift+Ctrl+Up"``
    becomes ``"ctrl+shift+up"``.  A single character is returned as is,
    keeping ``"K"`` and ``"k"`` distinct.
    """
    if len(descriptor) == 1:
        return descriptor
    *modifiers, base = (part.strip().lower() for part in descriptor.split("+"))
    return "+".join([*sorted(modifiers), base])


class KeybindingsManager:
    """
    Resolves keystrokes to widget actions.

    Parameters
    ----------
    user_overrides:
        Mapping of action name to key descriptors.  Each entry replaces the
        default keys of that action; other actions keep their defaults.
        Keys given for ``interrupt`` are added to Ctrl+C, which always
        interrupts.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        merged = {**DEFAULT_KEYBINDINGS, **(user_overrides or {})}
        interrupt = list(DEFAULT_KEYBINDINGS["interrupt"])
        interrupt += [key for key in merged["interrupt"] if key not in interrupt]
        merged["interrupt"] = interrupt
        self._bindings = {action: list(keys) for action, keys in merged.items()}
        self._index: dict[str, frozenset[str]] = {
            action: frozenset(canonical_descriptor(key) for key in keys)
            for action, keys in merged.items()
        }

    @staticmethod
    def _descriptor_of(key: KeyStroke | str) -> str:
        return canonical_descriptor(key if isinstance(key, str) else key.descriptor)

    def matches(self, key: KeyStroke | str, action: str) -> bool:
        """Whether *key*, a keystroke or a descriptor like ``"ctrl+c"``, triggers *action*."""
        return self._descriptor_of(key) in self._index.get(action, frozenset())

    def find_action(self, key: KeyStroke | str) -> str | None:
        """The first action bound to *key* in binding order, or ``None``."""
        descriptor = self._descriptor_of(key)
        for action, descriptors in self._index.items():
            if descriptor in descriptors:
                return action
        return None

    def get_keys(self, action: str) -> list[str]:
        """Descriptors bound to *action*, as they were given."""
        return list(self._bindings.get(action, ()))

    def actions(self) -> list[str]:
        return list(self._bindings)
