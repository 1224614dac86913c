"""
Line editing buffers for the text prompts.

* :class:`MaskedBuffer` collects a hidden response byte by byte.
* :class:`MultiValueBuffer` collects separator-delimited tokens key by key
  and reports what to echo for each key.
* :func:`parse_confirmation` maps a yes/no answer to a boolean.
"""

from __future__ import annotations

from promptlog.tui import ansi
from promptlog.tui.keybindings import KeybindingsManager
from promptlog.tui.keys import KeyStroke

# Shown instead of a hidden response, independent of its length.
HIDDEN_MASK = "******"

ACCEPT_WORDS = frozenset({"y", "yea", "yeah", "yep", "yes", "yup"})
REJECT_WORDS = frozenset({"n", "no", "nope"})

_LINE_FEED = 0x0A
_CARRIAGE_RETURN = 0x0D
_BACKSPACE = 0x08
_DELETE = 0x7F


# ---------------------------------------------------------------------------
# Confirmation
# ---------------------------------------------------------------------------

def parse_confirmation(text: str) -> bool | None:
    """
    Interpret *text* as yes or no.

    Returns ``None`` when the word is in neither set.

    >>> parse_confirmation("Yeah")
    True
    >>> parse_confirmation("nopE")
    False
    >>> parse_confirmation("maybe") is None
    True
    """
    word = text.strip().lower()
    if word in ACCEPT_WORDS:
        return True
    if word in REJECT_WORDS:
        return False
    return None


def yes_no_hint(default: bool) -> str:
    """The ``(Y/n)`` / ``(y/N)`` annotation body, capitalising the default."""
    return "Y/n" if default else "y/N"


# ---------------------------------------------------------------------------
# Hidden input
# ---------------------------------------------------------------------------

class MaskedBuffer:
    """
    Byte buffer for hidden input.

    Backspace removes the last whole UTF-8 character and does nothing on
    an empty buffer.  Carriage return or line feed ends the input.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def feed(self, byte: int) -> None:
        if byte in (_LINE_FEED, _CARRIAGE_RETURN) or byte < 0:
            self._done = True
            return
        if byte in (_DELETE, _BACKSPACE):
            self._erase()
            return
        self._data.append(byte)

    def _erase(self) -> None:
        # Drop continuation bytes, then the lead byte.
        while self._data and 0x80 <= self._data[-1] <= 0xBF:
            self._data.pop()
        if self._data:
            self._data.pop()

    @property
    def value(self) -> str:
        """
        Decoded response.

        Raises
        ------
        UnicodeDecodeError
            If the collected bytes are not valid UTF-8.
        """
        return self._data.decode("utf-8")


# ---------------------------------------------------------------------------
# Multi-value input
# ---------------------------------------------------------------------------

class MultiValueBuffer:
    """
    Raw character buffer split into tokens on a one-character separator.

    Parameters
    ----------
    separator:
        Token delimiter, ``","`` by default.  It is echoed followed by a
        space.
    keybindings:
        Source of the ``submit`` and ``erase`` bindings.
    """

    def __init__(
        self,
        separator: str = ",",
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        if len(separator) != 1:
            raise ValueError(f"separator must be a single character, got {separator!r}")
        self._separator = separator
        self._keybindings = keybindings or KeybindingsManager()
        self._raw: list[str] = []
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    @property
    def raw(self) -> str:
        return "".join(self._raw)

    def feed(self, key: KeyStroke) -> str:
        """
        Apply *key* and return the text to echo for it.

        Control keys other than submit and erase are ignored.
        """
        if self._keybindings.matches(key, "submit"):
            self._done = True
            return ""
        if self._keybindings.matches(key, "erase"):
            if not self._raw:
                return ""
            removed = self._raw.pop()
            width = 2 if removed == self._separator else 1
            return "\b" * width + ansi.clear_to_line_end()
        if key.is_char:
            self._raw.append(key.char)
            if key.char == self._separator:
                return f"{self._separator} "
            return key.char
        return ""

    @property
    def tokens(self) -> list[str]:
        """Non-empty tokens in typing order."""
        return [token for token in self.raw.split(self._separator) if token]
