"""
Keystroke decoding for terminal input.

Translates raw bytes read from stdin, one at a time, into structured
``KeyStroke`` objects that the widgets dispatch on.  Multi-byte escape
sequences are decoded atomically by a small automaton, so a partial or
unknown sequence never leaks out as printable characters.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum, auto

from promptlog.logging import get_logger

logger = get_logger("tui.keys")

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------


class ControlCharacter(Enum):
    """Non-printable keys.  The value is the key's descriptor."""

    NONE = ""
    CTRL_A = "ctrl+a"
    CTRL_B = "ctrl+b"
    CTRL_C = "ctrl+c"
    CTRL_D = "ctrl+d"
    CTRL_E = "ctrl+e"
    CTRL_F = "ctrl+f"
    CTRL_G = "ctrl+g"
    CTRL_H = "ctrl+h"
    CTRL_I = "ctrl+i"
    CTRL_J = "ctrl+j"
    CTRL_K = "ctrl+k"
    CTRL_L = "ctrl+l"
    CTRL_M = "ctrl+m"
    CTRL_N = "ctrl+n"
    CTRL_O = "ctrl+o"
    CTRL_P = "ctrl+p"
    CTRL_Q = "ctrl+q"
    CTRL_R = "ctrl+r"
    CTRL_S = "ctrl+s"
    CTRL_T = "ctrl+t"
    CTRL_U = "ctrl+u"
    CTRL_V = "ctrl+v"
    CTRL_W = "ctrl+w"
    CTRL_X = "ctrl+x"
    CTRL_Y = "ctrl+y"
    CTRL_Z = "ctrl+z"
    ARROW_UP = "up"
    ARROW_DOWN = "down"
    ARROW_LEFT = "left"
    ARROW_RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    INSERT = "insert"
    DELETE = "delete"
    BACKSPACE = "backspace"
    WORD_BACKSPACE = "alt+backspace"
    WORD_LEFT = "alt+b"
    WORD_RIGHT = "alt+f"
    ESCAPE = "escape"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    UNKNOWN = "unknown"


# Ctrl+A .. Ctrl+Z in byte order (0x01 .. 0x1a).
_CTRL_LETTERS: list[ControlCharacter] = [
    ControlCharacter[f"CTRL_{chr(ord('A') + i)}"] for i in range(26)
]

_ENTER = frozenset({ControlCharacter.CTRL_J, ControlCharacter.CTRL_M})
_ERASE = frozenset({
    ControlCharacter.BACKSPACE,
    ControlCharacter.CTRL_H,
    ControlCharacter.DELETE,
})


@dataclass(frozen=True)
class KeyStroke:
    """
    A single decoded key press.

    Attributes
    ----------
    char:
        The literal character for printable keys, empty otherwise.
    control:
        The control key, ``ControlCharacter.NONE`` for printable keys.
    """

    char: str = ""
    control: ControlCharacter = ControlCharacter.NONE

    @classmethod
    def of_char(cls, char: str) -> KeyStroke:
        return cls(char=char)

    @classmethod
    def of_control(cls, control: ControlCharacter) -> KeyStroke:
        return cls(control=control)

    @property
    def is_char(self) -> bool:
        """Whether this is a printable character (space included)."""
        return self.control is ControlCharacter.NONE

    @property
    def is_enter(self) -> bool:
        """Carriage return and line feed both confirm."""
        return self.control in _ENTER

    @property
    def is_erase(self) -> bool:
        """Backspace, Ctrl+H or Delete."""
        return self.control in _ERASE

    @property
    def is_interrupt(self) -> bool:
        return self.control is ControlCharacter.CTRL_C

    @property
    def descriptor(self) -> str:
        """
        Canonical descriptor used by key bindings.

        >>> KeyStroke.of_control(ControlCharacter.CTRL_M).descriptor
        'enter'
        >>> KeyStroke.of_char(" ").descriptor
        'space'
        """
        if self.is_char:
            return "space" if self.char == " " else self.char
        if self.is_enter:
            return "enter"
        if self.control is ControlCharacter.CTRL_H:
            return "backspace"
        return self.control.value


# ---------------------------------------------------------------------------
# Escape sequence lookup tables
# ---------------------------------------------------------------------------

# ESC [ <final>
_CSI_FINAL: dict[str, ControlCharacter] = {
    "A": ControlCharacter.ARROW_UP,
    "B": ControlCharacter.ARROW_DOWN,
    "C": ControlCharacter.ARROW_RIGHT,
    "D": ControlCharacter.ARROW_LEFT,
    "H": ControlCharacter.HOME,
    "F": ControlCharacter.END,
}

# ESC [ <number> ~
_CSI_TILDE: dict[int, ControlCharacter] = {
    1: ControlCharacter.HOME,
    2: ControlCharacter.INSERT,
    3: ControlCharacter.DELETE,
    4: ControlCharacter.END,
    5: ControlCharacter.PAGE_UP,
    6: ControlCharacter.PAGE_DOWN,
    7: ControlCharacter.HOME,
    8: ControlCharacter.END,
}

# ESC O <final> (application mode)
_SS3: dict[str, ControlCharacter] = {
    "A": ControlCharacter.ARROW_UP,
    "B": ControlCharacter.ARROW_DOWN,
    "C": ControlCharacter.ARROW_RIGHT,
    "D": ControlCharacter.ARROW_LEFT,
    "H": ControlCharacter.HOME,
    "F": ControlCharacter.END,
    "P": ControlCharacter.F1,
    "Q": ControlCharacter.F2,
    "R": ControlCharacter.F3,
    "S": ControlCharacter.F4,
}

# ESC <byte> (meta / alt combinations)
_META: dict[int, ControlCharacter] = {
    0x7F: ControlCharacter.WORD_BACKSPACE,
    ord("b"): ControlCharacter.WORD_LEFT,
    ord("f"): ControlCharacter.WORD_RIGHT,
}


class _State(Enum):
    START = auto()
    ESCAPE = auto()
    CSI = auto()
    SS3 = auto()


def _is_csi_final(byte: int) -> bool:
    return 0x40 <= byte <= 0x7E


def _is_csi_param(byte: int) -> bool:
    return 0x30 <= byte <= 0x3F


def _utf8_length(lead: int) -> int:
    """Number of bytes in a UTF-8 sequence starting with *lead*, 0 if invalid."""
    if lead < 0x80:
        return 1
    if 0xC0 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF7:
        return 4
    return 0


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


class KeystrokeDecoder:
    """
    Blocking keystroke decoder over a byte source.

    Parameters
    ----------
    read_byte:
        Callable returning the next input byte as an int, or ``-1`` at end
        of input.
    """

    def __init__(self, read_byte: Callable[[], int]) -> None:
        self._read_byte = read_byte

    def keys(self) -> Iterator[KeyStroke]:
        """Lazily yield keystrokes until the byte source is exhausted."""
        while True:
            try:
                yield self.read_key()
            except EOFError:
                return

    def read_key(self) -> KeyStroke:
        """
        Decode the next keystroke.

        Raises
        ------
        EOFError
            If the byte source is exhausted before a key starts.
        """
        state = _State.START
        params: list[int] = []

        while True:
            byte = self._read_byte()

            if state is _State.START:
                if byte < 0:
                    raise EOFError("end of keyboard input")
                if byte == 0x1B:
                    state = _State.ESCAPE
                    continue
                return self._decode_single(byte)

            if state is _State.ESCAPE:
                if byte < 0:
                    return KeyStroke.of_control(ControlCharacter.ESCAPE)
                if byte == ord("["):
                    state = _State.CSI
                    continue
                if byte == ord("O"):
                    state = _State.SS3
                    continue
                return KeyStroke.of_control(_META.get(byte, ControlCharacter.UNKNOWN))

            if state is _State.SS3:
                if byte < 0:
                    return KeyStroke.of_control(ControlCharacter.UNKNOWN)
                return KeyStroke.of_control(_SS3.get(chr(byte), ControlCharacter.UNKNOWN))

            # CSI: collect parameter bytes until a final byte arrives.
            if byte < 0:
                return KeyStroke.of_control(ControlCharacter.UNKNOWN)
            if _is_csi_param(byte):
                params.append(byte)
                continue
            if byte == ord("[") and not params:
                # Linux console function keys: ESC [ [ <letter>
                self._read_byte()
                return KeyStroke.of_control(ControlCharacter.UNKNOWN)
            if _is_csi_final(byte):
                return KeyStroke.of_control(_decode_csi(bytes(params).decode("ascii"), chr(byte)))
            logger.debug("Dropping malformed CSI sequence byte 0x%02x", byte)
            return KeyStroke.of_control(ControlCharacter.UNKNOWN)

    def _decode_single(self, byte: int) -> KeyStroke:
        """Decode a key that does not start with ESC."""
        if byte == 0x7F:
            return KeyStroke.of_control(ControlCharacter.BACKSPACE)
        if 0x01 <= byte <= 0x1A:
            return KeyStroke.of_control(_CTRL_LETTERS[byte - 1])
        if byte == 0x00 or 0x1C <= byte <= 0x1F:
            return KeyStroke.of_control(ControlCharacter.UNKNOWN)

        length = _utf8_length(byte)
        if length == 0:
            return KeyStroke.of_control(ControlCharacter.UNKNOWN)
        data = bytearray([byte])
        while len(data) < length:
            nxt = self._read_byte()
            if nxt < 0:
                return KeyStroke.of_control(ControlCharacter.UNKNOWN)
            data.append(nxt)
        try:
            return KeyStroke.of_char(data.decode("utf-8"))
        except UnicodeDecodeError:
            logger.debug("Undecodable input bytes %r", bytes(data))
            return KeyStroke.of_control(ControlCharacter.UNKNOWN)


def _decode_csi(params: str, final: str) -> ControlCharacter:
    """
    Resolve ``ESC [ <params> <final>``.

    Modifier suffixes (``1;5C`` for Ctrl+Right) resolve to the unmodified
    key.
    """
    if final == "~":
        number = params.split(";", 1)[0]
        if not number.isdigit():
            return ControlCharacter.UNKNOWN
        return _CSI_TILDE.get(int(number), ControlCharacter.UNKNOWN)

    key = _CSI_FINAL.get(final)
    if key is None:
        return ControlCharacter.UNKNOWN
    if params and not all(part.isdigit() for part in params.split(";")):
        return ControlCharacter.UNKNOWN
    return key
