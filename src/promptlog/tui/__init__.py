"""
Terminal UI building blocks for the interactive prompts.

Provides keystroke decoding, key bindings, the redraw controller, the
selection and line-editing state machines, and the terminal boundary the
:class:`~promptlog.logger.Logger` widgets are built from.
"""
from __future__ import annotations

from promptlog.tui.component import Component
from promptlog.tui.input_widget import MaskedBuffer, MultiValueBuffer, parse_confirmation
from promptlog.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from promptlog.tui.keys import ControlCharacter, KeyStroke, KeystrokeDecoder
from promptlog.tui.renderer import RedrawController
from promptlog.tui.select_list import MultiSelect, SingleSelect
from promptlog.tui.terminal import InputSource, OutputSink, Terminal

__all__ = [
    # Core
    "Component",
    "RedrawController",
    # Keys
    "ControlCharacter",
    "KeyStroke",
    "KeystrokeDecoder",
    # Widgets
    "SingleSelect",
    "MultiSelect",
    "MaskedBuffer",
    "MultiValueBuffer",
    "parse_confirmation",
    # Keybindings
    "KeybindingsManager",
    "DEFAULT_KEYBINDINGS",
    # Terminal
    "InputSource",
    "OutputSink",
    "Terminal",
]
