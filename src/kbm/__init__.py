"""
kbm keymap front end

Parses kbm keymap files into validated hotkey lists with compiler-style
diagnostics.
"""

from __future__ import annotations

__version__ = "0.2.0"

from .config import Settings, load_settings
from .models import Hotkey, KeyCode, Keymap, ModMask, lookup_keycode, render_key
from .parser import ParseError, ParserContext, parse_file, parse_stream, parse_string

__all__ = [
    "Hotkey",
    "KeyCode",
    "Keymap",
    "ModMask",
    "ParseError",
    "ParserContext",
    "Settings",
    "load_settings",
    "lookup_keycode",
    "parse_file",
    "parse_stream",
    "parse_string",
    "render_key",
]
