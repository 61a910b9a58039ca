from __future__ import annotations

from .hotkey import Hotkey, HotkeyFlag
from .keycode import KeyCode, is_self_modified, key_name, lookup_keycode, modifier_for_key, render_key
from .keymap import Keymap, KeymapFlag
from .modifier import SIGILS, ModMask
from .operation import (
    BaseOperation,
    Click,
    Exec,
    Jump,
    OpCode,
    Operation,
    Quit,
    RClick,
    SendKey,
    Toggle,
)

__all__ = [
    "BaseOperation",
    "Click",
    "Exec",
    "Hotkey",
    "HotkeyFlag",
    "Jump",
    "KeyCode",
    "Keymap",
    "KeymapFlag",
    "ModMask",
    "OpCode",
    "Operation",
    "Quit",
    "RClick",
    "SIGILS",
    "SendKey",
    "Toggle",
    "is_self_modified",
    "key_name",
    "lookup_keycode",
    "modifier_for_key",
    "render_key",
]
