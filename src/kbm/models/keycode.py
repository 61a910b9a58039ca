"""
Keycode table

Static, OS-independent mapping between key lexemes and abstract keycodes, and
the reverse rendering of a keycode + modifier mask to a display string.
Translating a keycode to a platform key code is left to the consumer.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Mapping, Optional, Tuple

from .modifier import ModMask, render_modifiers


class KeyCode(IntEnum):
    """Abstract keycode of a physical key."""

    # alphabetic keys
    Q = 0x01
    W = 0x02
    E = 0x03
    R = 0x04
    T = 0x05
    Y = 0x06
    U = 0x07
    I = 0x08  # noqa: E741
    O = 0x09  # noqa: E741
    P = 0x0A
    A = 0x0B
    S = 0x0C
    D = 0x0D
    F = 0x0E
    G = 0x0F
    H = 0x10
    J = 0x11
    K = 0x12
    L = 0x13
    Z = 0x14
    X = 0x15
    C = 0x16
    V = 0x17
    B = 0x18
    N = 0x19
    M = 0x1A

    # number row
    DIGIT_1 = 0x1B
    DIGIT_2 = 0x1C
    DIGIT_3 = 0x1D
    DIGIT_4 = 0x1E
    DIGIT_5 = 0x1F
    DIGIT_6 = 0x20
    DIGIT_7 = 0x21
    DIGIT_8 = 0x22
    DIGIT_9 = 0x23
    DIGIT_0 = 0x24

    # punctuation
    BACKTICK = 0x25
    MINUS = 0x26
    EQUAL = 0x27
    LEFT_BRACKET = 0x28
    RIGHT_BRACKET = 0x29
    BACKSLASH = 0x2A
    SEMICOLON = 0x2B
    QUOTE = 0x2C
    COMMA = 0x2D
    PERIOD = 0x2E
    SLASH = 0x2F
    SPACE = 0x30

    # special keys and modifiers
    ESCAPE = 0x31
    BACKSPACE = 0x32
    TAB = 0x33
    CAPS_LOCK = 0x34
    ENTER = 0x35
    SHIFT = 0x36
    CTRL = 0x37
    SUPER = 0x38
    META = 0x39

    # function keys
    F1 = 0x3A
    F2 = 0x3B
    F3 = 0x3C
    F4 = 0x3D
    F5 = 0x3E
    F6 = 0x3F
    F7 = 0x40
    F8 = 0x41
    F9 = 0x42
    F10 = 0x43
    F11 = 0x44
    F12 = 0x45

    # navigation cluster
    PRINT_SCREEN = 0x46
    SCROLL_LOCK = 0x47
    PAUSE = 0x48
    INSERT = 0x49
    DELETE = 0x4A
    HOME = 0x4B
    END = 0x4C
    PAGE_UP = 0x4D
    PAGE_DOWN = 0x4E
    LEFT = 0x4F
    RIGHT = 0x50
    UP = 0x51
    DOWN = 0x52

    # numpad, Num Lock off
    NUM_LOCK = 0x53
    NUM_DIVIDE = 0x54
    NUM_MULTIPLY = 0x55
    NUM_MINUS = 0x56
    NUM_PLUS = 0x57
    NUM_ENTER = 0x58
    NUM_DELETE = 0x59
    NUM_INSERT = 0x5A
    NUM_END = 0x5B
    NUM_DOWN = 0x5C
    NUM_PAGE_DOWN = 0x5D
    NUM_LEFT = 0x5E
    NUM_CLEAR = 0x5F
    NUM_RIGHT = 0x60
    NUM_HOME = 0x61
    NUM_UP = 0x62
    NUM_PAGE_UP = 0x63

    # numpad, Num Lock on
    NUM_DECIMAL = 0x64
    NUM_0 = 0x65
    NUM_1 = 0x66
    NUM_2 = 0x67
    NUM_3 = 0x68
    NUM_4 = 0x69
    NUM_5 = 0x6A
    NUM_6 = 0x6B
    NUM_7 = 0x6C
    NUM_8 = 0x6D
    NUM_9 = 0x6E


# keycode -> (display name, lexemes accepted in a keymap)
KEY_TABLE: Tuple[Tuple[KeyCode, str, Tuple[str, ...]], ...] = (
    *((KeyCode[c], c, (c.lower(),)) for c in "QWERTYUIOPASDFGHJKLZXCVBNM"),
    (KeyCode.DIGIT_0, "0", ("0", "zero")),
    (KeyCode.DIGIT_1, "1", ("1", "one")),
    (KeyCode.DIGIT_2, "2", ("2", "two")),
    (KeyCode.DIGIT_3, "3", ("3", "three")),
    (KeyCode.DIGIT_4, "4", ("4", "four")),
    (KeyCode.DIGIT_5, "5", ("5", "five")),
    (KeyCode.DIGIT_6, "6", ("6", "six")),
    (KeyCode.DIGIT_7, "7", ("7", "seven")),
    (KeyCode.DIGIT_8, "8", ("8", "eight")),
    (KeyCode.DIGIT_9, "9", ("9", "nine")),
    (KeyCode.BACKTICK, "`", ("`", "backtick", "grave")),
    (KeyCode.MINUS, "-", ("-", "minus", "dash")),
    (KeyCode.EQUAL, "=", ("=", "equals", "equal")),
    (KeyCode.LEFT_BRACKET, "[", ("[", "leftbracket", "leftsq", "leftsquare")),
    (KeyCode.RIGHT_BRACKET, "]", ("]", "rightbracket", "rightsq", "rightsquare")),
    (KeyCode.BACKSLASH, "\\", ("\\", "backslash")),
    (KeyCode.SEMICOLON, ";", (";", "semicolon")),
    (KeyCode.QUOTE, "'", ("'", "quote", "apostrophe")),
    (KeyCode.COMMA, ",", (",", "comma")),
    (KeyCode.PERIOD, ".", (".", "period", "dot")),
    (KeyCode.SLASH, "/", ("/", "slash")),
    (KeyCode.SPACE, "Space", ("space",)),
    (KeyCode.ESCAPE, "Escape", ("esc", "escape")),
    (KeyCode.BACKSPACE, "Backspace", ("backspace",)),
    (KeyCode.TAB, "Tab", ("tab",)),
    (KeyCode.CAPS_LOCK, "CapsLock", ("caps", "capslock")),
    (KeyCode.ENTER, "Enter", ("enter", "return")),
    (KeyCode.SHIFT, "Shift", ("shift",)),
    (KeyCode.CTRL, "Control", ("control", "ctrl")),
    (KeyCode.SUPER, "Super", ("super", "command", "cmd", "win", "windows")),
    (KeyCode.META, "Meta", ("meta", "alt", "option")),
    *((KeyCode[f"F{n}"], f"F{n}", (f"f{n}",)) for n in range(1, 13)),
    (KeyCode.PRINT_SCREEN, "PrintScreen", ("printscreen", "prtsc")),
    (KeyCode.SCROLL_LOCK, "ScrollLock", ("scrolllock",)),
    (KeyCode.PAUSE, "Pause", ("pause",)),
    (KeyCode.INSERT, "Insert", ("insert", "ins")),
    (KeyCode.DELETE, "Delete", ("delete", "del")),
    (KeyCode.HOME, "Home", ("home",)),
    (KeyCode.END, "End", ("end",)),
    (KeyCode.PAGE_UP, "PageUp", ("pageup", "pgup")),
    (KeyCode.PAGE_DOWN, "PageDown", ("pagedown", "pgdn")),
    (KeyCode.LEFT, "Left", ("left",)),
    (KeyCode.RIGHT, "Right", ("right",)),
    (KeyCode.UP, "Up", ("up",)),
    (KeyCode.DOWN, "Down", ("down",)),
    (KeyCode.NUM_LOCK, "NumLock", ("numlock",)),
    (KeyCode.NUM_DIVIDE, "NumDiv", ("numdiv", "numdivide", "numslash")),
    (KeyCode.NUM_MULTIPLY, "NumMult", ("nummult", "nummultiply", "numasterisk", "numtimes")),
    (KeyCode.NUM_MINUS, "NumMinus", ("numminus",)),
    (KeyCode.NUM_PLUS, "NumPlus", ("numplus",)),
    (KeyCode.NUM_ENTER, "NumEnter", ("numenter",)),
    (KeyCode.NUM_DELETE, "NumDel", ("numdel", "numdelete")),
    (KeyCode.NUM_INSERT, "NumIns", ("numins", "numinsert")),
    (KeyCode.NUM_END, "NumEnd", ("numend",)),
    (KeyCode.NUM_DOWN, "NumDown", ("numdown",)),
    (KeyCode.NUM_PAGE_DOWN, "NumPageDown", ("numpagedown", "numpgdn")),
    (KeyCode.NUM_LEFT, "NumLeft", ("numleft",)),
    (KeyCode.NUM_CLEAR, "NumClear", ("numclear",)),
    (KeyCode.NUM_RIGHT, "NumRight", ("numright",)),
    (KeyCode.NUM_HOME, "NumHome", ("numhome",)),
    (KeyCode.NUM_UP, "NumUp", ("numup",)),
    (KeyCode.NUM_PAGE_UP, "NumPageUp", ("numpageup", "numpgup")),
    (KeyCode.NUM_DECIMAL, "NumDecimal", ("numdecimal", "numdec")),
    *((KeyCode[f"NUM_{n}"], f"Num{n}", (f"num{n}",)) for n in range(10)),
)

_LEXEMES: Dict[str, KeyCode] = {
    lexeme: code for code, _, lexemes in KEY_TABLE for lexeme in lexemes
}
_NAMES: Dict[KeyCode, str] = {code: name for code, name, _ in KEY_TABLE}

MODIFIER_KEYS: Dict[KeyCode, ModMask] = {
    KeyCode.SHIFT: ModMask.SHIFT,
    KeyCode.CTRL: ModMask.CTRL,
    KeyCode.SUPER: ModMask.SUPER,
    KeyCode.META: ModMask.META,
}


def lookup_keycode(
    lexeme: str, aliases: Optional[Mapping[str, KeyCode]] = None
) -> Optional[KeyCode]:
    """Find the keycode for a lexeme, case-insensitively; None when unknown."""

    key = lexeme.lower()
    if aliases and key in aliases:
        return aliases[key]
    return _LEXEMES.get(key)


def key_name(keycode: KeyCode) -> str:
    return _NAMES[KeyCode(keycode)]


def render_key(keycode: KeyCode, modmask: ModMask = ModMask.NONE) -> str:
    """Render a key and its modifiers, e.g. ``Control-Shift-Q``."""

    return render_modifiers(ModMask(modmask)) + key_name(keycode)


def modifier_for_key(keycode: KeyCode) -> ModMask:
    """The modifier bit a key represents, or ``ModMask.NONE`` for ordinary keys."""

    return MODIFIER_KEYS.get(keycode, ModMask.NONE)


def is_self_modified(keycode: KeyCode, modmask: ModMask) -> bool:
    return bool(modifier_for_key(keycode) & modmask)
