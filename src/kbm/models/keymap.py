from __future__ import annotations

from enum import IntFlag
from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from .hotkey import Hotkey, HotkeyFlag
from .keycode import KeyCode
from .modifier import ModMask
from .operation import Operation


class KeymapFlag(IntFlag):
    """Global keymap flags."""

    NONE = 0
    ACTIVE_WINDOW = 0x01  # only run hotkeys in the listed windows


class Keymap(BaseModel):
    """Parse result of one keymap file: global flags, window allow-list and hotkeys."""

    flags: KeymapFlag = KeymapFlag.NONE
    windows: List[str] = Field(default_factory=list)
    hotkeys: List[Hotkey] = Field(default_factory=list)

    @field_validator("flags", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> KeymapFlag:
        return KeymapFlag(value)

    @property
    def restricted(self) -> bool:
        return bool(self.flags & KeymapFlag.ACTIVE_WINDOW)

    def add_windows(self, names: List[str]) -> None:
        self.windows.extend(names)
        self.flags |= KeymapFlag.ACTIVE_WINDOW

    def add_hotkey(
        self,
        keycode: KeyCode,
        modmask: ModMask,
        operation: Operation,
        flags: HotkeyFlag = HotkeyFlag.NONE,
    ) -> Hotkey:
        """Create a hotkey and append it at the end of the sequence."""

        hotkey = Hotkey(
            keycode=keycode,
            modmask=modmask,
            operation=operation,
            flags=flags,
            position=len(self.hotkeys),
        )
        self.hotkeys.append(hotkey)
        return hotkey
