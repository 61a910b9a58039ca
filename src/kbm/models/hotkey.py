from __future__ import annotations

from enum import IntFlag
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .keycode import KeyCode, is_self_modified, render_key
from .modifier import ModMask
from .operation import Operation


class HotkeyFlag(IntFlag):
    """Qualifiers changing how a hotkey behaves at runtime."""

    NONE = 0
    NOREPEAT = 0x01


class Hotkey(BaseModel):
    """One binding: a key + modifier combination mapped to an operation."""

    keycode: KeyCode
    modmask: ModMask = ModMask.NONE
    operation: Operation
    flags: HotkeyFlag = HotkeyFlag.NONE
    position: int = Field(default=0, ge=0)

    @field_validator("modmask", mode="before")
    @classmethod
    def _coerce_modmask(cls, value: Any) -> ModMask:
        return ModMask(value)

    @field_validator("flags", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> HotkeyFlag:
        return HotkeyFlag(value)

    @model_validator(mode="after")
    def _not_self_modified(self) -> Hotkey:
        if is_self_modified(self.keycode, self.modmask):
            raise ValueError(f"key {self.keycode.name} modified with itself")
        return self

    @property
    def norepeat(self) -> bool:
        return bool(self.flags & HotkeyFlag.NOREPEAT)

    def describe(self) -> str:
        text = f"{render_key(self.keycode, self.modmask)} -> {self.operation.describe()}"
        if self.norepeat:
            text += " norepeat"
        return text
