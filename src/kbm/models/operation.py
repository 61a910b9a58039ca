from __future__ import annotations

import shlex
from enum import Enum
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .keycode import KeyCode, is_self_modified, render_key
from .modifier import ModMask

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class OpCode(str, Enum):
    """Operation names; these are also the reserved function words of a keymap."""

    CLICK = "click"
    RCLICK = "rclick"
    JUMP = "jump"
    KEY = "key"
    TOGGLE = "toggle"
    QUIT = "quit"
    EXEC = "exec"


def pack_opargs(low: int, high: int) -> int:
    """Pack two 32-bit values (two's complement) into one 64-bit argument."""

    return (low & 0xFFFFFFFF) | ((high & 0xFFFFFFFF) << 32)


class BaseOperation(BaseModel):
    """Action triggered by a hotkey."""

    op: OpCode

    def describe(self) -> str:
        return self.op.value


class Click(BaseOperation):
    op: Literal[OpCode.CLICK] = OpCode.CLICK


class RClick(BaseOperation):
    op: Literal[OpCode.RCLICK] = OpCode.RCLICK


class Jump(BaseOperation):
    """Move the cursor by (dx, dy)."""

    op: Literal[OpCode.JUMP] = OpCode.JUMP
    dx: int = Field(ge=INT32_MIN, le=INT32_MAX)
    dy: int = Field(ge=INT32_MIN, le=INT32_MAX)

    @property
    def opargs(self) -> int:
        return pack_opargs(self.dx, self.dy)

    def describe(self) -> str:
        return f"jump {self.dx} {self.dy}"


class SendKey(BaseOperation):
    """Synthesize a keypress of keycode with modmask held."""

    op: Literal[OpCode.KEY] = OpCode.KEY
    keycode: KeyCode
    modmask: ModMask = ModMask.NONE

    @field_validator("modmask", mode="before")
    @classmethod
    def _coerce_modmask(cls, value: Any) -> ModMask:
        return ModMask(value)

    @model_validator(mode="after")
    def _not_self_modified(self) -> SendKey:
        if is_self_modified(self.keycode, self.modmask):
            raise ValueError(f"key {self.keycode.name} modified with itself")
        return self

    @property
    def opargs(self) -> int:
        return pack_opargs(self.keycode, self.modmask)

    def describe(self) -> str:
        return f"key {render_key(self.keycode, self.modmask)}"


class Toggle(BaseOperation):
    op: Literal[OpCode.TOGGLE] = OpCode.TOGGLE


class Quit(BaseOperation):
    op: Literal[OpCode.QUIT] = OpCode.QUIT


class Exec(BaseOperation):
    """Run a program; argv[0] is the program."""

    op: Literal[OpCode.EXEC] = OpCode.EXEC
    argv: List[str] = Field(min_length=1)

    def describe(self) -> str:
        return f"exec {shlex.join(self.argv)}"


Operation = Annotated[
    Union[Click, RClick, Jump, SendKey, Toggle, Quit, Exec],
    Field(discriminator="op"),
]
