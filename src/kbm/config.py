from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .models.keycode import KeyCode, lookup_keycode

DEFAULT_MAX_LITERAL = 1024


class AliasConfig(BaseModel):
    """Extra key lexemes, mapping a new name to an existing key name."""

    key: Dict[str, str] = Field(default_factory=dict)

    @field_validator("key")
    @classmethod
    def _known_targets(cls, value: Dict[str, str]) -> Dict[str, str]:
        normalized: Dict[str, str] = {}
        for alias, target in value.items():
            alias = alias.strip().lower()
            target = target.strip().lower()
            if not alias:
                raise ValueError("key alias is empty")
            if lookup_keycode(target) is None:
                raise ValueError(f"alias {alias!r} refers to unknown key {target!r}")
            normalized[alias] = target
        return normalized

    def keycodes(self) -> Dict[str, KeyCode]:
        return {alias: lookup_keycode(target) for alias, target in self.key.items()}


class DiagnosticsConfig(BaseModel):
    color: Literal["auto", "always", "never"] = "auto"

    def color_flag(self) -> Optional[bool]:
        """None means: colour when the error sink is a terminal."""

        if self.color == "auto":
            return None
        return self.color == "always"


class Settings(BaseModel):
    max_literal: int = Field(default=DEFAULT_MAX_LITERAL, ge=2)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)
    alias: AliasConfig = Field(default_factory=AliasConfig)


def load_toml(path: str | Path) -> Dict[str, Any]:
    """Load a TOML file into a dict."""

    path = Path(path)
    return tomllib.loads(path.read_text(encoding="utf-8"))


def load_settings(path: str | Path) -> Settings:
    return Settings.model_validate(load_toml(path))
