from __future__ import annotations

from enum import IntFlag


class ModMask(IntFlag):
    """Modifier bitmask applied to a keycode (left/right are not distinguished)."""

    NONE = 0
    SHIFT = 0x01
    CTRL = 0x02
    SUPER = 0x04
    META = 0x08


# Modifier sigils as written in a key expression.
SIGILS: dict[str, ModMask] = {
    "^": ModMask.CTRL,
    "!": ModMask.SHIFT,
    "~": ModMask.SUPER,
    "@": ModMask.META,
}

# Display prefixes, in rendering order.
PREFIXES: tuple[tuple[ModMask, str], ...] = (
    (ModMask.CTRL, "Control-"),
    (ModMask.SUPER, "Super-"),
    (ModMask.META, "Meta-"),
    (ModMask.SHIFT, "Shift-"),
)


def render_modifiers(modmask: ModMask) -> str:
    return "".join(prefix for bit, prefix in PREFIXES if modmask & bit)
