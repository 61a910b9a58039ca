from __future__ import annotations

import argparse
import logging
import sys

from .config import DiagnosticsConfig, Settings, load_settings
from .parser import ParseError, parse_file


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="kbm-check",
        description="Check a kbm keymap file and list the hotkeys it defines.",
    )
    parser.add_argument("keymap", help="Keymap file path, or '-' to read stdin")
    parser.add_argument("--settings", help="Settings toml path")
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        help="Colour diagnostics (default: from settings, else auto)",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log more (repeat for debug output)"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(name)s: %(levelname)s: %(message)s",
    )

    settings = load_settings(args.settings) if args.settings else Settings()
    if args.color:
        settings = settings.model_copy(update={"diagnostics": DiagnosticsConfig(color=args.color)})

    try:
        keymap = parse_file(args.keymap, sys.stderr, settings=settings)
    except ParseError:
        return 1

    if keymap.restricted:
        print("active windows: " + ", ".join(keymap.windows))
    for hotkey in keymap.hotkeys:
        print(hotkey.describe())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
