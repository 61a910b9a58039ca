"""
Diagnostic engine

Renders compiler-style messages for keymap files:

    keys.kbm:3:9: error: invalid key 'foo'
    ^!q -> foo
           ^~~

The excerpt is clipped to roughly 80 columns around the offending span and
the span is coloured by severity. A diagnostic may carry a secondary note
pointing at another place in the file.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, TextIO, Tuple

from pydantic import BaseModel

LOGGER = logging.getLogger(__name__)

RESET = "\x1b[0m"
RED = "\x1b[1;31m"
BLUE = "\x1b[1;34m"
MAGENTA = "\x1b[1;35m"
WHITE = "\x1b[1;37m"

EXCERPT_WIDTH = 80
EXCERPT_LEAD = 40


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


_COLOURS = {
    Severity.ERROR: RED,
    Severity.WARNING: MAGENTA,
    Severity.NOTE: BLUE,
}


@dataclass(frozen=True)
class Anchor:
    """Snapshot of a source span: its line text, line number, 0-based column and length."""

    text: str
    line: int
    column: int
    length: int = 1

    @property
    def end(self) -> int:
        return self.column + self.length

    def through(self, other: Anchor) -> Anchor:
        """Span from the start of this anchor to the end of other.

        Spans never cross lines; when other is on a later line the span runs
        to the end of this anchor's line.
        """

        if other.line == self.line:
            end = max(other.end, self.end)
        else:
            end = max(len(self.text), self.end)
        return Anchor(self.text, self.line, self.column, end - self.column)


class Diagnostic(BaseModel):
    """A rendered message; column is 1-based as printed."""

    severity: Severity
    message: str
    path: str
    line: int
    column: int
    length: int
    note: Optional[Diagnostic] = None

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}: {self.severity.value}: {self.message}"


def excerpt_window(anchor: Anchor) -> Tuple[int, int]:
    """Return the [start, end) columns of the excerpt shown for anchor.

    The window is EXCERPT_WIDTH columns starting EXCERPT_LEAD columns before
    the end of the span, widened so the whole span is always visible.
    """

    start = min(max(0, anchor.end - EXCERPT_LEAD), anchor.column)
    end = max(start + EXCERPT_WIDTH, anchor.end)
    return start, end


def _isatty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class DiagnosticEngine:
    """Render and record diagnostics for one keymap file."""

    def __init__(self, path: str, sink: Optional[TextIO] = None, *, color: Optional[bool] = None) -> None:
        self.path = path
        self.sink = sink if sink is not None else sys.stderr
        self.color = _isatty(self.sink) if color is None else color
        self.diagnostics: List[Diagnostic] = []

    def count(self, severity: Severity, message: Optional[str] = None) -> int:
        return sum(
            1
            for d in self.diagnostics
            if d.severity is severity and (message is None or d.message == message)
        )

    # failure modes

    def unterminated_string(self, at: Anchor, start: Anchor) -> Diagnostic:
        note = (start, "started here") if start.line != at.line else None
        return self.emit(Severity.ERROR, at, "unterminated string literal", note=note)

    def expected(self, at: Anchor, construct: str) -> Diagnostic:
        return self.emit(Severity.ERROR, at, f"expected {construct}")

    def invalid_key(self, at: Anchor, lexeme: str) -> Diagnostic:
        return self.emit(Severity.ERROR, at, f"invalid key '{lexeme}'")

    def unrecognized_character(self, at: Anchor, char: str) -> Diagnostic:
        return self.emit(Severity.ERROR, at, f"unrecognized character {char!r}")

    def self_modified(self, at: Anchor) -> Diagnostic:
        return self.emit(Severity.ERROR, at, "key modified with itself")

    def out_of_range(self, at: Anchor) -> Diagnostic:
        return self.emit(Severity.ERROR, at, "integer literal out of range")

    def unexpected_eof(self, at: Anchor, last: Anchor) -> Diagnostic:
        return self.emit(
            Severity.ERROR, at, "unexpected EOF when parsing", note=(last, "last statement here")
        )

    def truncated_literal(self, at: Anchor, limit: int) -> Diagnostic:
        return self.emit(
            Severity.WARNING, at, f"string literal exceeding {limit} characters truncated"
        )

    def duplicate_modifier(self, at: Anchor, first: Optional[Anchor] = None) -> Diagnostic:
        note = (first, "first declared here") if first is not None else None
        return self.emit(Severity.NOTE, at, "duplicate modifier declaration", note=note)

    # rendering

    def emit(
        self,
        severity: Severity,
        at: Anchor,
        message: str,
        *,
        note: Optional[Tuple[Anchor, str]] = None,
    ) -> Diagnostic:
        diagnostic = self._build(severity, at, message)
        self._render(severity, at, message)
        if note is not None:
            note_at, note_message = note
            diagnostic.note = self._build(Severity.NOTE, note_at, note_message)
            self._render(Severity.NOTE, note_at, note_message)
        self.diagnostics.append(diagnostic)
        LOGGER.debug("%s", diagnostic)
        return diagnostic

    def _build(self, severity: Severity, at: Anchor, message: str) -> Diagnostic:
        return Diagnostic(
            severity=severity,
            message=message,
            path=self.path,
            line=at.line,
            column=at.column + 1,
            length=at.length,
        )

    def _paint(self, colour: str, text: str) -> str:
        if not self.color or not text:
            return text
        return f"{colour}{text}{RESET}"

    def _render(self, severity: Severity, at: Anchor, message: str) -> None:
        colour = _COLOURS[severity]
        text = at.text
        start, end = excerpt_window(at)
        # keep tabs so the caret lines up under the excerpt
        indent = "".join("\t" if c == "\t" else " " for c in text[start : at.column])
        indent += " " * (at.column - start - len(indent))
        caret = "^" + "~" * (max(at.length, 1) - 1)

        self.sink.write(
            self._paint(WHITE, f"{self.path}:{at.line}:{at.column + 1}:")
            + " "
            + self._paint(colour, f"{severity.value}:")
            + f" {message}\n"
            + text[start : at.column]
            + self._paint(colour, text[at.column : at.end])
            + text[at.end : end]
            + "\n"
            + indent
            + self._paint(colour, caret)
            + "\n"
        )
