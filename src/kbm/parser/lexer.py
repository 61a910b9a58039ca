"""
Keymap lexer

Scans a keymap one physical line at a time. Tokens never span lines, except
string literals continued with a trailing backslash.
"""

from __future__ import annotations

import re
from typing import NoReturn, Optional, TextIO

from ..config import DEFAULT_MAX_LITERAL
from .diagnostics import Anchor, DiagnosticEngine
from .errors import UnrecognizedCharacterError, UnterminatedStringError
from .tokens import MODIFIER_SIGILS, PUNCTUATION, SymbolTable, Token, TokenKind

_NUMBER_RE = re.compile(r"[0-9]+")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class Lexer:
    """Line-buffered scanner for keymap source."""

    def __init__(
        self,
        stream: TextIO,
        path: str,
        symbols: SymbolTable,
        diagnostics: DiagnosticEngine,
        *,
        max_literal: int = DEFAULT_MAX_LITERAL,
    ) -> None:
        self.stream = stream
        self.path = path
        self.symbols = symbols
        self.diagnostics = diagnostics
        self.max_literal = max_literal

        self.line_num = 0  # number of the line in self.line
        self.line = ""
        self.pos = 0
        self._physical = 0  # physical lines read so far
        self._eol = False  # self.line was terminated by a newline
        self._literal_start: Optional[Anchor] = None
        self._resume_literal = False

    # cursor

    def anchor(self, token: Token) -> Anchor:
        """Anchor of a token that has just been scanned."""

        return Anchor(self.line, self.line_num, max(self.pos - token.length, 0), token.length)

    def anchor_at(self, column: int, length: int = 1) -> Anchor:
        return Anchor(self.line, self.line_num, column, length)

    def end_anchor(self) -> Anchor:
        """Anchor just past the end of the current line."""

        return self.anchor_at(len(self.line))

    def _readline(self) -> Optional[str]:
        raw = self.stream.readline()
        if not raw:
            return None
        self._physical += 1
        return raw

    def _load(self, raw: str) -> None:
        self.line_num = self._physical
        self._eol = raw.endswith("\n")
        self.line = raw.rstrip("\r\n")
        self.pos = 0

    def next_line(self) -> bool:
        """Advance to the next non-blank line; False at end of file."""

        while True:
            raw = self._readline()
            if raw is None:
                return False
            if raw.strip():
                self._load(raw)
                return True

    # scanning

    def scan(self) -> Optional[Token]:
        """Return the next token, or None at end of file."""

        if self._resume_literal:
            return self.read_str(resume=True)

        while True:
            while self.pos < len(self.line) and self.line[self.pos].isspace():
                self.pos += 1
            if self.pos < len(self.line) and self.line[self.pos] != "#":
                break
            if not self.next_line():
                return None

        char = self.line[self.pos]

        match = _NUMBER_RE.match(self.line, self.pos)
        if match:
            self.pos = match.end()
            return Token(TokenKind.NUM, int(match.group()), len(match.group()))

        match = _IDENT_RE.match(self.line, self.pos)
        if match:
            self.pos = match.end()
            word = match.group()
            reserved = self.symbols.lookup(word)
            if reserved is not None:
                return reserved
            return Token(TokenKind.IDENT, word, len(word))

        if char == '"':
            return self.read_str()

        self.pos += 1
        if char == "-" and self.line.startswith(">", self.pos):
            self.pos += 1
            return Token(TokenKind.ARROW, None, 2)
        if char in MODIFIER_SIGILS:
            return Token(TokenKind.MOD, char, 1)
        if char in PUNCTUATION:
            return Token(TokenKind.PUNCT, char, 1)

        at = self.anchor_at(self.pos - 1)
        raise UnrecognizedCharacterError(self.diagnostics.unrecognized_character(at, char))

    def read_str(self, *, resume: bool = False) -> Token:
        """Read a double-quoted string literal starting at the cursor.

        With resume, continue a literal that was cut short at the size limit;
        the remainder is returned as a token of its own.
        """

        start = self.pos
        if not resume:
            self._literal_start = self.anchor_at(self.pos)
            self.pos += 1
        self._resume_literal = False

        limit = self.max_literal - 1
        chars = []
        size = 0
        while True:
            if self.pos >= len(self.line):
                self._unterminated()

            char = self.line[self.pos]
            step = 1
            if char == '"':
                self.pos += 1
                return Token(TokenKind.STRLIT, "".join(chars), self.pos - start)
            if char == "\\":
                if self.pos + 1 == len(self.line) and self._eol:
                    # line continuation
                    raw = self._readline()
                    if raw is None:
                        self.pos = len(self.line)
                        self._unterminated()
                    self._load(raw)
                    start = 0
                    continue
                following = self.line[self.pos + 1 : self.pos + 2]
                if following in ('"', "\\"):
                    char = following
                    step = 2

            width = len(char.encode("utf-8"))
            if size + width > limit:
                self.diagnostics.truncated_literal(self.anchor_at(self.pos), limit)
                self._resume_literal = True
                return Token(TokenKind.STRLIT, "".join(chars), max(self.pos - start, 1))

            chars.append(char)
            size += width
            self.pos += step

    def _unterminated(self) -> NoReturn:
        self._resume_literal = False
        start = self._literal_start or self.end_anchor()
        raise UnterminatedStringError(
            self.diagnostics.unterminated_string(self.end_anchor(), start)
        )
