"""
Keymap parser

Recursive-descent parser for keymap files:

    file        := global_defs binding*
    global_defs := ("active_window" STRING+)?
    binding     := key_expr "->" operation qualifier?
    key_expr    := modifier* key_atom ("-" key_expr)?
    modifier    := "^" | "!" | "~" | "@"
    key_atom    := IDENT | DIGIT | PUNCT
    operation   := "click" | "rclick" | "jump" INT INT | "key" key_expr
                 | "toggle" | "quit" | "exec" STRING+
    qualifier   := "norepeat"

A modifier key name followed by "-" acts as a modifier prefix, so "ctrl-q"
and "^q" are the same binding. The first fatal error aborts the whole file.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional, TextIO, Tuple

from ..config import Settings
from ..models.hotkey import HotkeyFlag
from ..models.keycode import KeyCode, lookup_keycode, modifier_for_key
from ..models.keymap import Keymap
from ..models.modifier import SIGILS, ModMask
from ..models.operation import (
    INT32_MAX,
    INT32_MIN,
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
from .diagnostics import Anchor, DiagnosticEngine
from .errors import (
    ExpectedTokenError,
    InvalidKeyError,
    NumberRangeError,
    SelfModifiedKeyError,
    UnexpectedEOFError,
)
from .lexer import Lexer
from .tokens import SymbolTable, Token, TokenKind

LOGGER = logging.getLogger(__name__)

_SIMPLE_OPERATIONS = {
    OpCode.CLICK: Click,
    OpCode.RCLICK: RClick,
    OpCode.TOGGLE: Toggle,
    OpCode.QUIT: Quit,
}


class Parser:
    """Build a Keymap from the tokens of one lexer."""

    def __init__(self, lexer: Lexer, *, aliases: Optional[Mapping[str, KeyCode]] = None) -> None:
        self.lexer = lexer
        self.diagnostics = lexer.diagnostics
        self.aliases = aliases or {}
        self.token: Optional[Token] = None
        self.at: Optional[Anchor] = None  # anchor of self.token
        self._last: Optional[Anchor] = None  # anchor of the last consumed token
        self._statement: Optional[Anchor] = None  # first token of the current statement

    def parse(self) -> Keymap:
        keymap = Keymap()
        self._advance()
        self._global_defs(keymap)
        while self.token is not None:
            self._binding(keymap)
        return keymap

    # token handling

    def _advance(self) -> None:
        if self.at is not None:
            self._last = self.at
        self.token = self.lexer.scan()
        self.at = self.lexer.anchor(self.token) if self.token is not None else None

    def _require(self) -> Token:
        """The current token; running out of input here is an error."""

        if self.token is None:
            last = self._last if self._last is not None else self.lexer.end_anchor()
            statement = self._statement.through(last) if self._statement is not None else last
            raise UnexpectedEOFError(
                self.diagnostics.unexpected_eof(self.lexer.end_anchor(), statement)
            )
        return self.token

    def _at_punct(self, char: str) -> bool:
        return (
            self.token is not None
            and self.token.kind is TokenKind.PUNCT
            and self.token.value == char
        )

    # statements

    def _global_defs(self, keymap: Keymap) -> None:
        if self.token is None or self.token.kind is not TokenKind.GLOBAL:
            return
        self._statement = self.at
        self._advance()
        keymap.add_windows(self._strings())

    def _binding(self, keymap: Keymap) -> None:
        self._statement = self.at
        keycode, modmask = self._key_expr()

        if self._require().kind is not TokenKind.ARROW:
            raise ExpectedTokenError(self.diagnostics.expected(self.at, "'->' after key"))
        self._advance()

        operation = self._operation()
        flags = HotkeyFlag.NONE
        if self.token is not None and self.token.kind is TokenKind.QUAL:
            flags |= HotkeyFlag.NOREPEAT
            self._advance()

        hotkey = keymap.add_hotkey(keycode, modmask, operation, flags)
        LOGGER.debug("%s:%d: %s", self.lexer.path, self._statement.line, hotkey.describe())

    # key expressions

    def _key_expr(
        self,
        modmask: ModMask = ModMask.NONE,
        origin: Optional[Anchor] = None,
        declared: Optional[Dict[ModMask, Anchor]] = None,
    ) -> Tuple[KeyCode, ModMask]:
        self._require()
        origin = origin or self.at
        declared = {} if declared is None else declared  # modifier bit -> where it was set

        while self.token is not None and self.token.kind is TokenKind.MOD:
            modmask = self._add_modifier(modmask, SIGILS[self.token.value], self.at, declared)
            self._advance()

        key_at = self.at
        keycode = self._key_atom()
        modifier = modifier_for_key(keycode)

        if modifier and self._at_punct("-"):
            self._advance()
            modmask = self._add_modifier(modmask, modifier, key_at, declared)
            return self._key_expr(modmask, origin, declared)

        if modifier & modmask:
            raise SelfModifiedKeyError(self.diagnostics.self_modified(origin.through(key_at)))
        return keycode, modmask

    def _key_atom(self) -> KeyCode:
        token = self._require()
        keycode = None
        if token.kind in (TokenKind.IDENT, TokenKind.PUNCT):
            keycode = lookup_keycode(token.value, self.aliases)
        elif token.kind is TokenKind.NUM and token.length == 1:
            keycode = lookup_keycode(str(token.value))

        if keycode is None:
            lexeme = self.at.text[self.at.column : self.at.end]
            raise InvalidKeyError(self.diagnostics.invalid_key(self.at, lexeme))
        self._advance()
        return keycode

    def _add_modifier(
        self, modmask: ModMask, bit: ModMask, at: Anchor, declared: Dict[ModMask, Anchor]
    ) -> ModMask:
        if modmask & bit:
            self.diagnostics.duplicate_modifier(at, declared.get(bit))
        else:
            declared[bit] = at
        return modmask | bit

    # operations

    def _operation(self) -> Operation:
        token = self._require()
        if token.kind is not TokenKind.FUNC:
            raise ExpectedTokenError(self.diagnostics.expected(self.at, "operation after '->'"))
        op = OpCode(token.value)
        self._advance()

        if op is OpCode.JUMP:
            dx = self._integer()
            dy = self._integer()
            return Jump(dx=dx, dy=dy)
        if op is OpCode.KEY:
            keycode, modmask = self._key_expr()
            return SendKey(keycode=keycode, modmask=modmask)
        if op is OpCode.EXEC:
            return Exec(argv=self._strings())
        return _SIMPLE_OPERATIONS[op]()

    def _integer(self) -> int:
        token = self._require()
        start = self.at
        sign = 1
        if self._at_punct("-"):
            sign = -1
            self._advance()
            token = self._require()
            # the sign must touch the digits
            if token.kind is TokenKind.NUM and (
                self.at.line != start.line or self.at.column != start.end
            ):
                raise ExpectedTokenError(self.diagnostics.expected(start, "number"))
        if token.kind is not TokenKind.NUM:
            raise ExpectedTokenError(self.diagnostics.expected(self.at, "number"))

        value = sign * token.value
        at = start.through(self.at)
        self._advance()
        if not INT32_MIN <= value <= INT32_MAX:
            raise NumberRangeError(self.diagnostics.out_of_range(at))
        return value

    def _strings(self) -> List[str]:
        if self._require().kind is not TokenKind.STRLIT:
            raise ExpectedTokenError(self.diagnostics.expected(self.at, "string literal"))
        values = []
        while self.token is not None and self.token.kind is TokenKind.STRLIT:
            values.append(self.token.value)
            self._advance()
        return values


class ParserContext:
    """Reusable parsing state: the reserved-word table and settings.

    Build once, parse any number of files sequentially, then close().
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.symbols: Optional[SymbolTable] = SymbolTable()
        self.aliases = self.settings.alias.keycodes()

    def __enter__(self) -> ParserContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self.symbols is None

    def close(self) -> None:
        if self.symbols is not None:
            self.symbols.clear()
            self.symbols = None

    def parse_stream(self, stream: TextIO, path: str, error_sink: Optional[TextIO] = None) -> Keymap:
        """Parse an open text stream; path is only used in diagnostics."""

        if self.symbols is None:
            raise RuntimeError("parser context is closed")

        diagnostics = DiagnosticEngine(
            path, error_sink, color=self.settings.diagnostics.color_flag()
        )
        lexer = Lexer(
            stream,
            path,
            self.symbols,
            diagnostics,
            max_literal=self.settings.max_literal,
        )
        keymap = Parser(lexer, aliases=self.aliases).parse()
        LOGGER.info("loaded %d hotkeys from %s", len(keymap.hotkeys), path)
        return keymap

    def parse_file(self, path: str | Path, error_sink: Optional[TextIO] = None) -> Keymap:
        """Parse the keymap at path; "-" reads standard input."""

        if str(path) == "-":
            return self.parse_stream(sys.stdin, "<stdin>", error_sink)
        # undecodable bytes become U+FFFD
        with open(path, encoding="utf-8", errors="replace") as stream:
            return self.parse_stream(stream, str(path), error_sink)


def parse_file(
    path: str | Path,
    error_sink: Optional[TextIO] = None,
    *,
    context: Optional[ParserContext] = None,
    settings: Optional[Settings] = None,
) -> Keymap:
    """Parse a keymap file into a Keymap.

    Raises a ParseError subclass on the first fatal error, after rendering
    its diagnostic to error_sink (stderr by default). No partial keymap is
    ever returned.
    """

    if context is not None:
        return context.parse_file(path, error_sink)
    with ParserContext(settings) as ctx:
        return ctx.parse_file(path, error_sink)


def parse_string(
    source: str,
    path: str = "<string>",
    error_sink: Optional[TextIO] = None,
    *,
    context: Optional[ParserContext] = None,
    settings: Optional[Settings] = None,
) -> Keymap:
    """Parse keymap source held in memory."""

    return parse_stream(io.StringIO(source), path, error_sink, context=context, settings=settings)


def parse_stream(
    stream: TextIO,
    path: str,
    error_sink: Optional[TextIO] = None,
    *,
    context: Optional[ParserContext] = None,
    settings: Optional[Settings] = None,
) -> Keymap:
    if context is not None:
        return context.parse_stream(stream, path, error_sink)
    with ParserContext(settings) as ctx:
        return ctx.parse_stream(stream, path, error_sink)
