from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from ..models.operation import OpCode

QUAL_NOREPEAT = "norepeat"
GLOBAL_ACTIVE_WINDOW = "active_window"

# Single characters that are both tokens and key names.
PUNCTUATION = frozenset("`-=[]\\;',./")
MODIFIER_SIGILS = frozenset("^!~@")


class TokenKind(Enum):
    """Token kinds produced by the lexer."""

    NUM = "number"
    IDENT = "identifier"
    ARROW = "'->'"
    FUNC = "operation"
    QUAL = "qualifier"
    GLOBAL = "global declaration"
    STRLIT = "string literal"
    MOD = "modifier"
    PUNCT = "punctuation"


@dataclass(frozen=True)
class Token:
    """A scanned token; length is the lexeme length in the source line."""

    kind: TokenKind
    value: Union[int, str, None]
    length: int

    @property
    def lexeme(self) -> str:
        if self.kind is TokenKind.ARROW:
            return "->"
        return str(self.value)


class SymbolTable:
    """Reserved words of the keymap language.

    Each reserved token is created once and the same object is handed out on
    every lookup, so a table can be shared by any number of sequential parses.
    """

    def __init__(self) -> None:
        self._words: Dict[str, Token] = {}
        for op in OpCode:
            self.reserve(TokenKind.FUNC, op.value)
        self.reserve(TokenKind.QUAL, QUAL_NOREPEAT)
        self.reserve(TokenKind.GLOBAL, GLOBAL_ACTIVE_WINDOW)

    def reserve(self, kind: TokenKind, word: str) -> Token:
        token = Token(kind, word, len(word))
        self._words[word] = token
        return token

    def lookup(self, word: str) -> Optional[Token]:
        return self._words.get(word)

    def clear(self) -> None:
        self._words.clear()

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __len__(self) -> int:
        return len(self._words)
