from __future__ import annotations

from .diagnostics import Diagnostic


class ParseError(Exception):
    """A fatal keymap error; the diagnostic has already been rendered."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


class LexError(ParseError):
    """Raised when the scanner cannot form a token."""


class UnterminatedStringError(LexError):
    pass


class UnrecognizedCharacterError(LexError):
    pass


class KeymapSyntaxError(ParseError):
    """Raised when a token does not fit the grammar."""


class ExpectedTokenError(KeymapSyntaxError):
    pass


class InvalidKeyError(KeymapSyntaxError):
    pass


class UnexpectedEOFError(KeymapSyntaxError):
    pass


class SemanticError(ParseError):
    """Raised when a well-formed binding is not meaningful."""


class SelfModifiedKeyError(SemanticError):
    pass


class NumberRangeError(SemanticError):
    pass
