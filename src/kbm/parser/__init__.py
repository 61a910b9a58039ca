from __future__ import annotations

from .diagnostics import Anchor, Diagnostic, DiagnosticEngine, Severity
from .errors import (
    ExpectedTokenError,
    InvalidKeyError,
    KeymapSyntaxError,
    LexError,
    NumberRangeError,
    ParseError,
    SelfModifiedKeyError,
    SemanticError,
    UnexpectedEOFError,
    UnrecognizedCharacterError,
    UnterminatedStringError,
)
from .lexer import Lexer
from .parser import Parser, ParserContext, parse_file, parse_stream, parse_string
from .tokens import SymbolTable, Token, TokenKind

__all__ = [
    "Anchor",
    "Diagnostic",
    "DiagnosticEngine",
    "ExpectedTokenError",
    "InvalidKeyError",
    "KeymapSyntaxError",
    "LexError",
    "Lexer",
    "NumberRangeError",
    "ParseError",
    "Parser",
    "ParserContext",
    "SelfModifiedKeyError",
    "SemanticError",
    "Severity",
    "SymbolTable",
    "Token",
    "TokenKind",
    "UnexpectedEOFError",
    "UnrecognizedCharacterError",
    "UnterminatedStringError",
    "parse_file",
    "parse_stream",
    "parse_string",
]
