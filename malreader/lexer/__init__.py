"""
MAL Lexer Package

Splits MAL source text into token spans: half-open byte ranges into the
original buffer. Tokens never copy text.

Key Features:
- Byte-level scanning, multi-byte UTF-8 carried through atoms untouched
- Two-byte ``~@`` marker, brackets and reader macro markers
- Escape-aware string literals with a distinct unterminated-string error
- Line-scoped ``;`` comments (end-of-buffer mode available)
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, TokenSequence, SourceLocation
from .lexer import Lexer, tokenize, tokenize_string, tokenize_file
from .errors import (
    Diagnostic, ErrorKind, ReaderError, LexerError, LexerWarning,
    UnterminatedStringError,
)

__all__ = [
    "Lexer",
    "tokenize",
    "tokenize_string",
    "tokenize_file",
    "Token",
    "TokenType",
    "TokenSequence",
    "SourceLocation",
    "Diagnostic",
    "ErrorKind",
    "ReaderError",
    "LexerError",
    "LexerWarning",
    "UnterminatedStringError",
]
