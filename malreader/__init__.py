"""
MAL Reader Package

The reader for a small Lisp-family language: source text in, data trees
out, ready for an evaluator.

Architecture:
    malreader/
    ├── lexer/           # Byte-level tokenization into offset spans
    ├── parser/          # Token spans to atoms and lists
    ├── printer.py       # Data trees back to source text
    └── repl.py          # Read-print command line loop

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import (
    Lexer, Token, TokenType, tokenize, ReaderError, LexerError,
    UnterminatedStringError,
)
from .parser import (
    Parser, parse, read_str, read_all, Data, Atom, AtomKind, ListData,
    ParseError, UnexpectedEofError, UnbalancedCloseError,
    MismatchedBracketError, NoFormError,
)
from .printer import pr_str

__all__ = [
    # Core classes
    "Lexer",
    "Parser",

    # Entry points
    "tokenize",
    "parse",
    "read_str",
    "read_all",
    "pr_str",

    # Data model
    "Token",
    "TokenType",
    "Data",
    "Atom",
    "AtomKind",
    "ListData",

    # Errors
    "ReaderError",
    "LexerError",
    "UnterminatedStringError",
    "ParseError",
    "UnexpectedEofError",
    "UnbalancedCloseError",
    "MismatchedBracketError",
    "NoFormError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
