"""
MAL Parser Package

Turns the lexer's token spans into data trees: atoms (numbers, symbols,
strings) and bracketed lists, with reader macros expanded into their list
forms.

Key Features:
- Recursive descent over a flat token list with an explicit cursor
- Reader macro expansion (quote, quasiquote, unquote, splice-unquote,
  deref, with-meta)
- Distinct errors for unexpected EOF, unbalanced and mismatched brackets
- One form per call, with a consumed-token count for reading on

Author: xwest
"""

from .data import Data, DataKind, Atom, AtomKind, ListData, SourceSpan, depth
from .parser import Parser, parse, read_str, read_all, parse_file, unescape
from .errors import (
    ParseError, UnexpectedEofError, UnbalancedCloseError,
    MismatchedBracketError, NoFormError,
)

__all__ = [
    # Core parser
    "Parser",
    "parse",
    "read_str",
    "read_all",
    "parse_file",
    "unescape",

    # Data tree
    "Data", "DataKind", "Atom", "AtomKind", "ListData", "SourceSpan", "depth",

    # Error handling
    "ParseError", "UnexpectedEofError", "UnbalancedCloseError",
    "MismatchedBracketError", "NoFormError",
]
