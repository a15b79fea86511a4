"""
Token definitions for the MAL reader.

A token is nothing more than a half-open byte range into the source buffer,
tagged with the scanner class that produced it:
- Markers (the two-byte ``~@``)
- Brackets and single-byte reader macro markers
- String literals (quotes included)
- Comments (leading ``;`` included)
- Atoms (numbers and symbols)

Tokens never copy text. The buffer they were scanned from must outlive them.

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import List


class TokenType(Enum):
    """
    Enumeration of all token types in the reader.

    Organized by the scanner that recognizes them.
    """

    # ========================================================================
    # Markers
    # ========================================================================
    SPLICE_UNQUOTE = auto()         # ~@

    # ========================================================================
    # Brackets
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }

    # ========================================================================
    # Reader macro markers
    # ========================================================================
    QUOTE = auto()                  # '
    QUASIQUOTE = auto()             # `
    UNQUOTE = auto()                # ~
    META = auto()                   # ^
    DEREF = auto()                  # @

    # ========================================================================
    # Literals and trivia
    # ========================================================================
    STRING = auto()                 # "hello \"world\""
    COMMENT = auto()                # ; to end of line
    ATOM = auto()                   # 42, -7, +, cow花火🚀


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source buffer.

    Only built when a diagnostic needs one; tokens themselves carry offsets.
    """
    filename: str
    line: int
    column: int
    offset: int  # Byte offset from start of buffer

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"

    @classmethod
    def from_offset(cls, buffer: bytes, offset: int, filename: str = "<unknown>") -> "SourceLocation":
        """
        Compute line and column for a byte offset.

        Lines are 1-based. Columns are 1-based and count decoded characters,
        so a multi-byte glyph advances the column by one.
        """
        offset = max(0, min(offset, len(buffer)))
        line_start = buffer.rfind(b"\n", 0, offset) + 1
        line = buffer.count(b"\n", 0, offset) + 1
        column = len(buffer[line_start:offset].decode("utf-8", errors="replace")) + 1
        return cls(filename, line, column, offset)


@dataclass(frozen=True)
class Token:
    """
    A lexical token: the byte range ``[start, end)`` of the source buffer.

    The token is a view. ``text`` and ``lexeme`` need the same buffer the
    token was scanned from.
    """
    type: TokenType
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end <= self.start:
            raise ValueError(
                f"invalid token span [{self.start}, {self.end}) for {self.type.name}"
            )

    def __str__(self) -> str:
        return f"{self.type.name}[{self.start}:{self.end}]"

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, buffer: bytes) -> bytes:
        """Return the bytes this token denotes in ``buffer``."""
        if self.end > len(buffer):
            raise ValueError(
                f"token {self} lies outside a buffer of {len(buffer)} bytes"
            )
        return buffer[self.start:self.end]

    def lexeme(self, buffer: bytes) -> str:
        """Return the token text decoded as UTF-8 (invalid bytes preserved)."""
        return self.text(buffer).decode("utf-8", errors="surrogateescape")

    @property
    def is_opening_bracket(self) -> bool:
        return self.type in OPENING_BRACKETS

    @property
    def is_closing_bracket(self) -> bool:
        return self.type in CLOSING_BRACKETS

    @property
    def is_reader_macro(self) -> bool:
        return self.type in READER_MACROS

    @property
    def is_comment(self) -> bool:
        return self.type == TokenType.COMMENT


TokenSequence = List[Token]


# Lookup tables used by the lexer and parser

MARKERS = {
    b"~@": TokenType.SPLICE_UNQUOTE,
}

# Keyed by byte value, since the lexer scans bytes
SPECIALS = {
    ord("("): TokenType.LEFT_PAREN,
    ord(")"): TokenType.RIGHT_PAREN,
    ord("["): TokenType.LEFT_BRACKET,
    ord("]"): TokenType.RIGHT_BRACKET,
    ord("{"): TokenType.LEFT_BRACE,
    ord("}"): TokenType.RIGHT_BRACE,
    ord("'"): TokenType.QUOTE,
    ord("`"): TokenType.QUASIQUOTE,
    ord("~"): TokenType.UNQUOTE,
    ord("^"): TokenType.META,
    ord("@"): TokenType.DEREF,
}

WHITESPACE = frozenset(b" \t\n,")

STRING_QUOTE = ord('"')
ESCAPE = ord("\\")
COMMENT_START = ord(";")
NEWLINE = ord("\n")

# Bytes that end an atom; everything else, control bytes included, is atom text
ATOM_TERMINATORS = (
    frozenset(SPECIALS) | WHITESPACE | {STRING_QUOTE, COMMENT_START}
)

# Opening bracket -> matching closing bracket
BRACKET_PAIRS = {
    TokenType.LEFT_PAREN: TokenType.RIGHT_PAREN,
    TokenType.LEFT_BRACKET: TokenType.RIGHT_BRACKET,
    TokenType.LEFT_BRACE: TokenType.RIGHT_BRACE,
}

OPENING_BRACKETS = frozenset(BRACKET_PAIRS)
CLOSING_BRACKETS = frozenset(BRACKET_PAIRS.values())

BRACKET_TEXT = {
    TokenType.LEFT_PAREN: "(",
    TokenType.RIGHT_PAREN: ")",
    TokenType.LEFT_BRACKET: "[",
    TokenType.RIGHT_BRACKET: "]",
    TokenType.LEFT_BRACE: "{",
    TokenType.RIGHT_BRACE: "}",
}

# Reader macro marker -> symbol of the list form it expands to
READER_MACROS = {
    TokenType.QUOTE: "quote",
    TokenType.QUASIQUOTE: "quasiquote",
    TokenType.UNQUOTE: "unquote",
    TokenType.SPLICE_UNQUOTE: "splice-unquote",
    TokenType.DEREF: "deref",
    TokenType.META: "with-meta",
}
