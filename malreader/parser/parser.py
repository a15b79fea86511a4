"""
MAL Reader - builds data trees from token spans

Reads the flat token list produced by the lexer, keeping open lists and
pending reader macros on an explicit stack. The cursor is an index into
that list and only the parser moves it. Each call to ``parse`` reads exactly
one form and reports how many tokens it used, so callers can keep reading
forms out of the same buffer.

Author: xwest
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..lexer.lexer import Lexer
from ..lexer.tokens import (
    Token, TokenType, SourceLocation, BRACKET_PAIRS, BRACKET_TEXT, READER_MACROS
)
from .data import Data, Atom, ListData, SourceSpan, DIGIT_CHUNK
from .errors import (
    create_unexpected_eof_error, create_unbalanced_close_error,
    create_mismatched_bracket_error, create_no_form_error
)


NUMBER_PATTERN = re.compile(rb"-?[0-9]+")
ESCAPE_PATTERN = re.compile(r"\\(.)", re.DOTALL)

ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


def unescape(text: str) -> str:
    """
    Resolve backslash escapes in string literal contents.

    Unknown escapes resolve to the escaped character itself, so no
    backslash sequence survives.
    """
    return ESCAPE_PATTERN.sub(
        lambda match: ESCAPE_SEQUENCES.get(match.group(1), match.group(1)), text
    )


def parse_integer(text: str) -> int:
    """
    Convert decimal digits (with an optional leading ``-``) to an int.

    Long literals are converted a chunk at a time, so digit count is not
    limited by the interpreter's int/str conversion limit.
    """
    if text.startswith("-"):
        return -parse_integer(text[1:])
    value = 0
    for i in range(0, len(text), DIGIT_CHUNK):
        chunk = text[i:i + DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


@dataclass
class _Frame:
    """A list or reader macro that is still collecting forms."""
    opener: Token
    items: List[Data] = field(default_factory=list)
    closing: Optional[TokenType] = None  # None for a reader macro
    needed: int = 0  # Operands a reader macro takes


class Parser:
    """
    MAL reader.

    Consumes tokens from the cursor onwards and builds one ``Data`` tree per
    call to ``parse``.
    """

    def __init__(self, tokens: List[Token], buffer: Union[bytes, str], filename: str = "<unknown>"):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer
            buffer: The buffer the tokens were scanned from
            filename: Name of source file for error reporting
        """
        if isinstance(buffer, str):
            buffer = buffer.encode("utf-8", errors="surrogateescape")
        self.tokens = tokens
        self.buffer = buffer
        self.filename = filename
        self.current = 0

    def parse(self) -> Tuple[Data, int]:
        """
        Read the next complete form.

        Returns:
            The form and the number of tokens consumed, leading comments
            included

        Raises:
            NoFormError: If only comments remain
            UnexpectedEofError: If a list or reader macro is left incomplete
            UnbalancedCloseError: If a closing bracket has no open
            MismatchedBracketError: If a list is closed with the wrong bracket
        """
        start = self.current
        self._skip_comments()
        if self._is_at_end():
            raise create_no_form_error(self._location(len(self.buffer)))

        data = self._parse_form()
        return data, self.current - start

    def has_more_forms(self) -> bool:
        """Check whether anything other than comments is left."""
        return any(not token.is_comment for token in self.tokens[self.current:])

    def _parse_form(self) -> Data:
        """
        Read one form with an explicit stack of open lists and reader macros.

        Nesting depth is bounded by memory, not by the interpreter's
        recursion limit.
        """
        stack: List[_Frame] = []

        while True:
            self._skip_comments()
            if self._is_at_end():
                raise self._eof_error(stack[-1] if stack else None)

            token = self._advance()
            if token.is_opening_bracket:
                stack.append(_Frame(token, closing=BRACKET_PAIRS[token.type]))
                continue
            if token.is_reader_macro:
                symbol = Atom.symbol(READER_MACROS[token.type], span=SourceSpan(token.start, token.end))
                stack.append(_Frame(token, [symbol], needed=2 if token.type == TokenType.META else 1))
                continue

            if token.is_closing_bracket:
                if not stack or stack[-1].closing is None:
                    raise create_unbalanced_close_error(
                        BRACKET_TEXT[token.type], token, self._location(token.start)
                    )
                frame = stack.pop()
                if token.type != frame.closing:
                    raise create_mismatched_bracket_error(
                        BRACKET_TEXT[frame.opener.type],
                        BRACKET_TEXT[frame.closing],
                        BRACKET_TEXT[token.type],
                        token,
                        self._location(token.start),
                        self._location(frame.opener.start),
                    )
                value: Data = ListData(
                    frame.items,
                    bracket=BRACKET_TEXT[frame.opener.type],
                    span=SourceSpan(frame.opener.start, token.end),
                )
            else:
                value = self._parse_atom(token)

            # Hand the finished form to whatever is waiting for it; a reader
            # macro that gets its last operand is itself finished
            while True:
                if not stack:
                    return value
                frame = stack[-1]
                frame.items.append(value)
                if frame.closing is not None or len(frame.items) <= frame.needed:
                    break
                stack.pop()
                value = self._expand_reader_macro(frame)

    def _expand_reader_macro(self, frame: "_Frame") -> ListData:
        """Build ``(quote x)`` from ``'x``, ``(with-meta x m)`` from ``^m x``, etc."""
        items = frame.items
        if frame.opener.type == TokenType.META:
            symbol, meta, target = items
            items = [symbol, target, meta]
        return ListData(items, bracket="(", span=SourceSpan(frame.opener.start, self._previous().end))

    def _eof_error(self, frame: Optional["_Frame"]):
        end = self._location(len(self.buffer))
        if frame is None:
            return create_unexpected_eof_error("a form", end)
        if frame.closing is not None:
            expected = f"'{BRACKET_TEXT[frame.closing]}'"
        else:
            expected = f"a form after '{frame.opener.lexeme(self.buffer)}'"
        return create_unexpected_eof_error(
            expected, end, open_location=self._location(frame.opener.start)
        )

    def _parse_atom(self, token: Token) -> Atom:
        text = token.text(self.buffer)
        span = SourceSpan(token.start, token.end)

        if token.type == TokenType.STRING:
            contents = text[1:-1].decode("utf-8", errors="surrogateescape")
            return Atom.string(unescape(contents), span)

        if NUMBER_PATTERN.fullmatch(text):
            return Atom.number(parse_integer(text.decode("ascii")), span)

        return Atom.symbol(text.decode("utf-8", errors="surrogateescape"), span)

    # Utility methods

    def _skip_comments(self):
        while not self._is_at_end() and self._peek().is_comment:
            self.current += 1

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self.tokens[self.current]
        self.current += 1
        return token

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _location(self, offset: int) -> SourceLocation:
        return SourceLocation.from_offset(self.buffer, offset, self.filename)


def parse(tokens: List[Token], buffer: Union[bytes, str]) -> Tuple[Data, int]:
    """
    Read the first form out of ``tokens``.

    Returns:
        The form and the number of tokens consumed; pass
        ``tokens[consumed:]`` back in to read the next form
    """
    return Parser(tokens, buffer).parse()


def read_str(source: Union[bytes, str], filename: str = "<string>",
             comments_to_eof: bool = False) -> Data:
    """
    Convenience function to read the first form of a source string.

    Raises:
        ReaderError: If tokenizing or parsing fails
    """
    lexer = Lexer(source, filename, comments_to_eof=comments_to_eof)
    tokens = lexer.tokenize()
    data, _ = Parser(tokens, lexer.source, filename).parse()
    return data


def read_all(source: Union[bytes, str], filename: str = "<string>",
             comments_to_eof: bool = False) -> List[Data]:
    """
    Convenience function to read every form in a source string.

    Returns:
        The forms in source order (empty if there are none)

    Raises:
        ReaderError: If tokenizing or parsing fails
    """
    lexer = Lexer(source, filename, comments_to_eof=comments_to_eof)
    parser = Parser(lexer.tokenize(), lexer.source, filename)

    forms = []
    while parser.has_more_forms():
        data, _ = parser.parse()
        forms.append(data)
    return forms


def parse_file(filepath: Union[str, Path]) -> List[Data]:
    """
    Convenience function to read every form in a source file.

    Raises:
        ReaderError: If tokenizing or parsing fails
        IOError: If file cannot be read
    """
    return read_all(Path(filepath).read_bytes(), str(filepath))
