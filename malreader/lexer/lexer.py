"""
MAL Lexer - splits source bytes into token spans

Scans the buffer once, left to right, with no backtracking. Each token
class has its own small scanner; the main loop tries them in a fixed order
and the first one that matches wins.

xwest
"""

from pathlib import Path
from typing import List, Optional, Union

from .tokens import (
    Token, TokenType, SourceLocation, MARKERS, SPECIALS, WHITESPACE,
    STRING_QUOTE, ESCAPE, COMMENT_START, NEWLINE, ATOM_TERMINATORS
)
from .errors import (
    LexerWarning, create_unterminated_string_error, create_stray_byte_warning
)


class Lexer:
    """
    MAL lexical analyzer.

    Converts a source buffer into an ordered list of token spans. Offsets
    are byte offsets, so a multi-byte UTF-8 glyph occupies several
    positions and is carried inside an atom, string or comment untouched.
    """

    def __init__(
        self,
        source: Union[bytes, str],
        filename: str = "<unknown>",
        comments_to_eof: bool = False,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: Source buffer; ``str`` input is encoded as UTF-8
            filename: Name of source file for error reporting
            comments_to_eof: If True, a comment runs to the end of the
                buffer instead of the end of its line
        """
        if isinstance(source, str):
            source = source.encode("utf-8", errors="surrogateescape")
        self.source = bytes(source)
        self.filename = filename
        self.comments_to_eof = comments_to_eof
        self.pos = 0
        self.tokens: List[Token] = []
        self.warnings: List[LexerWarning] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire buffer.

        Returns:
            List of tokens in source order (empty for whitespace-only input)

        Raises:
            UnterminatedStringError: If a string literal is never closed
        """
        self.pos = 0
        # Fresh lists per call; earlier results stay with their callers
        self.tokens = []
        self.warnings = []

        while self.pos < len(self.source):
            self._skip_whitespace()

            if self.pos >= len(self.source):
                break

            token = (
                self._scan_marker()
                or self._scan_special()
                or self._scan_string()
                or self._scan_comment()
                or self._scan_atom()
            )
            if token:
                self.tokens.append(token)
                continue

            # Nothing claims this byte; skip it and keep going
            self.warnings.append(create_stray_byte_warning(
                self.source[self.pos], self._location(self.pos)
            ))
            self.pos += 1

        return self.tokens

    def _skip_whitespace(self):
        """Skip spaces, tabs, newlines and commas."""
        while self.pos < len(self.source) and self.source[self.pos] in WHITESPACE:
            self.pos += 1

    def _scan_marker(self) -> Optional[Token]:
        """Scan the two-byte ``~@`` marker."""
        token_type = MARKERS.get(self.source[self.pos:self.pos + 2])
        if token_type is None:
            return None
        return self._emit(token_type, self.pos, self.pos + 2)

    def _scan_special(self) -> Optional[Token]:
        """Scan a bracket or single-byte reader macro marker."""
        token_type = SPECIALS.get(self.source[self.pos])
        if token_type is None:
            return None
        return self._emit(token_type, self.pos, self.pos + 1)

    def _scan_string(self) -> Optional[Token]:
        """
        Scan a string literal, quotes included.

        A backslash escapes whatever byte follows it, so ``\\"`` never
        closes the string while ``\\\\"`` does.
        """
        if self.source[self.pos] != STRING_QUOTE:
            return None

        start = self.pos
        cursor = start + 1
        end = len(self.source)

        while cursor < end:
            byte = self.source[cursor]
            if byte == ESCAPE:
                cursor += 2
                continue
            if byte == STRING_QUOTE:
                return self._emit(TokenType.STRING, start, cursor + 1)
            cursor += 1

        raise create_unterminated_string_error(self._location(start))

    def _scan_comment(self) -> Optional[Token]:
        """Scan a comment, leading ``;`` included, up to the newline."""
        if self.source[self.pos] != COMMENT_START:
            return None

        start = self.pos
        if self.comments_to_eof:
            end = len(self.source)
        else:
            end = self.source.find(bytes([NEWLINE]), start)
            if end == -1:
                end = len(self.source)
        return self._emit(TokenType.COMMENT, start, end)

    def _scan_atom(self) -> Optional[Token]:
        """Scan a maximal run of bytes that cannot start another token."""
        start = self.pos
        cursor = start
        while cursor < len(self.source) and self.source[cursor] not in ATOM_TERMINATORS:
            cursor += 1

        if cursor == start:
            return None
        return self._emit(TokenType.ATOM, start, cursor)

    def _emit(self, token_type: TokenType, start: int, end: int) -> Token:
        """Build a token and move the cursor past it."""
        self.pos = end
        return Token(token_type, start, end)

    def _location(self, offset: int) -> SourceLocation:
        return SourceLocation.from_offset(self.source, offset, self.filename)

    def has_warnings(self) -> bool:
        """Check if lexer skipped any bytes."""
        return len(self.warnings) > 0

    def get_diagnostics(self) -> List[LexerWarning]:
        """Get all collected warnings."""
        return list(self.warnings)


def tokenize(buffer: Union[bytes, str], comments_to_eof: bool = False) -> List[Token]:
    """
    Tokenize a buffer and return its token spans.

    Raises:
        UnterminatedStringError: If a string literal is never closed
    """
    return Lexer(buffer, comments_to_eof=comments_to_eof).tokenize()


def tokenize_string(source: Union[bytes, str], filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        UnterminatedStringError: If a string literal is never closed
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: Union[str, Path]) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    The file is read as raw bytes; offsets in the returned tokens refer to
    those bytes.

    Raises:
        UnterminatedStringError: If a string literal is never closed
        IOError: If file cannot be read
    """
    source = Path(filepath).read_bytes()
    return Lexer(source, str(filepath)).tokenize()
