"""
Error handling for the MAL reader.

Provides diagnostics with source location information shared by the lexer
and the parser, plus the lexer's own error and warning types.

Author: xwest
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


class ErrorKind(Enum):
    """Kinds of failure a read can end with."""
    UNTERMINATED_STRING = "UnterminatedString"
    UNEXPECTED_EOF = "UnexpectedEof"
    UNBALANCED_CLOSE = "UnbalancedClose"
    MISMATCHED_BRACKET = "MismatchedBracket"
    NO_FORM = "NoForm"


@dataclass
class Diagnostic:
    """Base class for reader diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class ReaderError(Exception):
    """
    Base for every error raised while reading source text.

    Contains detailed diagnostic information for error reporting.
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerError(ReaderError):
    """Exception raised when the lexer encounters a fatal error."""


class UnterminatedStringError(LexerError):
    """A string literal reached end of input before its closing quote."""

    kind = ErrorKind.UNTERMINATED_STRING


class LexerWarning:
    """
    Represents a lexer warning that doesn't stop tokenization.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unrecognized byte skipped",
    "L002": "Unterminated string literal",
}


# Helper functions for creating common diagnostics

def create_unterminated_string_error(location: SourceLocation) -> UnterminatedStringError:
    """Create an error for a string literal that is never closed."""
    return UnterminatedStringError(
        message="Unterminated string literal",
        location=location,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        suggestions=['Add a closing " quote', 'Check for a stray \\" escaping the closing quote']
    )


def create_stray_byte_warning(byte: int, location: SourceLocation) -> LexerWarning:
    """Create a warning for an unrecognized byte the lexer skipped."""
    return LexerWarning(
        message=f"Skipped unrecognized byte 0x{byte:02X}",
        location=location,
        code="L001",
        help_text="Control characters other than tab and newline are not part of any token."
    )
