"""
Error handling for the MAL parser.

Every parse failure is a ``ParseError`` subclass tagged with its
``ErrorKind``, carrying a diagnostic that points at the offending token.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import Token, SourceLocation
from ..lexer.errors import ErrorKind, ReaderError


class ParseError(ReaderError):
    """
    Exception raised when the parser cannot build a form.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(
            message,
            location,
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token


class UnexpectedEofError(ParseError):
    """A list or reader macro form is incomplete at end of input."""

    kind = ErrorKind.UNEXPECTED_EOF


class UnbalancedCloseError(ParseError):
    """A closing bracket with no corresponding open."""

    kind = ErrorKind.UNBALANCED_CLOSE


class MismatchedBracketError(ParseError):
    """A closing bracket that does not match the innermost open bracket."""

    kind = ErrorKind.MISMATCHED_BRACKET


class NoFormError(ParseError):
    """The remaining tokens hold no form, only comments or nothing at all."""

    kind = ErrorKind.NO_FORM


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P010": "Unexpected end of input",
    "P012": "Unbalanced closing bracket",
    "P013": "Mismatched brackets",
    "P014": "No form to read",
}


# Helper functions for creating common parser errors

def create_unexpected_eof_error(
    expected: str,
    location: SourceLocation,
    open_location: Optional[SourceLocation] = None,
) -> UnexpectedEofError:
    """Create an error for unexpected end of input."""
    help_text = f"The reader reached the end of the input while expecting {expected}."
    if open_location is not None:
        help_text += f" The form started at {open_location}."

    return UnexpectedEofError(
        message=f"Unexpected end of input, expected {expected}",
        location=location,
        code="P010",
        help_text=help_text,
        suggestions=[f"Add the missing {expected}", "Check for incomplete forms"]
    )


def create_unbalanced_close_error(bracket: str, token: Token,
                                  location: SourceLocation) -> UnbalancedCloseError:
    """Create an error for a closing bracket nothing opened."""
    return UnbalancedCloseError(
        message=f"Unexpected '{bracket}'",
        location=location,
        token=token,
        code="P012",
        help_text=f"There is no open bracket for this '{bracket}' to close.",
        suggestions=[f"Remove the extra '{bracket}'", "Check for a missing opening bracket"]
    )


def create_mismatched_bracket_error(opening: str, expected: str, found: str, token: Token,
                                    location: SourceLocation,
                                    open_location: SourceLocation) -> MismatchedBracketError:
    """Create an error for a closing bracket of the wrong kind."""
    return MismatchedBracketError(
        message=f"Expected '{expected}' to close '{opening}', found '{found}'",
        location=location,
        token=token,
        code="P013",
        help_text=f"The '{opening}' at {open_location} must be closed with '{expected}'.",
        suggestions=[f"Replace '{found}' with '{expected}'"]
    )


def create_no_form_error(location: SourceLocation) -> NoFormError:
    """Create an error for input that contains no form."""
    return NoFormError(
        message="No form to read",
        location=location,
        code="P014",
        help_text="The remaining input contains only whitespace and comments."
    )
