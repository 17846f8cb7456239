"""Exception classes for autotex.

Provides standardized exceptions for error handling throughout autotex.

Only ParseError is recoverable: the render driver catches it per math
region, reports it and keeps the region's original text. Every other
exception is a programming or environment fault and propagates.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autotex.tokens import Token


class AutoTexError(Exception):
    """Base exception for all autotex errors.

    Subclass this for specific error categories.
    """

    pass


class ParseErrorKind(Enum):
    """Categories of recoverable parse failures."""

    MALFORMED = auto()
    MISSING_ARGUMENT = auto()  # input ended inside a macro argument
    UNBALANCED_BRACES = auto()  # Extra }
    INVALID_PLACEHOLDER = auto()  # bad #n in a macro body
    INVALID_DIGIT = auto()  # \char numeral
    MISSING_CHAR_ARGUMENT = auto()  # \char` at end of input
    DUPLICATE_TAG = auto()  # second \tag in one formula
    INVALID_ARROW_SPACING = auto()  # \newextarrow lspace,rspace
    INVALID_ARROW_CHAR_CODE = auto()  # \newextarrow charcode
    INVALID_DEFINITION = auto()  # \def, \newcommand misuse
    TOO_MANY_EXPANSIONS = auto()  # max_expand exceeded


class ParseError(AutoTexError):
    """Error during macro expansion or math parsing.

    Raised when malformed macro usage or malformed math source is
    encountered while expanding one math region.
    """

    def __init__(
        self,
        message: str,
        kind: ParseErrorKind = ParseErrorKind.MALFORMED,
        token: Token | None = None,
    ) -> None:
        """Initialize parse error.

        Args:
            message: Error description
            kind: Failure category
            token: Token at which the failure was detected (optional)
        """
        self.message = message
        self.kind = kind
        self.token = token

        location = ""
        if token is not None and not token.is_eof:
            location = f" at '{token.text}'"

        super().__init__(f"{message}{location}")


class MacroScopeError(AutoTexError):
    """Error when macro groups are closed more often than opened.

    This is a bug in the caller, not in the math source, so it is never
    handled per region.
    """

    pass
