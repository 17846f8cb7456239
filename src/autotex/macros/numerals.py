"""Character-code numerals for ``\\char``.

TeX's ``\\char`` takes a number in one of four forms (The TeXbook, p. 43):

    \\char123    decimal
    \\char'173   octal
    \\char"7B    hexadecimal
    \\char`x     the code of the character x (``\\char`\\%`` for specials)

Digits are read token by token from the expansion context. Reading stops,
without consuming, at the first token that is not a digit of the base.

read_char_code returns CharCode or NumeralError instead of raising; the
``\\char`` macro turns a NumeralError into a ParseError.

"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from autotex.errors import ParseError, ParseErrorKind

if TYPE_CHECKING:
    from autotex.macros.protocol import MacroExpansionContext
    from autotex.tokens import Token

DIGIT_TO_NUMBER = MappingProxyType(
    {
        **{str(d): d for d in range(10)},
        **{c: 10 + i for i, c in enumerate("abcdef")},
        **{c: 10 + i for i, c in enumerate("ABCDEF")},
    }
)

BASE_PREFIXES = MappingProxyType({"'": 8, '"': 16})


@dataclass(frozen=True, slots=True)
class CharCode:
    """A successfully parsed character code."""

    value: int


@dataclass(frozen=True, slots=True)
class NumeralError:
    """Why a character code could not be parsed."""

    kind: ParseErrorKind
    message: str
    token: Token | None = None

    def to_exception(self) -> ParseError:
        return ParseError(self.message, self.kind, self.token)


type NumeralResult = CharCode | NumeralError


def digits_value(text: str, base: int) -> int | None:
    """Value of text as digits in base, or None if any character is not one."""
    if not text:
        return None
    number = 0
    for char in text:
        digit = DIGIT_TO_NUMBER.get(char)
        if digit is None or digit >= base:
            return None
        number = number * base + digit
    return number


def read_number(context: MacroExpansionContext, first: Token, base: int) -> NumeralResult:
    """Read a numeral in base whose first token has already been popped.

    Args:
        context: Expansion context to read further digit tokens from
        first: First token of the numeral
        base: 8, 10 or 16

    Returns:
        CharCode, or NumeralError if the first token is not a digit
    """
    number = None if first.is_eof else digits_value(first.text, base)
    if number is None:
        return NumeralError(
            ParseErrorKind.INVALID_DIGIT,
            f"Invalid base-{base} digit {first.text}",
            first,
        )

    while True:
        following = context.future()
        if following.is_eof:
            break
        value = digits_value(following.text, base)
        if value is None:
            break
        number = number * base ** len(following.text) + value
        context.pop_token()

    return CharCode(number)


def read_char_code(context: MacroExpansionContext) -> NumeralResult:
    """Read the argument of ``\\char`` from the context.

    Returns:
        CharCode with the resolved code, or NumeralError
    """
    token = context.pop_token()

    if token.text == "`":
        token = context.pop_token()
        if token.is_eof:
            return NumeralError(
                ParseErrorKind.MISSING_CHAR_ARGUMENT,
                "\\char` missing argument",
            )
        if token.text[0] == "\\" and len(token.text) > 1:
            return CharCode(ord(token.text[1]))
        return CharCode(ord(token.text[0]))

    base = BASE_PREFIXES.get(token.text)
    if base is None:
        base = 10
    else:
        token = context.pop_token()
    return read_number(context, token, base)


__all__ = [
    "BASE_PREFIXES",
    "DIGIT_TO_NUMBER",
    "CharCode",
    "NumeralError",
    "NumeralResult",
    "digits_value",
    "read_char_code",
    "read_number",
]
