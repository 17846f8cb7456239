"""TeX tokenizer for macro expansion.

Splits math source into tokens the way TeX's eyes do:
- runs of whitespace become one space token
- ``\\`` followed by a newline or spaces is a control space
- control words (``\\frac``, ``\\@ifnextchar``) swallow trailing whitespace
- control symbols are a backslash plus one character
- everything else is a single character with its combining accents

``%`` starts a comment that runs to end of line. ``~`` is active.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import re
from collections.abc import Iterator

from autotex.tokens import EOF_TOKEN, Token
from autotex.utils.logger import get_logger

logger = get_logger(__name__)

_TOKEN_RE = re.compile(
    r"([ \r\n\t]+)"  # whitespace
    r"|\\(\n|[ \r\t]+\n?)[ \r\t]*"  # control space
    r"|(\\[a-zA-Z@]+)[ \r\n\t]*"  # control word
    r"|(\\.)"  # control symbol
    r"|(.[\u0300-\u036f]*)",  # single character plus accents
    re.DOTALL,
)

# Category codes that differ from "other character"
COMMENT_CATCODE = 14
ACTIVE_CATCODE = 13
DEFAULT_CATCODES: dict[str, int] = {
    "%": COMMENT_CATCODE,
    "~": ACTIVE_CATCODE,
}


class Lexer:
    """Tokenizer producing Token objects on demand.

    Usage:
        >>> lexer = Lexer("\\\\frac{a}{b}")
        >>> [t.text for t in lexer.tokenize()]
        ['\\\\frac', '{', 'a', '}', '{', 'b', '}']

    """

    __slots__ = ("_source", "_pos", "catcodes")

    def __init__(self, source: str, catcodes: dict[str, int] | None = None) -> None:
        self._source = source
        self._pos = 0
        self.catcodes = dict(DEFAULT_CATCODES if catcodes is None else catcodes)

    def lex(self) -> Token:
        """Return the next token, or the EOF token at end of input."""
        source = self._source
        while self._pos < len(source):
            match = _TOKEN_RE.match(source, self._pos)
            # The last alternative matches any character
            assert match is not None
            self._pos = match.end()

            if match.group(1) is not None:
                return Token(" ")
            if match.group(2) is not None:
                return Token("\\ ")
            text = match.group(3) or match.group(4) or match.group(5)

            if self.catcodes.get(text) == COMMENT_CATCODE:
                newline = source.find("\n", self._pos)
                if newline == -1:
                    logger.debug("Comment has no terminating newline")
                    self._pos = len(source)
                else:
                    self._pos = newline + 1
                continue
            return Token(text)
        return EOF_TOKEN

    def tokenize(self) -> Iterator[Token]:
        """Yield every token up to, not including, EOF."""
        while True:
            token = self.lex()
            if token.is_eof:
                return
            yield token


def tokenize(source: str) -> list[Token]:
    """Tokenize a complete string.

    Returns:
        Tokens in reading order, without the EOF sentinel.
    """
    return list(Lexer(source).tokenize())


__all__ = [
    "ACTIVE_CATCODE",
    "COMMENT_CATCODE",
    "DEFAULT_CATCODES",
    "Lexer",
    "tokenize",
]
