"""Token definitions for TeX macro expansion.

The lexer produces a stream of Token objects that the expander consumes.
A token is just its text plus two flags set by ``\\noexpand``.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
Marking a token with ``noexpand`` returns a new Token.

"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, replace

EOF_TEXT = "EOF"

_CONTROL_WORD = re.compile(r"\\[a-zA-Z@]+")


@dataclass(frozen=True, slots=True)
class Token:
    """A single TeX token.

    Attributes:
        text: Token text. Control sequences keep their backslash
            (``"\\\\frac"``), spaces collapse to ``" "``.
        noexpand: Set by ``\\noexpand``; the expander leaves the token alone
        treat_as_relax: Set by ``\\noexpand``; a consumer may read the token
            as ``\\relax``

    """

    text: str
    noexpand: bool = False
    treat_as_relax: bool = False

    @property
    def is_eof(self) -> bool:
        """True for the end-of-input sentinel."""
        return self.text == EOF_TEXT

    @property
    def is_space(self) -> bool:
        return self.text == " "

    @property
    def is_control_sequence(self) -> bool:
        """True if the token is a control word or control symbol."""
        return len(self.text) > 1 and self.text[0] == "\\"

    def with_noexpand(self) -> Token:
        """Copy of this token marked inert by ``\\noexpand``."""
        return replace(self, noexpand=True, treat_as_relax=True)

    def plain(self) -> Token:
        """Copy of this token with the ``\\noexpand`` marks cleared."""
        if not (self.noexpand or self.treat_as_relax):
            return self
        return replace(self, noexpand=False, treat_as_relax=False)

    def __repr__(self) -> str:
        flags = ", noexpand" if self.noexpand else ""
        return f"Token({self.text!r}{flags})"


# Shared end-of-input sentinel
EOF_TOKEN = Token(EOF_TEXT)


def tokens_to_text(tokens: Iterable[Token]) -> str:
    """Join tokens back into TeX source.

    A space is inserted after a control word when the next token starts
    with a letter, so that ``\\alpha`` followed by ``b`` does not collapse
    into ``\\alphab``.
    """
    parts: list[str] = []
    previous_is_word = False
    for token in tokens:
        text = token.text
        if previous_is_word and text[:1].isalpha():
            parts.append(" ")
        parts.append(text)
        previous_is_word = _CONTROL_WORD.fullmatch(text) is not None
    return "".join(parts)


def tokens_to_string(tokens: Iterable[Token]) -> str:
    """Concatenate token texts verbatim.

    Used when a macro argument is read as a plain string, e.g. the
    ``lspace,rspace`` argument of ``\\newextarrow``.
    """
    return "".join(token.text for token in tokens)


__all__ = [
    "EOF_TEXT",
    "EOF_TOKEN",
    "Token",
    "tokens_to_string",
    "tokens_to_text",
]
