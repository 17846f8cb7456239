"""MacroExpansionContext protocol for procedural macros.

Procedural macros never see the expander class directly. They are written
against this protocol, which describes the token-level primitives of TeX's
"mouth": reading, peeking, pushing back and expanding tokens.

Example:
    >>> def first_of_two(context: MacroExpansionContext) -> MacroExpansion:
    ...     args = context.consume_args(2)
    ...     return MacroExpansion.of(args[0])

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from autotex.macros.registry import MacroTable
    from autotex.tokens import Token

type Mode = Literal["math", "text"]


@runtime_checkable
class MacroExpansionContext(Protocol):
    """Token stream plus macro table, as seen by a procedural macro.

    Attributes:
        mode: Current typesetting mode, ``"math"`` or ``"text"``
        macros: The live macro table; procedures may define macros in it

    Thread Safety:
        A context belongs to one expansion of one math region. It is not
        shared across threads; the macro table it exposes may be.

    """

    mode: Mode
    macros: MacroTable

    def pop_token(self) -> Token:
        """Remove and return the next token.

        Returns the EOF token at end of input; never raises for exhaustion.
        """
        ...

    def future(self) -> Token:
        """Return the next token without consuming or expanding it."""
        ...

    def expand_once(self, expandable_only: bool = False) -> bool:
        """Expand the next token by one step.

        Args:
            expandable_only: Only expand if the token is expandable

        Returns:
            True if a macro was expanded. False if the token was left in
            place unchanged.
        """
        ...

    def expand_after_future(self) -> Token:
        """Expand the next token once, then peek the result."""
        ...

    def consume_args(self, num_args: int) -> list[list[Token]]:
        """Read ``num_args`` undelimited arguments in reading order.

        Raises:
            ParseError: If input ends inside an argument
        """
        ...

    def consume_spaces(self) -> None:
        """Discard space tokens at the front of the input."""
        ...

    def is_expandable(self, name: str) -> bool:
        """True if ``name`` currently has an expandable macro definition."""
        ...


__all__ = [
    "MacroExpansionContext",
    "Mode",
]
