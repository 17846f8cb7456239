"""Macro definitions as data.

A macro is one of:

- TemplateMacro: TeX source with ``#1``..``#9`` placeholders, e.g.
  ``TemplateMacro("\\\\mathinner{\\\\langle{#1}|}")``
- ProcedureMacro: a function of the expansion context that returns a
  MacroExpansion or a replacement string
- MacroExpansion: already tokenized replacement text, the form ``\\def``
  stores and the form procedures may return

Thread Safety:
All definitions are frozen. A ProcedureMacro's function must keep its
state in the context it receives, never in globals.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from autotex.tokens import Token

if TYPE_CHECKING:
    from autotex.macros.protocol import MacroExpansionContext


@dataclass(frozen=True, slots=True)
class MacroExpansion:
    """Tokenized replacement text.

    Attributes:
        tokens: Replacement tokens in reading order
        num_args: Number of arguments to consume and substitute for ``#n``
        unexpandable: Treat the name as a primitive that is never expanded

    """

    tokens: tuple[Token, ...] = ()
    num_args: int = 0
    unexpandable: bool = False

    @classmethod
    def of(cls, tokens: Sequence[Token], num_args: int = 0) -> MacroExpansion:
        return cls(tokens=tuple(tokens), num_args=num_args)


@dataclass(frozen=True, slots=True)
class TemplateMacro:
    """A fixed replacement written as TeX source."""

    body: str


type MacroResult = MacroExpansion | str
type MacroFunction = Callable[[MacroExpansionContext], MacroResult]


@dataclass(frozen=True, slots=True)
class ProcedureMacro:
    """A replacement computed at expansion time.

    Attributes:
        func: Called with the expansion context when the macro expands
        name: Macro name, for repr and logging

    """

    func: MacroFunction = field(repr=False)
    name: str = ""

    def __call__(self, context: MacroExpansionContext) -> MacroResult:
        return self.func(context)


type MacroDefinition = TemplateMacro | ProcedureMacro | MacroExpansion


def as_definition(value: MacroDefinition | str | MacroFunction) -> MacroDefinition:
    """Coerce user-supplied values into a MacroDefinition.

    Strings become templates and plain callables become procedures, so a
    ``macros`` option can be written as ``{"\\\\RR": "\\\\mathbb{R}"}``.

    Raises:
        TypeError: If the value cannot define a macro
    """
    if isinstance(value, (TemplateMacro, ProcedureMacro, MacroExpansion)):
        return value
    if isinstance(value, str):
        return TemplateMacro(value)
    if callable(value):
        return ProcedureMacro(value, getattr(value, "__name__", ""))
    msg = f"Cannot define a macro from {type(value).__name__}"
    raise TypeError(msg)


__all__ = [
    "MacroDefinition",
    "MacroExpansion",
    "MacroFunction",
    "MacroResult",
    "ProcedureMacro",
    "TemplateMacro",
    "as_definition",
]
