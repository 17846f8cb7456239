"""Expansion-control macros, ``\\char`` and grouping aliases.

These are the procedural building blocks the rest of the catalogue is
written in: ``\\noexpand``, ``\\expandafter``, ``\\@firstoftwo``,
``\\@secondoftwo``, ``\\@ifnextchar``, ``\\@ifstar`` and ``\\TextOrMath``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autotex.macros.definitions import MacroExpansion
from autotex.macros.numerals import NumeralError, read_char_code
from autotex.macros.registry import define_macro, macro

if TYPE_CHECKING:
    from autotex.macros.protocol import MacroExpansionContext


@macro("\\noexpand")
def noexpand(context: MacroExpansionContext) -> MacroExpansion:
    # The expansion is the token itself, but a control sequence that would
    # normally expand is read as \relax.
    token = context.pop_token()
    if context.is_expandable(token.text):
        token = token.with_noexpand()
    return MacroExpansion.of([token])


@macro("\\expandafter")
def expandafter(context: MacroExpansionContext) -> MacroExpansion:
    # Hold the next token aside, expand the one after it once, then put the
    # held token back in front of that expansion.
    token = context.pop_token()
    context.expand_once(True)
    return MacroExpansion.of([token])


# TeX source: \long\def\@firstoftwo#1#2{#1}
@macro("\\@firstoftwo")
def first_of_two(context: MacroExpansionContext) -> MacroExpansion:
    args = context.consume_args(2)
    return MacroExpansion.of(args[0])


# TeX source: \long\def\@secondoftwo#1#2{#2}
@macro("\\@secondoftwo")
def second_of_two(context: MacroExpansionContext) -> MacroExpansion:
    args = context.consume_args(2)
    return MacroExpansion.of(args[1])


@macro("\\@ifnextchar")
def if_next_char(context: MacroExpansionContext) -> MacroExpansion:
    """``\\@ifnextchar{c}{then}{else}``.

    Skips spaces and peeks at the next unexpanded token without consuming
    it. Expands to ``then`` if that token is ``c``, otherwise to ``else``.
    """
    symbol, then_branch, else_branch = context.consume_args(3)
    context.consume_spaces()
    next_token = context.future()
    if len(symbol) == 1 and symbol[0].text == next_token.text:
        return MacroExpansion.of(then_branch)
    return MacroExpansion.of(else_branch)


# \@ifstar{#1}{#2}: consume a following * and expand to #1, else #2.
# TeX source: \def\@ifstar#1{\@ifnextchar *{\@firstoftwo{#1}}}
define_macro("\\@ifstar", "\\@ifnextchar *{\\@firstoftwo{#1}}")


@macro("\\TextOrMath")
def text_or_math(context: MacroExpansionContext) -> MacroExpansion:
    text_branch, math_branch = context.consume_args(2)
    if context.mode == "text":
        return MacroExpansion.of(text_branch)
    return MacroExpansion.of(math_branch)


@macro("\\char")
def char(context: MacroExpansionContext) -> str:
    """``\\char`` makes a literal character from a code.

    Accepts ``\\char123``, ``\\char'173``, ``\\char"7B`` and ``\\char`x``
    and rewrites to ``\\@char{123}``, which the renderer turns into the
    character.

    Raises:
        ParseError: For an invalid digit or a missing backtick argument
    """
    result = read_char_code(context)
    if isinstance(result, NumeralError):
        raise result.to_exception()
    return f"\\@char{{{result.value}}}"


define_macro("\\hbox", "\\text{#1}")

# \let\bgroup={ \let\egroup=}
define_macro("\\bgroup", "{")
define_macro("\\egroup", "}")
