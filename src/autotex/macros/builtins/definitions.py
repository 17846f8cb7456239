"""Macro-defining commands: ``\\def``, ``\\gdef``, ``\\global`` and the
``\\newcommand`` family.

Each of these reads a name, a parameter count and a body from the input,
stores the body as a MacroExpansion in the live macro table, and expands
to nothing. Only undelimited parameters (``#1#2``) are supported.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from autotex.errors import ParseError, ParseErrorKind
from autotex.macros.definitions import MacroExpansion
from autotex.macros.registry import macro
from autotex.utils.logger import get_logger

if TYPE_CHECKING:
    from autotex.macros.protocol import MacroExpansionContext

logger = get_logger(__name__)

_ARG_COUNT_RE = re.compile(r"^\s*[0-9]+\s*$")
_DEFINERS = frozenset({"\\def", "\\gdef"})


def _define(context: MacroExpansionContext, global_: bool) -> MacroExpansion:
    name_token = context.pop_token()
    name = name_token.text
    if name_token.is_eof or name in ("{", "}", "#", " "):
        raise ParseError(
            "Expected a control sequence to define",
            ParseErrorKind.INVALID_DEFINITION,
            name_token,
        )

    num_args = 0
    while True:
        context.consume_spaces()
        token = context.future()
        if token.text == "{":
            break
        if token.is_eof:
            raise ParseError(
                f"Expected a body for {name}",
                ParseErrorKind.INVALID_DEFINITION,
                token,
            )
        if token.text != "#":
            raise ParseError(
                "Delimited macro parameters are not supported",
                ParseErrorKind.INVALID_DEFINITION,
                token,
            )
        context.pop_token()
        number = context.pop_token()
        if number.text != str(num_args + 1):
            raise ParseError(
                f'Argument number "{number.text}" out of order',
                ParseErrorKind.INVALID_DEFINITION,
                number,
            )
        num_args += 1

    (body,) = context.consume_args(1)
    context.macros.set(name, MacroExpansion.of(body, num_args), global_=global_)
    logger.debug("Defined %s with %d argument(s), global=%s", name, num_args, global_)
    return MacroExpansion()


@macro("\\def")
def def_(context: MacroExpansionContext) -> MacroExpansion:
    return _define(context, global_=False)


@macro("\\gdef")
def gdef(context: MacroExpansionContext) -> MacroExpansion:
    return _define(context, global_=True)


@macro("\\global")
def global_prefix(context: MacroExpansionContext) -> MacroExpansion:
    token = context.pop_token()
    while token.text == "\\global":
        token = context.pop_token()
    if token.text not in _DEFINERS:
        raise ParseError(
            "Invalid token after \\global",
            ParseErrorKind.INVALID_DEFINITION,
            token,
        )
    return _define(context, global_=True)


def _new_command(
    context: MacroExpansionContext,
    *,
    exists_ok: bool,
    nonexists_ok: bool,
    skip_if_exists: bool,
) -> MacroExpansion:
    (name_arg,) = context.consume_args(1)
    if len(name_arg) != 1:
        raise ParseError(
            "\\newcommand's first argument must be a macro name",
            ParseErrorKind.INVALID_DEFINITION,
        )
    name = name_arg[0].text
    exists = context.macros.has(name)
    if exists and not exists_ok:
        raise ParseError(
            f"\\newcommand{{{name}}} attempting to redefine {name}; use \\renewcommand",
            ParseErrorKind.INVALID_DEFINITION,
        )
    if not exists and not nonexists_ok:
        raise ParseError(
            f"\\renewcommand{{{name}}} when command {name} does not yet exist; "
            "use \\newcommand",
            ParseErrorKind.INVALID_DEFINITION,
        )

    num_args = 0
    (body,) = context.consume_args(1)
    if len(body) == 1 and body[0].text == "[":
        count_text = ""
        token = context.pop_token()
        while token.text != "]" and not token.is_eof:
            count_text += token.text
            token = context.pop_token()
        if not _ARG_COUNT_RE.match(count_text):
            raise ParseError(
                f"Invalid number of arguments: {count_text}",
                ParseErrorKind.INVALID_DEFINITION,
            )
        num_args = int(count_text)
        (body,) = context.consume_args(1)

    if not (exists and skip_if_exists):
        context.macros.set(name, MacroExpansion.of(body, num_args))
    return MacroExpansion()


@macro("\\newcommand")
def newcommand(context: MacroExpansionContext) -> MacroExpansion:
    return _new_command(context, exists_ok=False, nonexists_ok=True, skip_if_exists=False)


@macro("\\renewcommand")
def renewcommand(context: MacroExpansionContext) -> MacroExpansion:
    return _new_command(context, exists_ok=True, nonexists_ok=False, skip_if_exists=False)


@macro("\\providecommand")
def providecommand(context: MacroExpansionContext) -> MacroExpansion:
    return _new_command(context, exists_ok=True, nonexists_ok=True, skip_if_exists=True)
