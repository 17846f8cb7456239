"""Token-level macro expander.

MacroExpander is the concrete MacroExpansionContext. It owns the token
stream of one math region (a lexer plus a push-back stack) and expands
macros from a MacroTable until none remain.

The push-back stack is a deque whose left end is the front of the input,
so pushing tokens back and reading the next token are both O(1) without
storing token lists in reverse.

Thread Safety:
An expander is single-use: create one per math region. The MacroTable it
expands against may be shared; hold ``table.group()`` around the whole
expansion to keep other threads out of it.

"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from functools import lru_cache

from autotex.errors import ParseError, ParseErrorKind
from autotex.lexer import ACTIVE_CATCODE, Lexer
from autotex.macros.definitions import (
    MacroExpansion,
    ProcedureMacro,
    TemplateMacro,
)
from autotex.macros.protocol import Mode
from autotex.macros.registry import MacroTable
from autotex.tokens import Token, tokens_to_string

# Upper bound on expansion steps per region; guards against \def\a{\a}
DEFAULT_MAX_EXPAND = 1000

_ARG_DIGITS = frozenset("123456789")


@lru_cache(maxsize=1024)
def _lex_template(body: str) -> MacroExpansion:
    """Tokenize a template body and count its ``#n`` parameters.

    The parameter count is the largest n such that ``#1``..``#n`` all
    appear, ignoring escaped ``##``.
    """
    num_args = 0
    if "#" in body:
        stripped = body.replace("##", "")
        while f"#{num_args + 1}" in stripped:
            num_args += 1
    return MacroExpansion(tokens=tuple(Lexer(body).tokenize()), num_args=num_args)


def substitute_args(tokens: Iterable[Token], args: list[list[Token]]) -> list[Token]:
    """Replace ``#n`` with argument n and ``##`` with ``#``.

    Raises:
        ParseError: For a dangling ``#`` or an unknown argument number
    """
    body = list(tokens)
    result: list[Token] = []
    i = 0
    while i < len(body):
        token = body[i]
        if token.text != "#":
            result.append(token)
            i += 1
            continue
        if i + 1 == len(body):
            raise ParseError(
                "Incomplete placeholder at end of macro body",
                ParseErrorKind.INVALID_PLACEHOLDER,
                token,
            )
        following = body[i + 1]
        if following.text == "#":
            result.append(following)
        elif following.text in _ARG_DIGITS and int(following.text) <= len(args):
            result.extend(args[int(following.text) - 1])
        else:
            raise ParseError(
                "Not a valid argument number",
                ParseErrorKind.INVALID_PLACEHOLDER,
                following,
            )
        i += 2
    return result


class MacroExpander:
    """Expand macros in one math region.

    Usage:
        >>> table = create_macro_table({"\\\\RR": "\\\\mathbb{R}"})
        >>> expander = MacroExpander("x \\\\in \\\\RR", table)
        >>> tokens_to_text(expander.expand())
        'x \\\\in \\\\mathbb{R}'

    """

    __slots__ = ("_lexer", "_stack", "macros", "mode", "max_expand", "expansion_count")

    def __init__(
        self,
        source: str,
        macros: MacroTable,
        *,
        mode: Mode = "math",
        max_expand: int = DEFAULT_MAX_EXPAND,
    ) -> None:
        """Initialize expander.

        Args:
            source: Math source to expand
            macros: Table to read definitions from and define into
            mode: Initial typesetting mode
            max_expand: Maximum number of expansion steps
        """
        self.macros = macros
        self.mode: Mode = mode
        self.max_expand = max_expand
        self.expansion_count = 0
        self._stack: deque[Token] = deque()
        self._lexer = Lexer(source)

    def feed(self, source: str) -> None:
        """Replace the remaining input with a new source string."""
        self._lexer = Lexer(source)

    def switch_mode(self, mode: Mode) -> None:
        self.mode = mode

    def begin_group(self) -> None:
        self.macros.begin_group()

    def end_group(self) -> None:
        self.macros.end_group()

    # =========================================================================
    # Reading and pushing back
    # =========================================================================

    def future(self) -> Token:
        """Return the next token without consuming or expanding it."""
        if not self._stack:
            self._stack.append(self._lexer.lex())
        return self._stack[0]

    def pop_token(self) -> Token:
        """Remove and return the next token (EOF at end of input)."""
        self.future()
        return self._stack.popleft()

    def push_token(self, token: Token) -> None:
        """Put a token back at the front of the input."""
        self._stack.appendleft(token)

    def push_tokens(self, tokens: Iterable[Token]) -> None:
        """Put tokens back so that they are read in the given order."""
        self._stack.extendleft(reversed(list(tokens)))

    def consume_spaces(self) -> None:
        """Discard space tokens at the front of the input."""
        while self.future().is_space:
            self._stack.popleft()

    # =========================================================================
    # Arguments
    # =========================================================================

    def consume_arg(self) -> list[Token]:
        """Read one undelimited argument.

        Leading spaces are skipped. A brace group loses its outer braces.

        Raises:
            ParseError: On ``Extra }`` or end of input inside the argument
        """
        self.consume_spaces()
        start = self.future()
        tokens: list[Token] = []
        depth = 0
        while True:
            token = self.pop_token()
            tokens.append(token)
            if token.text == "{":
                depth += 1
            elif token.text == "}":
                depth -= 1
                if depth == -1:
                    raise ParseError("Extra }", ParseErrorKind.UNBALANCED_BRACES, token)
            elif token.is_eof:
                raise ParseError(
                    "Unexpected end of input in a macro argument, expected '}'",
                    ParseErrorKind.MISSING_ARGUMENT,
                    token,
                )
            if depth == 0:
                break

        if start.text == "{" and tokens[-1].text == "}":
            tokens = tokens[1:-1]
        return tokens

    def consume_args(self, num_args: int) -> list[list[Token]]:
        """Read ``num_args`` undelimited arguments in reading order."""
        return [self.consume_arg() for _ in range(num_args)]

    # =========================================================================
    # Expansion
    # =========================================================================

    def count_expansion(self, amount: int) -> None:
        """Charge expansion steps against max_expand.

        Raises:
            ParseError: When the budget is exhausted
        """
        self.expansion_count += amount
        if self.expansion_count > self.max_expand:
            raise ParseError(
                "Too many expansions: infinite loop or need to increase max_expand",
                ParseErrorKind.TOO_MANY_EXPANSIONS,
            )

    def _get_expansion(self, name: str) -> MacroExpansion | None:
        definition = self.macros.get(name)
        if definition is None:
            return None
        if len(name) == 1:
            # Only active characters expand
            catcode = self._lexer.catcodes.get(name)
            if catcode is not None and catcode != ACTIVE_CATCODE:
                return None

        if isinstance(definition, ProcedureMacro):
            result = definition(self)
        elif isinstance(definition, TemplateMacro):
            result = definition.body
        else:
            result = definition

        if isinstance(result, str):
            return _lex_template(result)
        return result

    def expand_once(self, expandable_only: bool = False) -> bool:
        """Expand the next token by one step.

        Args:
            expandable_only: Leave unexpandable macros in place

        Returns:
            True if a macro was expanded; False if the next token was left
            in place (not a macro, marked ``noexpand``, or unexpandable)
        """
        top = self.pop_token()
        expansion = None if top.noexpand else self._get_expansion(top.text)
        if expansion is None or (expandable_only and expansion.unexpandable):
            self.push_token(top)
            return False

        self.count_expansion(1)
        tokens: Iterable[Token] = expansion.tokens
        if expansion.num_args:
            args = self.consume_args(expansion.num_args)
            tokens = substitute_args(tokens, args)
        self.push_tokens(tokens)
        return True

    def expand_after_future(self) -> Token:
        """Expand the next token once, then peek the result."""
        self.expand_once()
        return self.future()

    def expand_tokens(self, tokens: Iterable[Token]) -> list[Token]:
        """Fully expand a token list.

        Returns:
            Unexpandable tokens, with ``noexpand`` marks cleared
        """
        output: list[Token] = []
        old_length = len(self._stack)
        self.push_tokens(tokens)
        while len(self._stack) > old_length:
            if not self.expand_once(True):
                output.append(self._stack.popleft().plain())
        self.count_expansion(len(output))
        return output

    def expand_macro(self, name: str) -> list[Token] | None:
        """Fully expand a single macro, or None if it is undefined."""
        if not self.macros.has(name):
            return None
        return self.expand_tokens([Token(name)])

    def expand_macro_as_text(self, name: str) -> str | None:
        """Fully expand a macro and join the result into a string."""
        tokens = self.expand_macro(name)
        return None if tokens is None else tokens_to_string(tokens)

    def expand(self) -> list[Token]:
        """Fully expand the rest of the input.

        Returns:
            Output tokens in reading order, ``noexpand`` marks cleared
        """
        output: list[Token] = []
        while True:
            if self.expand_once(True):
                continue
            token = self.pop_token()
            if token.is_eof:
                return output
            output.append(token.plain())

    # =========================================================================
    # Queries
    # =========================================================================

    def is_expandable(self, name: str) -> bool:
        """True if name currently has an expandable macro definition."""
        definition = self.macros.get(name)
        if definition is None:
            return False
        return not (isinstance(definition, MacroExpansion) and definition.unexpandable)


__all__ = [
    "DEFAULT_MAX_EXPAND",
    "MacroExpander",
    "substitute_args",
]
