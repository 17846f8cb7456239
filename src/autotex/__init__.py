"""
autotex — Find and expand TeX math in text.

Scans text for math delimiters (``$$…$$``, ``\\(…\\)``, AMS environments and
more), expands the TeX macros inside each region with a catalogue of
amsmath, mathtools and LaTeX built-ins, and hands the result to a renderer.

Quick Start:
    >>> from autotex import render_math_in_text, RenderConfig
    >>> parts = render_math_in_text("Sum: $a \\\\dots + b$", RenderConfig(fences="$"))
    >>> parts[1].expansion
    'a \\\\@cdots+ b'

    >>> # Or use the high-level AutoRender class
    >>> from autotex import AutoRender
    >>> auto = AutoRender(fences="$", macros={"\\\\RR": "\\\\mathbb{R}"})
    >>> auto("$x \\\\in \\\\RR$")[0].expansion
    'x \\\\in \\\\mathbb{R}'

Custom Macros:
    >>> from autotex import MacroExpansion, define_macro, macro
    >>> define_macro("\\\\half", "\\\\frac{1}{2}")
    >>> @macro("\\\\swap")
    ... def swap(context):
    ...     first, second = context.consume_args(2)
    ...     return MacroExpansion.of(second + first)
"""

from collections.abc import Mapping
from typing import Any

from autotex.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from autotex.delimiters import (
    DEFAULT_DELIMITERS,
    DelimiterSpec,
    delimiters_from_key,
    resolve_delimiters,
)
from autotex.dom import Element, MathNode, Text, render_math_in_element
from autotex.errors import AutoTexError, MacroScopeError, ParseError, ParseErrorKind
from autotex.expander import MacroExpander
from autotex.lexer import Lexer, tokenize
from autotex.macros import (
    MacroExpansion,
    MacroExpansionContext,
    MacroTable,
    ProcedureMacro,
    TemplateMacro,
    create_macro_table,
    define_macro,
    macro,
)
from autotex.render import (
    ExpandingRenderer,
    MathRenderer,
    RenderedMath,
    RenderFailure,
    render_math_in_text,
)
from autotex.scanner import MathSegment, TextSegment, find_end_of_math, split_at_delimiters
from autotex.tokens import Token, tokens_to_text

__version__ = "0.1.0"


def expand(
    source: str,
    macros: Mapping[str, Any] | MacroTable | None = None,
    *,
    max_expand: int | None = None,
) -> str:
    """Expand every macro in a piece of math source.

    Args:
        source: Math source without delimiters
        macros: Extra macro definitions, or a table to expand against
        max_expand: Expansion step limit (default: the context's config)

    Returns:
        Expanded TeX source

    Raises:
        ParseError: If the source is malformed
    """
    if max_expand is None:
        max_expand = get_render_config().max_expand
    table = create_macro_table(macros)
    with table.group():
        return tokens_to_text(MacroExpander(source, table, max_expand=max_expand).expand())


class AutoRender:
    """High-level math renderer holding one configuration.

    Options are the fields of RenderConfig, by name or by their camelCase
    spelling; anything else is passed through to the renderer.

    Usage:
        >>> auto = AutoRender(fences="$")
        >>> parts = auto("Euler: $e^{i\\\\pi}=-1$")

        >>> # Render an element tree in place
        >>> root = Element("div", [Text("$$x^2$$")])
        >>> auto.render_element(root)

    Thread Safety:
        The configuration is immutable and each call builds its own macro
        table. Safe to share an instance between threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(self, *, renderer: MathRenderer | None = None, **options: Any) -> None:
        """Initialize renderer.

        Args:
            renderer: Math renderer (default: a fresh ExpandingRenderer per call)
            **options: Render options, see RenderConfig.from_dict
        """
        self._config = RenderConfig.from_dict(options)
        self._renderer = renderer

    @property
    def config(self) -> RenderConfig:
        return self._config

    def __call__(self, text: str) -> list[str | RenderedMath] | None:
        """Render the math in a text; None if it has none."""
        with render_config_context(self._config):
            return render_math_in_text(text, self._config, renderer=self._renderer)

    def render_element(self, element: Element) -> None:
        """Render the math below an element, in place."""
        render_math_in_element(element, self._config, renderer=self._renderer)


__all__ = [  # noqa: RUF022 — grouped by category
    # Version
    "__version__",
    # Core API
    "AutoRender",
    "expand",
    "render_math_in_element",
    "render_math_in_text",
    # Configuration
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
    # Delimiters and scanning
    "DEFAULT_DELIMITERS",
    "DelimiterSpec",
    "MathSegment",
    "TextSegment",
    "delimiters_from_key",
    "find_end_of_math",
    "resolve_delimiters",
    "split_at_delimiters",
    # Tokens and expansion
    "Lexer",
    "MacroExpander",
    "Token",
    "tokenize",
    "tokens_to_text",
    # Macros
    "MacroExpansion",
    "MacroExpansionContext",
    "MacroTable",
    "ProcedureMacro",
    "TemplateMacro",
    "create_macro_table",
    "define_macro",
    "macro",
    # Rendering
    "ExpandingRenderer",
    "MathRenderer",
    "RenderFailure",
    "RenderedMath",
    # Element tree
    "Element",
    "MathNode",
    "Text",
    # Errors
    "AutoTexError",
    "MacroScopeError",
    "ParseError",
    "ParseErrorKind",
]
