"""Render the math regions of a text.

render_math_in_text splits a text at its math delimiters, hands every math
region to a renderer and returns the text and rendered pieces in order. A
region whose math fails to parse is reported to the error callback and
kept as its original text, delimiters included.

The renderer is any callable ``renderer(source, display_mode, options)``
returning a RenderedMath. The default, ExpandingRenderer, expands the
region's macros and leaves typesetting to the caller.

Example:
    >>> parts = render_math_in_text("Let $\\\\RR^n$ be", RenderConfig(
    ...     fences="$", macros={"\\\\RR": "\\\\mathbb{R}"}))
    >>> parts[1].expansion
    '\\\\mathbb{R}^n'

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from autotex.config import RenderConfig, get_render_config
from autotex.delimiters import DelimiterSpec, resolve_delimiters
from autotex.errors import ParseError
from autotex.expander import DEFAULT_MAX_EXPAND, MacroExpander
from autotex.macros.builtins.amsmath import TAG_MACRO
from autotex.macros.registry import MacroTable, create_macro_table
from autotex.scanner import MathSegment, TextSegment, has_math, split_at_delimiters
from autotex.tokens import tokens_to_text
from autotex.utils.logger import get_logger

logger = get_logger(__name__)

ERROR_PREFIX = "autotex: Failed to parse `{}` with "


@dataclass(frozen=True, slots=True)
class RenderedMath:
    """One successfully rendered math region.

    Attributes:
        source: Math source as handed to the renderer
        expansion: Source with every macro expanded
        display: Display mode of the region
        tag: Expanded ``\\tag`` of the formula, if it had one

    """

    source: str
    expansion: str
    display: bool
    tag: str | None = None


@dataclass(frozen=True, slots=True)
class RenderFailure:
    """A math region that failed to parse; rendered as its raw text."""

    segment: MathSegment
    error: ParseError


type RenderResult = RenderedMath | RenderFailure


class MathRenderer(Protocol):
    """Protocol for math renderers.

    Implementations raise ParseError for malformed math. Any other
    exception propagates out of the render pass.

    """

    def __call__(
        self,
        source: str,
        display_mode: bool,
        options: Mapping[str, Any],
    ) -> RenderedMath: ...


class ExpandingRenderer:
    """Default renderer: expand every macro of a region.

    Regions rendered by one instance share its macro table, so a ``\\gdef``
    in one region is visible in the next. Each region expands inside its
    own group, so local ``\\def`` definitions end with the region.

    Thread Safety:
        The table is held for the whole expansion of a region; concurrent
        calls are serialized.

    """

    __slots__ = ("macros", "max_expand")

    def __init__(
        self,
        macros: Mapping[str, Any] | MacroTable | None = None,
        *,
        max_expand: int = DEFAULT_MAX_EXPAND,
    ) -> None:
        self.macros = create_macro_table(macros)
        self.max_expand = max_expand

    def __call__(
        self,
        source: str,
        display_mode: bool = False,
        options: Mapping[str, Any] | None = None,
    ) -> RenderedMath:
        """Expand one region.

        Raises:
            ParseError: If the math is malformed
        """
        with self.macros.group():
            expander = MacroExpander(source, self.macros, max_expand=self.max_expand)
            try:
                expansion = tokens_to_text(expander.expand())
                tag_tokens = expander.expand_macro(TAG_MACRO)
            finally:
                # One \tag per formula
                self.macros.set(TAG_MACRO, None, global_=True)

        tag = None if tag_tokens is None else tokens_to_text(tag_tokens)
        return RenderedMath(source=source, expansion=expansion, display=display_mode, tag=tag)


def default_error_callback(message: str, error: ParseError) -> None:
    logger.error("%s%s", message, error)


def render_segment(
    segment: MathSegment,
    renderer: MathRenderer,
    config: RenderConfig,
) -> RenderResult:
    """Render one math segment, turning a ParseError into a RenderFailure.

    The error callback is called before returning a failure.
    """
    math = segment.content
    try:
        if config.pre_process is not None:
            math = config.pre_process(math)
        return renderer(math, segment.display, config.renderer_options)
    except ParseError as e:
        callback = config.error_callback or default_error_callback
        callback(ERROR_PREFIX.format(segment.content), e)
        return RenderFailure(segment, e)


def render_math_in_text(
    text: str,
    config: RenderConfig | None = None,
    *,
    renderer: MathRenderer | None = None,
    delimiters: tuple[DelimiterSpec, ...] | None = None,
) -> list[str | RenderedMath] | None:
    """Render every math region of a text.

    Args:
        text: Text to scan
        config: Render options (default: the context's RenderConfig)
        renderer: Math renderer (default: an ExpandingRenderer over
            ``config.macros``)
        delimiters: Resolved delimiter table, overriding the config

    Returns:
        None when the text holds no math; otherwise the pieces in order,
        plain text as ``str`` and math as RenderedMath. A failed region is
        its raw text.
    """
    if config is None:
        config = get_render_config()
    if delimiters is None:
        delimiters = resolve_delimiters(config.fences, config.delimiter_list)

    segments = split_at_delimiters(text, delimiters)
    if not has_math(segments):
        return None

    if renderer is None:
        renderer = ExpandingRenderer(config.macros, max_expand=config.max_expand)

    parts: list[str | RenderedMath] = []
    for segment in segments:
        if isinstance(segment, TextSegment):
            parts.append(segment.content)
            continue
        result = render_segment(segment, renderer, config)
        if isinstance(result, RenderFailure):
            parts.append(segment.raw_content)
        else:
            parts.append(result)
    return parts


__all__ = [
    "ERROR_PREFIX",
    "ExpandingRenderer",
    "MathRenderer",
    "RenderFailure",
    "RenderResult",
    "RenderedMath",
    "default_error_callback",
    "render_math_in_text",
    "render_segment",
]
