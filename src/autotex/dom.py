"""A minimal element tree and math rendering over it.

The tree has three node types: Element (a tag with classes and children),
Text and MathNode (a rendered math region spliced into the tree).
render_math_in_element walks an element, replaces every text child that
contains math with its text and math pieces, and descends into child
elements unless their tag or one of their classes is ignored.

Example:
    >>> root = Element("p", [Text("Area: $\\\\pi r^2$")])
    >>> render_math_in_element(root, RenderConfig(fences="$"))
    >>> [type(child).__name__ for child in root.children]
    ['Text', 'MathNode']

Thread Safety:
Elements are mutable. Render a tree from one thread at a time.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from autotex.config import RenderConfig, get_render_config, render_config_context
from autotex.delimiters import DelimiterSpec, resolve_delimiters
from autotex.macros.registry import create_macro_table
from autotex.render import ExpandingRenderer, MathRenderer, RenderedMath, render_math_in_text
from autotex.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class Text:
    """A text node."""

    data: str


@dataclass(slots=True)
class MathNode:
    """Rendered math spliced into the tree in place of its source text."""

    math: RenderedMath

    @property
    def display(self) -> bool:
        return self.math.display


type Node = Element | Text | MathNode


@dataclass(slots=True)
class Element:
    """An element node.

    Attributes:
        tag: Tag name, compared case-insensitively against ignored tags
        children: Child nodes in document order
        class_name: Space-separated class list, as in HTML's ``class``

    """

    tag: str
    children: list[Node] = field(default_factory=list)
    class_name: str = ""

    @property
    def classes(self) -> frozenset[str]:
        return frozenset(self.class_name.split())

    def append(self, node: Node) -> Element:
        self.children.append(node)
        return self

    def iter_math(self) -> Iterator[MathNode]:
        """Yield every MathNode below this element in document order."""
        for child in self.children:
            if isinstance(child, MathNode):
                yield child
            elif isinstance(child, Element):
                yield from child.iter_math()

    @property
    def text_content(self) -> str:
        """Concatenated text of every descendant; math contributes its source."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Text):
                parts.append(child.data)
            elif isinstance(child, MathNode):
                parts.append(child.math.source)
            else:
                parts.append(child.text_content)
        return "".join(parts)


def should_render(element: Element, config: RenderConfig) -> bool:
    """True unless the element's tag or one of its classes is ignored."""
    if element.tag.lower() in config.ignored_tags:
        return False
    return config.ignored_classes.isdisjoint(element.classes)


def _render_element(
    element: Element,
    config: RenderConfig,
    delimiters: tuple[DelimiterSpec, ...],
    renderer: MathRenderer,
) -> None:
    children = element.children
    index = 0
    while index < len(children):
        child = children[index]
        if isinstance(child, Text):
            parts = render_math_in_text(
                child.data, config, renderer=renderer, delimiters=delimiters
            )
            if parts is not None:
                fragment: list[Node] = [
                    Text(part) if isinstance(part, str) else MathNode(part) for part in parts
                ]
                children[index : index + 1] = fragment
                index += len(fragment) - 1
        elif isinstance(child, Element) and should_render(child, config):
            _render_element(child, config, delimiters, renderer)
        index += 1


def render_math_in_element(
    element: Element | None,
    config: RenderConfig | None = None,
    *,
    renderer: MathRenderer | None = None,
) -> None:
    """Render all math below an element, in place.

    Every region of one call shares one macro table, so ``\\gdef`` in one
    region defines the macro for the regions after it.

    Args:
        element: Root of the tree to render
        config: Render options (default: the context's RenderConfig)
        renderer: Math renderer (default: an ExpandingRenderer)

    Raises:
        ValueError: If element is None
    """
    if element is None:
        msg = "No element provided to render"
        raise ValueError(msg)
    if config is None:
        config = get_render_config()

    delimiters = resolve_delimiters(config.fences, config.delimiter_list)
    if renderer is None:
        renderer = ExpandingRenderer(
            create_macro_table(config.macros), max_expand=config.max_expand
        )
    logger.debug("Rendering <%s> with %d delimiter pair(s)", element.tag, len(delimiters))

    with render_config_context(config):
        _render_element(element, config, delimiters, renderer)


__all__ = [
    "Element",
    "MathNode",
    "Node",
    "Text",
    "render_math_in_element",
    "should_render",
]
