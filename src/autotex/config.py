"""ContextVar-based render configuration for autotex.

Provides per-context configuration using Python's ContextVars (PEP 567).
A render pass sets its RenderConfig once; the traversal and the per-region
driver read it from the context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so one thread's render pass never sees another's configuration.

Usage:
    # From a plain options mapping, camelCase names accepted
    config = RenderConfig.from_dict({"fences": "$", "ignoredTags": ["pre"]})

    # Or use the context manager
    with render_config_context(config):
        parts = render_math_in_text("Euler: $e^{i\\pi} = -1$")

"""

from collections.abc import Callable, Mapping, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator

from autotex.delimiters import DelimiterSpec
from autotex.errors import ParseError
from autotex.expander import DEFAULT_MAX_EXPAND

type ErrorCallback = Callable[[str, ParseError], None]
type PreProcess = Callable[[str], str]

DEFAULT_IGNORED_TAGS: frozenset[str] = frozenset(
    {"script", "noscript", "style", "textarea", "pre", "code", "option"}
)

# Option names as the browser-side API spells them
_ALIASES = MappingProxyType(
    {
        "ignoredTags": "ignored_tags",
        "ignoredClasses": "ignored_classes",
        "errorCallback": "error_callback",
        "preProcess": "pre_process",
        "maxExpand": "max_expand",
        "rendererOptions": "renderer_options",
    }
)


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        delimiters: Explicit delimiter list, tried in order; overrides
            ``fences`` (None: use the preset)
        fences: Preset key (``"$"``, ``"("``, ``"$+"``, ``"(+"``, ``"ams"``,
            ``"all"``); ignored when ``delimiters`` is set
        ignored_tags: Element tags whose subtrees are left alone
        ignored_classes: CSS classes whose elements are left alone
        error_callback: Called with a message prefix and the ParseError of a
            region that failed (None: log the error)
        macros: Seed macros shared by every region of one pass
        pre_process: Applied to each math region's content before rendering
        max_expand: Expansion step limit per region
        renderer_options: Every other option, passed through to the renderer

    """

    delimiters: tuple[DelimiterSpec, ...] | None = None
    fences: str | None = None
    ignored_tags: frozenset[str] = DEFAULT_IGNORED_TAGS
    ignored_classes: frozenset[str] = frozenset()
    error_callback: ErrorCallback | None = None
    macros: Mapping[str, Any] = field(default_factory=dict)
    pre_process: PreProcess | None = None
    max_expand: int = DEFAULT_MAX_EXPAND
    renderer_options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "RenderConfig":
        """Create RenderConfig from an options mapping.

        Keys may be field names or the camelCase names of the browser API
        (``ignoredTags``, ``errorCallback``, ...). Keys that are neither are
        collected into ``renderer_options``.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "fences": "$",
            ...     "ignoredClasses": ["no-math"],
            ...     "throwOnError": False,
            ... })
            >>> config.ignored_classes
            frozenset({'no-math'})
            >>> config.renderer_options
            {'throwOnError': False}

        """
        valid_fields = set(cls.__dataclass_fields__)
        values: dict[str, Any] = {}
        passthrough: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = _ALIASES.get(key, key)
            if name in valid_fields:
                values[name] = value
            else:
                passthrough[key] = value

        if values.get("delimiters") is not None:
            values["delimiters"] = tuple(
                spec if isinstance(spec, DelimiterSpec) else DelimiterSpec.from_dict(spec)
                for spec in values["delimiters"]
            )
        for name in ("ignored_tags", "ignored_classes"):
            if name in values:
                values[name] = frozenset(values[name])
        if passthrough:
            values["renderer_options"] = {**values.get("renderer_options", {}), **passthrough}
        return cls(**values)

    @property
    def delimiter_list(self) -> Sequence[DelimiterSpec] | None:
        """Explicit delimiters as a list, for resolve_delimiters()."""
        return None if self.delimiters is None else list(self.delimiters)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

# Thread-local configuration via ContextVar
_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(fences="$")):
        ...     get_render_config().fences
        '$'

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "DEFAULT_IGNORED_TAGS",
    "ErrorCallback",
    "PreProcess",
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
]
