"""Delimiter tables for locating math in text.

A delimiter table is an ordered tuple of DelimiterSpec. The scanner tries
specs in order and the first whose ``left`` matches wins, so a table that
contains both ``$$`` and ``$`` must list ``$$`` first.

Presets (selected with the ``fences`` option):
- default: ``$$``, ``\\(``, AMS environments, ``\\ref{``/``\\eqref{``, ``\\[``
- ``"$"``: ``$$``, ``$`` with backticks, ``$``
- ``"("``: ``\\[``, ``\\(``
- ``"$+"`` / ``"(+"``: the above plus the AMS table
- ``"ams"``: AMS environments and references only
- ``"all"``: ``"("`` + ``"$"`` + AMS

An explicit ``delimiters`` list overrides the preset.

Thread Safety:
All tables are tuples of frozen dataclasses. Safe to share.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DelimiterSpec:
    """One pair of math delimiters.

    Attributes:
        left: Opening delimiter (non-empty)
        right: Closing delimiter
        display: Render the enclosed math in display mode

    """

    left: str
    right: str
    display: bool = False

    def __post_init__(self) -> None:
        if not self.left:
            msg = "DelimiterSpec.left must be a non-empty string"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, spec: dict) -> DelimiterSpec:
        """Build a spec from a ``{"left", "right", "display"}`` mapping."""
        return cls(
            left=spec["left"],
            right=spec["right"],
            display=bool(spec.get("display", False)),
        )


def _environment(name: str) -> DelimiterSpec:
    return DelimiterSpec(f"\\begin{{{name}}}", f"\\end{{{name}}}", display=True)


AMS_ENVIRONMENTS: tuple[str, ...] = (
    "equation",
    "equation*",
    "align",
    "align*",
    "alignat",
    "alignat*",
    "gather",
    "gather*",
    "CD",
)

# \ref and \eqref are rendered as inline math so links survive
AMS_REFERENCES: tuple[DelimiterSpec, ...] = (
    DelimiterSpec("\\ref{", "}", display=False),
    DelimiterSpec("\\eqref{", "}", display=False),
)

AMS_DELIMITERS: tuple[DelimiterSpec, ...] = (
    *(_environment(name) for name in AMS_ENVIRONMENTS),
    *AMS_REFERENCES,
)

DEFAULT_DELIMITERS: tuple[DelimiterSpec, ...] = (
    DelimiterSpec("$$", "$$", display=True),
    DelimiterSpec("\\(", "\\)", display=False),
    # Single $ is left out: it ruins ordinary dollar amounts in prose.
    *AMS_DELIMITERS,
    DelimiterSpec("\\[", "\\]", display=True),
)

DOLLAR_DELIMITERS: tuple[DelimiterSpec, ...] = (
    DelimiterSpec("$$", "$$", display=True),
    DelimiterSpec("$`", "`$", display=False),
    DelimiterSpec("$", "$", display=False),
)

PAREN_DELIMITERS: tuple[DelimiterSpec, ...] = (
    DelimiterSpec("\\[", "\\]", display=True),
    DelimiterSpec("\\(", "\\)", display=False),
)

_BASE_PRESETS: dict[str, tuple[DelimiterSpec, ...]] = {
    "$": DOLLAR_DELIMITERS,
    "(": PAREN_DELIMITERS,
}

FENCE_KEYS: frozenset[str] = frozenset({"$", "(", "$+", "(+", "ams", "all"})


def delimiters_from_key(key: str | None) -> tuple[DelimiterSpec, ...]:
    """Select a preset delimiter table.

    Unknown or missing keys select DEFAULT_DELIMITERS; there is no error
    path.

    Args:
        key: One of ``"$"``, ``"("``, ``"$+"``, ``"(+"``, ``"ams"``,
            ``"all"``; anything else means the default table

    Returns:
        Ordered delimiter table

    Example:
        >>> [d.left for d in delimiters_from_key("$")]
        ['$$', '$`', '$']
    """
    if key in ("$", "("):
        return _BASE_PRESETS[key]
    if key in ("$+", "(+"):
        return _BASE_PRESETS[key[0]] + AMS_DELIMITERS
    if key == "ams":
        return AMS_DELIMITERS
    if key == "all":
        return PAREN_DELIMITERS + DOLLAR_DELIMITERS + AMS_DELIMITERS
    return DEFAULT_DELIMITERS


def resolve_delimiters(
    key: str | None = None,
    delimiters: Iterable[DelimiterSpec | dict] | None = None,
) -> tuple[DelimiterSpec, ...]:
    """Resolve configuration into an ordered delimiter table.

    An explicit list overrides the preset key and is used as given;
    ordering ``$$`` before ``$`` is the caller's job.

    Args:
        key: Preset key (the ``fences`` option), used when no list is given
        delimiters: Explicit table (the ``delimiters`` option); items may be
            DelimiterSpec or ``{"left", "right", "display"}`` dicts

    Returns:
        Ordered delimiter table
    """
    if delimiters is not None:
        return tuple(
            spec if isinstance(spec, DelimiterSpec) else DelimiterSpec.from_dict(spec)
            for spec in delimiters
        )
    return delimiters_from_key(key)


__all__ = [
    "AMS_DELIMITERS",
    "DEFAULT_DELIMITERS",
    "DOLLAR_DELIMITERS",
    "FENCE_KEYS",
    "PAREN_DELIMITERS",
    "DelimiterSpec",
    "delimiters_from_key",
    "resolve_delimiters",
]
