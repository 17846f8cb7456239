"""Split text into plain-text and math segments.

The scanner finds the earliest left delimiter, then walks forward to the
matching right delimiter while tracking brace depth and backslash escapes:

    $$ a{$$}b $$     ->  math " a{$$}b "  (the inner $$ is inside a group)
    $a\\$b$          ->  math "a\\$b"      (an escaped $ never terminates)

An unterminated region is not an error. Scanning stops and everything
after the last closed region, delimiter included, is kept as one plain-text
segment.

Thread Safety:
split_at_delimiters is a pure function. Segments are frozen dataclasses.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

from autotex.delimiters import DelimiterSpec

# Raw slices starting like this keep their delimiters as math source,
# because \begin{..}..\end{..} and \ref{..} are TeX syntax themselves.
_AMS_RE = re.compile(r"^\\(?:begin|(?:eq)?ref)\{")


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Plain text between math regions."""

    content: str

    @property
    def raw_content(self) -> str:
        return self.content


@dataclass(frozen=True, slots=True)
class MathSegment:
    """A math region.

    Attributes:
        content: Math source handed to the renderer
        raw_content: Original text including both delimiters, used to
            restore the text verbatim when rendering fails
        display: Display mode taken from the matched DelimiterSpec

    """

    content: str
    raw_content: str
    display: bool


type Segment = TextSegment | MathSegment


def find_end_of_math(delimiter: str, text: str, start: int) -> int:
    """Find the index of the closing delimiter.

    ``{`` and ``}`` adjust the brace level and the delimiter only counts at
    level zero or below. A backslash skips the character after it.

    Args:
        delimiter: Right delimiter to look for
        text: Text to search
        start: Index just past the left delimiter

    Returns:
        Index of the right delimiter, or -1 if it never closes
    """
    index = start
    brace_level = 0
    text_length = len(text)

    while index < text_length:
        char = text[index]

        if brace_level <= 0 and text.startswith(delimiter, index):
            return index
        if char == "\\":
            index += 1
        elif char == "{":
            brace_level += 1
        elif char == "}":
            brace_level -= 1

        index += 1

    return -1


@lru_cache(maxsize=64)
def _left_pattern(lefts: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile("|".join(re.escape(left) for left in lefts))


def split_at_delimiters(
    text: str,
    delimiters: Sequence[DelimiterSpec],
) -> list[Segment]:
    """Split text into an ordered list of text and math segments.

    Args:
        text: Input text
        delimiters: Ordered delimiter table; first matching ``left`` wins

    Returns:
        Segments in source order. Joining each segment's ``raw_content``
        reproduces ``text``. Text without math yields one TextSegment.

    Example:
        >>> split_at_delimiters("a $b$ c", [DelimiterSpec("$", "$")])
        [TextSegment(content='a '), MathSegment(content='b', raw_content='$b$', display=False), TextSegment(content=' c')]
    """
    segments: list[Segment] = []
    if not delimiters:
        return [TextSegment(text)] if text else segments

    pattern = _left_pattern(tuple(spec.left for spec in delimiters))
    pos = 0

    while True:
        match = pattern.search(text, pos)
        if match is None:
            break
        index = match.start()

        # The regex matched, so some left delimiter starts here
        spec = next(d for d in delimiters if text.startswith(d.left, index))
        content_start = index + len(spec.left)
        end = find_end_of_math(spec.right, text, content_start)
        if end == -1:
            # Unterminated: the pending text and the rest stay one segment
            break

        if index > pos:
            segments.append(TextSegment(text[pos:index]))
        raw_end = end + len(spec.right)
        raw = text[index:raw_end]
        math = raw if _AMS_RE.match(raw) else text[content_start:end]
        segments.append(MathSegment(content=math, raw_content=raw, display=spec.display))
        pos = raw_end

    if pos < len(text):
        segments.append(TextSegment(text[pos:]))

    return segments


def has_math(segments: Sequence[Segment]) -> bool:
    """True unless the scan found nothing but plain text."""
    return any(isinstance(segment, MathSegment) for segment in segments)


__all__ = [
    "MathSegment",
    "Segment",
    "TextSegment",
    "find_end_of_math",
    "has_math",
    "split_at_delimiters",
]
