"""A single line of text, kept as grapheme clusters with their display widths."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

import regex
from wcwidth import wcwidth

_GRAPHEME = regex.compile(r"\X")

ELLIPSIS = "⋯"
VISIBLE_SPACE = "␣"
CONTROL_MARK = "▯"
ZERO_WIDTH_MARK = "·"


@dataclass(frozen=True)
class _Fragment:
    grapheme: str
    width: int
    replacement: str | None


def _display_width(text: str) -> int:
    return sum(max(wcwidth(ch), 0) for ch in text)


def _replacement(grapheme: str, width: int) -> str | None:
    if grapheme == " ":
        return None
    if grapheme == "\t":
        return " "
    if width > 0 and not grapheme.strip():
        return VISIBLE_SPACE
    if width == 0:
        if len(grapheme) == 1 and unicodedata.category(grapheme) == "Cc":
            return CONTROL_MARK
        return ZERO_WIDTH_MARK
    return None


def _to_fragments(text: str) -> list[_Fragment]:
    fragments = []
    for grapheme in _GRAPHEME.findall(text):
        width = _display_width(grapheme)
        replacement = _replacement(grapheme, width)
        rendered = 1 if replacement is not None or width <= 1 else 2
        fragments.append(_Fragment(grapheme, rendered, replacement))
    return fragments


class Line:
    """A line of text addressed by grapheme index."""

    __slots__ = ("_fragments",)

    def __init__(self, text: str = "") -> None:
        self._fragments = _to_fragments(text)

    @classmethod
    def from_str(cls, line_str: str) -> Line:
        return cls(line_str)

    def __str__(self) -> str:
        return "".join(fragment.grapheme for fragment in self._fragments)

    def __repr__(self) -> str:
        return f"Line({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._fragments == other._fragments

    def get_visible_graphemes(self, start: int, end: int) -> str:
        """Render the columns in [start, end), marking clipped graphemes with an ellipsis."""
        if start >= end:
            return ""
        parts = []
        position = 0
        for fragment in self._fragments:
            fragment_end = position + fragment.width
            if position >= end:
                break
            if fragment_end > start:
                if fragment_end > end or position < start:
                    parts.append(ELLIPSIS)
                elif fragment.replacement is not None:
                    parts.append(fragment.replacement)
                else:
                    parts.append(fragment.grapheme)
            position = fragment_end
        return "".join(parts)

    def grapheme_count(self) -> int:
        return len(self._fragments)

    def width_until(self, grapheme_index: int) -> int:
        """Rendered width of the graphemes before ``grapheme_index``."""
        return sum(fragment.width for fragment in self._fragments[:grapheme_index])

    def _graphemes(self) -> list[str]:
        return [fragment.grapheme for fragment in self._fragments]

    def insert_char(self, character: str, at: int) -> None:
        graphemes = self._graphemes()
        graphemes.insert(min(at, len(graphemes)), character)
        self._fragments = _to_fragments("".join(graphemes))

    def delete(self, at: int) -> None:
        graphemes = self._graphemes()
        if 0 <= at < len(graphemes):
            del graphemes[at]
        self._fragments = _to_fragments("".join(graphemes))

    def append(self, other: Line) -> None:
        self._fragments = _to_fragments(str(self) + str(other))

    def split(self, at: int) -> Line:
        """Cut the line at ``at`` and return the part after it."""
        remainder = Line()
        if at > len(self._fragments):
            return remainder
        remainder._fragments = self._fragments[at:]
        self._fragments = self._fragments[:at]
        return remainder