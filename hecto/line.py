"""A single line of text, split into grapheme clusters for display."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

import regex
from wcwidth import wcwidth

from hecto.annotatedstring import AnnotatedString
from hecto.annotation import Annotation

_GRAPHEME = regex.compile(r"\X")

ELLIPSIS = "⋯"


class GraphemeWidth(Enum):
    """How many screen columns a grapheme occupies."""

    HALF = 1
    FULL = 2


@dataclass(frozen=True)
class TextFragment:
    """One grapheme cluster of a line and how it is drawn."""

    grapheme: str
    rendered_width: GraphemeWidth
    replacement: str | None
    start: int


def _graphemes(text: str) -> list[tuple[int, str]]:
    return [(match.start(), match.group()) for match in _GRAPHEME.finditer(text)]


def _str_width(text: str) -> int:
    return sum(max(0, wcwidth(ch)) for ch in text)


def _replacement_for(grapheme: str) -> str | None:
    width = _str_width(grapheme)
    if grapheme == " ":
        return None
    if grapheme == "\t":
        return " "
    if width > 0 and not grapheme.strip():
        return "␣"
    if width == 0:
        if len(grapheme) == 1 and unicodedata.category(grapheme) == "Cc":
            return "▯"
        return "·"
    return None


def _to_fragments(text: str) -> list[TextFragment]:
    fragments = []
    for start, grapheme in _graphemes(text):
        replacement = _replacement_for(grapheme)
        if replacement is not None or _str_width(grapheme) <= 1:
            rendered_width = GraphemeWidth.HALF
        else:
            rendered_width = GraphemeWidth.FULL
        fragments.append(TextFragment(grapheme, rendered_width, replacement, start))
    return fragments


def _fragment_end(fragment: TextFragment) -> int:
    return fragment.start + len(fragment.grapheme)


class Line:
    """A line of text with grapheme-aware editing, rendering and search.

    Positions named ``at`` or ``grapheme_idx`` count grapheme clusters;
    ranges passed to ``find_all`` are character offsets into the text;
    ranges passed to the rendering methods are screen columns.
    """

    def __init__(self, text: str = "") -> None:
        self._string = text
        self._fragments = _to_fragments(text)

    def _rebuild(self) -> None:
        self._fragments = _to_fragments(self._string)

    # Rendering

    def get_visible_graphemes(self, start: int, end: int) -> str:
        """Return the text visible between screen columns ``start`` and ``end``."""
        return str(self.get_annotated_visible_substr(start, end, None))

    def get_annotated_visible_substr(
        self,
        start: int,
        end: int,
        annotations: Iterable[Annotation] | None = None,
    ) -> AnnotatedString:
        """Return the annotated text visible between columns ``start`` and ``end``.

        Partly visible wide graphemes at either edge become an ellipsis and
        invisible or control graphemes are replaced by visible stand-ins.
        """
        if start >= end:
            return AnnotatedString()
        result = AnnotatedString(self._string)
        for annotation in annotations or ():
            result.add_annotation(annotation.annotation_type, annotation.start, annotation.end)

        # Work backwards so that earlier character offsets stay valid.
        fragment_start = self.width()
        for fragment in reversed(self._fragments):
            fragment_end = fragment_start
            fragment_start = max(0, fragment_start - fragment.rendered_width.value)

            if fragment_start > end:
                continue
            if fragment_start < end < fragment_end:
                result.replace(fragment.start, len(self._string), ELLIPSIS)
                continue
            if fragment_start == end:
                result.truncate_right_from(fragment.start)
                continue

            if fragment_end <= start:
                result.truncate_left_until(_fragment_end(fragment))
                break
            if fragment_start < start < fragment_end:
                result.replace(0, _fragment_end(fragment), ELLIPSIS)
                break

            if start <= fragment_start and fragment_end <= end and fragment.replacement:
                result.replace(fragment.start, _fragment_end(fragment), fragment.replacement)

        return result

    # Measurement

    def grapheme_count(self) -> int:
        return len(self._fragments)

    def width_until(self, grapheme_idx: int) -> int:
        """Return the screen width of the first ``grapheme_idx`` graphemes."""
        return sum(fragment.rendered_width.value for fragment in self._fragments[:grapheme_idx])

    def width(self) -> int:
        return self.width_until(self.grapheme_count())

    # Editing

    def insert_char(self, character: str, at: int) -> None:
        """Insert ``character`` before grapheme ``at``, or append it past the end."""
        if at < len(self._fragments):
            pos = self._fragments[at].start
            self._string = self._string[:pos] + character + self._string[pos:]
        else:
            self._string += character
        self._rebuild()

    def append_char(self, character: str) -> None:
        self.insert_char(character, self.grapheme_count())

    def delete(self, at: int) -> None:
        """Remove grapheme ``at``; does nothing past the end."""
        if at < len(self._fragments):
            fragment = self._fragments[at]
            self._string = self._string[: fragment.start] + self._string[_fragment_end(fragment) :]
            self._rebuild()

    def delete_last(self) -> None:
        self.delete(max(0, self.grapheme_count() - 1))

    def append(self, other: Line) -> None:
        self._string += other._string
        self._rebuild()

    def split(self, at: int) -> Line:
        """Cut the line before grapheme ``at`` and return the remainder."""
        if at >= len(self._fragments):
            return Line()
        pos = self._fragments[at].start
        remainder = self._string[pos:]
        self._string = self._string[:pos]
        self._rebuild()
        return Line(remainder)

    # Searching

    def _char_idx_to_grapheme_idx(self, char_idx: int) -> int | None:
        if char_idx > len(self._string):
            return None
        return next(
            (idx for idx, fragment in enumerate(self._fragments) if fragment.start >= char_idx),
            None,
        )

    def _grapheme_idx_to_char_idx(self, grapheme_idx: int) -> int:
        if grapheme_idx == 0 or not self._fragments:
            return 0
        if grapheme_idx >= len(self._fragments):
            raise IndexError(f"no grapheme at index {grapheme_idx}")
        return self._fragments[grapheme_idx].start

    def search_forward(self, query: str, from_grapheme_idx: int) -> int | None:
        """Return the grapheme index of the first match at or after the start."""
        if from_grapheme_idx == self.grapheme_count():
            return None
        start = self._grapheme_idx_to_char_idx(from_grapheme_idx)
        matches = self.find_all(query, start, len(self._string))
        return matches[0][1] if matches else None

    def search_backward(self, query: str, from_grapheme_idx: int) -> int | None:
        """Return the grapheme index of the last match before the start."""
        if from_grapheme_idx == 0:
            return None
        if from_grapheme_idx == self.grapheme_count():
            end = len(self._string)
        else:
            end = self._grapheme_idx_to_char_idx(from_grapheme_idx)
        matches = self.find_all(query, 0, end)
        return matches[-1][1] if matches else None

    def find_all(self, query: str, start: int, end: int) -> list[tuple[int, int]]:
        """Find matches of ``query`` within ``[start, end)`` on grapheme boundaries.

        Returns ``(char_idx, grapheme_idx)`` pairs in order.
        """
        end = min(end, len(self._string))
        if start > end:
            return []
        substring = self._string[start:end]
        candidates = [start + offset for offset in _match_offsets(substring, query)]
        return self._grapheme_aligned(candidates, query)

    def _grapheme_aligned(self, candidates: list[int], query: str) -> list[tuple[int, int]]:
        query_graphemes = len(_graphemes(query))
        matches = []
        for char_idx in candidates:
            grapheme_idx = self._char_idx_to_grapheme_idx(char_idx)
            if grapheme_idx is None:
                continue
            stop = grapheme_idx + query_graphemes
            if stop > len(self._fragments):
                continue
            joined = "".join(f.grapheme for f in self._fragments[grapheme_idx:stop])
            if joined == query:
                matches.append((char_idx, grapheme_idx))
        return matches

    # Protocols

    def __str__(self) -> str:
        return self._string

    def __len__(self) -> int:
        return len(self._string)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._string == other._string

    def __repr__(self) -> str:
        return f"Line({self._string!r})"


def _match_offsets(text: str, query: str) -> list[int]:
    """Offsets of non-overlapping occurrences of ``query`` in ``text``."""
    if not query:
        return list(range(len(text) + 1))
    offsets = []
    pos = text.find(query)
    while pos != -1:
        offsets.append(pos)
        pos = text.find(query, pos + len(query))
    return offsets