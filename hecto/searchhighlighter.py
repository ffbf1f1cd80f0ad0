"""Per-line highlighters and the one marking search results."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hecto.annotation import Annotation, AnnotationType
from hecto.geometry import Location
from hecto.line import Line


class SyntaxHighlighter(ABC):
    """Computes annotations line by line and hands them out afterwards."""

    @abstractmethod
    def highlight(self, idx: int, line: Line) -> None:
        """Compute the annotations for line ``idx``."""

    @abstractmethod
    def get_annotations(self, idx: int) -> list[Annotation] | None:
        """Return the annotations for line ``idx``, or None if not highlighted."""


class SearchResultHighlighter(SyntaxHighlighter):
    """Marks every occurrence of a word, and the currently selected match."""

    def __init__(self, matched_word: str, selected_match: Location | None = None) -> None:
        self._matched_word = matched_word
        self._selected_match = selected_match
        self._highlights: dict[int, list[Annotation]] = {}

    def _matched_words(self, line: Line) -> list[Annotation]:
        if not self._matched_word:
            return []
        length = len(self._matched_word)
        return [
            Annotation(AnnotationType.MATCH, start, start + length)
            for start, _ in line.find_all(self._matched_word, 0, len(line))
        ]

    def _selected(self) -> Annotation | None:
        if self._selected_match is None or not self._matched_word:
            return None
        start = self._selected_match.grapheme_idx
        return Annotation(AnnotationType.SELECTED_MATCH, start, start + len(self._matched_word))

    def highlight(self, idx: int, line: Line) -> None:
        result = self._matched_words(line)
        if self._selected_match is not None and self._selected_match.line_idx == idx:
            selected = self._selected()
            if selected is not None:
                result.append(selected)
        self._highlights[idx] = result

    def get_annotations(self, idx: int) -> list[Annotation] | None:
        return self._highlights.get(idx)