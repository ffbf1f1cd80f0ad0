"""Combines syntax and search-result highlighting for the view."""

from __future__ import annotations

from hecto.annotation import Annotation
from hecto.documentstatus import FileType
from hecto.geometry import Location
from hecto.line import Line
from hecto.rusthighlighter import RustSyntaxHighlighter
from hecto.searchhighlighter import SearchResultHighlighter, SyntaxHighlighter


def create_syntax_highlighter(file_type: FileType) -> SyntaxHighlighter | None:
    """Return the syntax highlighter for ``file_type``, if there is one."""
    if file_type is FileType.RUST:
        return RustSyntaxHighlighter()
    return None


class Highlighter:
    """Runs the syntax and search highlighters that apply to a document."""

    def __init__(
        self,
        matched_word: str | None,
        selected_match: Location | None,
        file_type: FileType,
    ) -> None:
        self._syntax = create_syntax_highlighter(file_type)
        self._search = (
            SearchResultHighlighter(matched_word, selected_match)
            if matched_word is not None
            else None
        )

    def _highlighters(self) -> list[SyntaxHighlighter]:
        return [h for h in (self._syntax, self._search) if h is not None]

    def get_annotations(self, idx: int) -> list[Annotation]:
        """Syntax annotations for line ``idx`` followed by search annotations."""
        result: list[Annotation] = []
        for highlighter in self._highlighters():
            result.extend(highlighter.get_annotations(idx) or ())
        return result

    def highlight(self, idx: int, line: Line) -> None:
        for highlighter in self._highlighters():
            highlighter.highlight(idx, line)