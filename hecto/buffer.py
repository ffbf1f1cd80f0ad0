"""The lines of the document being edited, with file input and output."""

from __future__ import annotations

from collections.abc import Iterable
from os import PathLike

from hecto.annotatedstring import AnnotatedString
from hecto.fileinfo import FileInfo
from hecto.geometry import Location
from hecto.highlighter import Highlighter
from hecto.line import Line


def _split_lines(contents: str) -> list[str]:
    """Split file contents into lines, dropping a final line terminator."""
    pieces = contents.split("\n")
    tail = pieces.pop()
    lines = [piece.removesuffix("\r") for piece in pieces]
    if tail:
        lines.append(tail)
    return lines


class Buffer:
    """A document held as a list of lines, tracking unsaved changes."""

    def __init__(
        self,
        lines: Iterable[Line] | None = None,
        file_info: FileInfo | None = None,
    ) -> None:
        self._lines: list[Line] = list(lines) if lines is not None else []
        self._file_info = file_info if file_info is not None else FileInfo()
        self._dirty = False

    @property
    def dirty(self) -> bool:
        """Whether the document has changes that were not saved."""
        return self._dirty

    @property
    def file_info(self) -> FileInfo:
        return self._file_info

    @classmethod
    def load(cls, file_name: str | PathLike[str]) -> Buffer:
        """Read ``file_name`` into a new buffer.

        Raises ``OSError`` if the file cannot be read or is not UTF-8.
        """
        try:
            with open(file_name, encoding="utf-8", newline="") as handle:
                contents = handle.read()
        except UnicodeDecodeError as err:
            raise OSError(f"{file_name} is not valid UTF-8") from err
        lines = [Line(text) for text in _split_lines(contents)]
        return cls(lines, FileInfo.from_file_name(str(file_name)))

    def _line(self, idx: int) -> Line | None:
        if 0 <= idx < len(self._lines):
            return self._lines[idx]
        return None

    def grapheme_count(self, idx: int) -> int:
        line = self._line(idx)
        return line.grapheme_count() if line is not None else 0

    def width_until(self, idx: int, until: int) -> int:
        line = self._line(idx)
        return line.width_until(until) if line is not None else 0

    def get_highlighted_substring(
        self, line_idx: int, start: int, end: int, highlighter: Highlighter
    ) -> AnnotatedString | None:
        """Return columns ``[start, end)`` of a line with its highlights, if the line exists."""
        line = self._line(line_idx)
        if line is None:
            return None
        return line.get_annotated_visible_substr(
            start, end, highlighter.get_annotations(line_idx)
        )

    def highlight(self, idx: int, highlighter: Highlighter) -> None:
        line = self._line(idx)
        if line is not None:
            highlighter.highlight(idx, line)

    def search_forward(self, query: str, start: Location) -> Location | None:
        """Find ``query`` at or after ``start``, wrapping around the document.

        The starting line is searched twice: first from ``start``, and
        finally from its beginning.
        """
        query = str(query)
        if not query or not self._lines:
            return None
        count = len(self._lines)
        for step in range(count + 1):
            line_idx = (start.line_idx + step) % count
            line = self._lines[line_idx]
            from_idx = min(start.grapheme_idx, line.grapheme_count()) if step == 0 else 0
            found = line.search_forward(query, from_idx)
            if found is not None:
                return Location(grapheme_idx=found, line_idx=line_idx)
        return None

    def search_backward(self, query: str, start: Location) -> Location | None:
        """Find ``query`` before ``start``, wrapping around the document."""
        query = str(query)
        if not query or not self._lines:
            return None
        count = len(self._lines)
        first = min(start.line_idx, count - 1)
        for step in range(count + 1):
            line_idx = (first - step) % count
            line = self._lines[line_idx]
            line_count = line.grapheme_count()
            from_idx = min(start.grapheme_idx, line_count) if step == 0 else line_count
            found = line.search_backward(query, from_idx)
            if found is not None:
                return Location(grapheme_idx=found, line_idx=line_idx)
        return None

    def _save_to_file(self, file_info: FileInfo) -> None:
        if file_info.path is None:
            raise ValueError("the document has no file name to save to")
        with open(file_info.path, "w", encoding="utf-8", newline="") as handle:
            handle.writelines(f"{line}\n" for line in self._lines)

    def save_as(self, file_name: str | PathLike[str]) -> None:
        """Write the document to ``file_name`` and remember it as its file."""
        file_info = FileInfo.from_file_name(str(file_name))
        self._save_to_file(file_info)
        self._file_info = file_info
        self._dirty = False

    def save(self) -> None:
        """Write the document to its file.

        Raises ``ValueError`` if the document has no file name.
        """
        self._save_to_file(self._file_info)
        self._dirty = False

    def is_empty(self) -> bool:
        return not self._lines

    def is_file_loaded(self) -> bool:
        return self._file_info.has_path()

    def height(self) -> int:
        return len(self._lines)

    def insert_char(self, character: str, at: Location) -> None:
        """Insert ``character`` at ``at``; just past the last line starts a new line."""
        if at.line_idx == len(self._lines):
            self._lines.append(Line(character))
            self._dirty = True
            return
        line = self._line(at.line_idx)
        if line is not None:
            line.insert_char(character, at.grapheme_idx)
            self._dirty = True

    def delete(self, at: Location) -> None:
        """Delete the grapheme at ``at``, joining the next line at a line's end."""
        line = self._line(at.line_idx)
        if line is None:
            return
        count = line.grapheme_count()
        if at.grapheme_idx >= count and len(self._lines) > at.line_idx + 1:
            next_line = self._lines.pop(at.line_idx + 1)
            line.append(next_line)
            self._dirty = True
        elif at.grapheme_idx < count:
            line.delete(at.grapheme_idx)
            self._dirty = True

    def insert_newline(self, at: Location) -> None:
        """Split the line at ``at``, or add an empty line just past the end."""
        if at.line_idx == len(self._lines):
            self._lines.append(Line())
            self._dirty = True
            return
        line = self._line(at.line_idx)
        if line is not None:
            remainder = line.split(at.grapheme_idx)
            self._lines.insert(at.line_idx + 1, remainder)
            self._dirty = True