"""The main text area: editing, scrolling, searching and drawing the document."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from os import PathLike

from hecto.buffer import Buffer
from hecto.command import Edit, EditAction, Move
from hecto.component import UIComponent
from hecto.documentstatus import DocumentStatus
from hecto.geometry import NAME, VERSION, Location, Position, Size
from hecto.highlighter import Highlighter
from hecto.line import Line
from hecto.terminal import Terminal


class SearchDirection(Enum):
    FORWARD = auto()
    BACKWARD = auto()


@dataclass
class SearchInfo:
    """Where the caret was when a search began, and the current query."""

    prev_location: Location
    prev_scroll_offset: Position
    query: Line | None = None


def _div_ceil(value: int, divisor: int) -> int:
    return -(-value // divisor)


def build_welcome_message(width: int) -> str:
    """Return the welcome row, or just ``~`` if the message does not fit."""
    if width == 0:
        return ""
    message = f"{NAME} editor -- version {VERSION}"
    remaining = width - 1
    if remaining < len(message):
        return "~"
    padding = remaining - len(message)
    left = padding // 2
    return "~" + " " * left + message + " " * (padding - left)


class View(UIComponent):
    """Shows the document and handles caret movement, editing and search."""

    def __init__(self, terminal: Terminal) -> None:
        super().__init__()
        self._terminal = terminal
        self._buffer = Buffer()
        self._size = Size()
        self._text_location = Location()
        self._scroll_offset = Position()
        self._search_info: SearchInfo | None = None

    def get_status(self) -> DocumentStatus:
        file_info = self._buffer.file_info
        return DocumentStatus(
            total_lines=self._buffer.height(),
            current_line_idx=self._text_location.line_idx,
            is_modified=self._buffer.dirty,
            file_name=str(file_info),
            file_type=file_info.file_type,
        )

    def is_file_loaded(self) -> bool:
        return self._buffer.is_file_loaded()

    # Search

    def enter_search(self) -> None:
        self._search_info = SearchInfo(self._text_location, self._scroll_offset)

    def exit_search(self) -> None:
        self._search_info = None
        self.needs_redraw = True

    def dismiss_search(self) -> None:
        """Leave search and put the caret back where it was before."""
        if self._search_info is not None:
            self._text_location = self._search_info.prev_location
            self._scroll_offset = self._search_info.prev_scroll_offset
            # The terminal may have been resized during the search.
            self._scroll_text_location_into_view()
        self.exit_search()

    def search(self, query: str) -> None:
        if self._search_info is not None:
            self._search_info.query = Line(query)
        self._search_in_direction(self._text_location, SearchDirection.FORWARD)

    def _search_query(self) -> Line | None:
        if self._search_info is None:
            return None
        return self._search_info.query

    def _search_in_direction(self, start: Location, direction: SearchDirection) -> None:
        query = self._search_query()
        if query is not None and len(query) > 0:
            if direction is SearchDirection.FORWARD:
                location = self._buffer.search_forward(str(query), start)
            else:
                location = self._buffer.search_backward(str(query), start)
            if location is not None:
                self._text_location = location
                self._center_text_location()
        self.needs_redraw = True

    def search_next(self) -> None:
        """Move to the next match after the current one."""
        query = self._search_query()
        step_right = min(query.grapheme_count(), 1) if query is not None else 1
        start = replace(
            self._text_location, grapheme_idx=self._text_location.grapheme_idx + step_right
        )
        self._search_in_direction(start, SearchDirection.FORWARD)

    def search_prev(self) -> None:
        self._search_in_direction(self._text_location, SearchDirection.BACKWARD)

    # File input and output

    def load(self, file_name: str | PathLike[str]) -> None:
        self._buffer = Buffer.load(file_name)
        self.needs_redraw = True

    def save(self) -> None:
        self._buffer.save()
        self.needs_redraw = True

    def save_as(self, file_name: str | PathLike[str]) -> None:
        self._buffer.save_as(file_name)
        self.needs_redraw = True

    # Commands

    def handle_edit_command(self, command: Edit) -> None:
        action = command.action
        if action is EditAction.INSERT and command.character is not None:
            self._insert_char(command.character)
        elif action is EditAction.DELETE:
            self._delete()
        elif action is EditAction.DELETE_BACKWARD:
            self._delete_backward()
        elif action is EditAction.INSERT_NEWLINE:
            self._insert_newline()

    def handle_move_command(self, command: Move) -> None:
        page = max(0, self._size.height - 1)
        match command:
            case Move.UP:
                self._move_up(1)
            case Move.DOWN:
                self._move_down(1)
            case Move.LEFT:
                self._move_left()
            case Move.RIGHT:
                self._move_right()
            case Move.PAGE_UP:
                self._move_up(page)
            case Move.PAGE_DOWN:
                self._move_down(page)
            case Move.START_OF_LINE:
                self._move_to_start_of_line()
            case Move.END_OF_LINE:
                self._move_to_end_of_line()
        self._scroll_text_location_into_view()

    # Editing

    def _insert_newline(self) -> None:
        self._buffer.insert_newline(self._text_location)
        self.handle_move_command(Move.RIGHT)
        self.needs_redraw = True

    def _delete_backward(self) -> None:
        if self._text_location.line_idx != 0 or self._text_location.grapheme_idx != 0:
            self.handle_move_command(Move.LEFT)
            self._delete()

    def _delete(self) -> None:
        self._buffer.delete(self._text_location)
        self.needs_redraw = True

    def _insert_char(self, character: str) -> None:
        line_idx = self._text_location.line_idx
        old_len = self._buffer.grapheme_count(line_idx)
        self._buffer.insert_char(character, self._text_location)
        new_len = self._buffer.grapheme_count(line_idx)
        # A combining character may join an existing grapheme instead.
        if new_len > old_len:
            self.handle_move_command(Move.RIGHT)
        self.needs_redraw = True

    # Scrolling

    def _scroll_vertically(self, to: int) -> None:
        height = self._size.height
        row = self._scroll_offset.row
        if to < row:
            new_row = to
        elif to >= row + height:
            new_row = max(0, to - height) + 1
        else:
            return
        self._scroll_offset = replace(self._scroll_offset, row=new_row)
        self.needs_redraw = True

    def _scroll_horizontally(self, to: int) -> None:
        width = self._size.width
        col = self._scroll_offset.col
        if to < col:
            new_col = to
        elif to >= col + width:
            new_col = max(0, to - width) + 1
        else:
            return
        self._scroll_offset = replace(self._scroll_offset, col=new_col)
        self.needs_redraw = True

    def _scroll_text_location_into_view(self) -> None:
        position = self._text_location_to_position()
        self._scroll_vertically(position.row)
        self._scroll_horizontally(position.col)

    def _center_text_location(self) -> None:
        position = self._text_location_to_position()
        self._scroll_offset = Position(
            col=max(0, position.col - _div_ceil(self._size.width, 2)),
            row=max(0, position.row - _div_ceil(self._size.height, 2)),
        )
        self.needs_redraw = True

    # Positions

    def caret_position(self) -> Position:
        """The caret's position on screen, relative to the view."""
        return self._text_location_to_position().saturating_sub(self._scroll_offset)

    def _text_location_to_position(self) -> Position:
        row = self._text_location.line_idx
        col = self._buffer.width_until(row, self._text_location.grapheme_idx)
        return Position(col=col, row=row)

    # Caret movement

    def _move_up(self, step: int) -> None:
        line_idx = max(0, self._text_location.line_idx - step)
        self._text_location = replace(self._text_location, line_idx=line_idx)
        self._snap_to_valid_grapheme()

    def _move_down(self, step: int) -> None:
        line_idx = self._text_location.line_idx + step
        self._text_location = replace(self._text_location, line_idx=line_idx)
        self._snap_to_valid_grapheme()
        self._snap_to_valid_line()

    def _move_right(self) -> None:
        location = self._text_location
        if location.grapheme_idx < self._buffer.grapheme_count(location.line_idx):
            self._text_location = replace(location, grapheme_idx=location.grapheme_idx + 1)
        else:
            self._move_to_start_of_line()
            self._move_down(1)

    def _move_left(self) -> None:
        location = self._text_location
        if location.grapheme_idx > 0:
            self._text_location = replace(location, grapheme_idx=location.grapheme_idx - 1)
        elif location.line_idx > 0:
            self._move_up(1)
            self._move_to_end_of_line()

    def _move_to_start_of_line(self) -> None:
        self._text_location = replace(self._text_location, grapheme_idx=0)

    def _move_to_end_of_line(self) -> None:
        count = self._buffer.grapheme_count(self._text_location.line_idx)
        self._text_location = replace(self._text_location, grapheme_idx=count)

    def _snap_to_valid_grapheme(self) -> None:
        count = self._buffer.grapheme_count(self._text_location.line_idx)
        grapheme_idx = min(self._text_location.grapheme_idx, count)
        self._text_location = replace(self._text_location, grapheme_idx=grapheme_idx)

    def _snap_to_valid_line(self) -> None:
        line_idx = min(self._text_location.line_idx, self._buffer.height())
        self._text_location = replace(self._text_location, line_idx=line_idx)

    # Drawing

    def set_size(self, size: Size) -> None:
        self._size = size
        self._scroll_text_location_into_view()

    def draw(self, origin_row: int) -> None:
        height, width = self._size.height, self._size.width
        end_y = origin_row + height
        top_third = _div_ceil(height, 3)
        scroll_top = self._scroll_offset.row

        query = self._search_query()
        highlighter = Highlighter(
            str(query) if query is not None else None,
            self._text_location if query is not None else None,
            self._buffer.file_info.file_type,
        )
        # Highlight from the top of the document so multi-line state is right.
        for line_idx in range(end_y + scroll_top):
            self._buffer.highlight(line_idx, highlighter)

        left = self._scroll_offset.col
        right = left + width
        for current_row in range(origin_row, end_y):
            line_idx = current_row - origin_row + scroll_top
            annotated = self._buffer.get_highlighted_substring(line_idx, left, right, highlighter)
            if annotated is not None:
                self._terminal.print_annotated_row(current_row, annotated)
            elif current_row == top_third and self._buffer.is_empty():
                self._terminal.print_row(current_row, build_welcome_message(width))
            else:
                self._terminal.print_row(current_row, "~")