"""The command, message and status bars at the bottom of the screen."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from hecto.command import Edit, EditAction
from hecto.component import UIComponent
from hecto.documentstatus import DocumentStatus
from hecto.geometry import Size
from hecto.line import Line
from hecto.terminal import Terminal

MESSAGE_DURATION = 5.0


class CommandBar(UIComponent):
    """A prompt followed by a line of user input."""

    def __init__(self, terminal: Terminal) -> None:
        super().__init__()
        self._terminal = terminal
        self._prompt = ""
        self._value = Line()
        self._size = Size()

    def handle_edit_command(self, command: Edit) -> None:
        if command.action is EditAction.INSERT and command.character is not None:
            self._value.append_char(command.character)
        elif command.action is EditAction.DELETE_BACKWARD:
            self._value.delete_last()
        self.needs_redraw = True

    def caret_position_col(self) -> int:
        return min(len(self._prompt) + self._value.grapheme_count(), self._size.width)

    def value(self) -> str:
        return str(self._value)

    def set_prompt(self, prompt: str) -> None:
        self._prompt = prompt
        self.needs_redraw = True

    def clear_value(self) -> None:
        self._value = Line()
        self.needs_redraw = True

    def set_size(self, size: Size) -> None:
        self._size = size

    def draw(self, origin_row: int) -> None:
        width = self._size.width
        area_for_value = max(0, width - len(self._prompt))
        # Always show the right-hand end of the value.
        value_end = self._value.width()
        value_start = max(0, value_end - area_for_value)
        message = self._prompt + self._value.get_visible_graphemes(value_start, value_end)
        self._terminal.print_row(origin_row, message if len(message) <= width else "")


@dataclass
class _Message:
    text: str = ""
    time: float = field(default_factory=lambda: time.monotonic())

    def is_expired(self) -> bool:
        return time.monotonic() - self.time > MESSAGE_DURATION


class MessageBar(UIComponent):
    """A one-line message that disappears after a few seconds."""

    def __init__(self, terminal: Terminal) -> None:
        super().__init__()
        self._terminal = terminal
        self._message = _Message()
        self._cleared_after_expiry = False

    @property
    def needs_redraw(self) -> bool:
        expired_uncleared = not self._cleared_after_expiry and self._message.is_expired()
        return expired_uncleared or self._needs_redraw

    @needs_redraw.setter
    def needs_redraw(self, value: bool) -> None:
        self._needs_redraw = value

    def update_message(self, message: str) -> None:
        self._message = _Message(message)
        self._cleared_after_expiry = False
        self.needs_redraw = True

    def set_size(self, size: Size) -> None:
        pass

    def draw(self, origin_row: int) -> None:
        expired = self._message.is_expired()
        if expired:
            # An expired message is cleared once, then left alone.
            self._cleared_after_expiry = True
        self._terminal.print_row(origin_row, "" if expired else self._message.text)


class StatusBar(UIComponent):
    """An inverted bar describing the document being edited."""

    def __init__(self, terminal: Terminal) -> None:
        super().__init__()
        self._terminal = terminal
        self._status = DocumentStatus()
        self._size = Size()

    def update_status(self, status: DocumentStatus) -> None:
        if status != self._status:
            self._status = status
            self.needs_redraw = True

    def set_size(self, size: Size) -> None:
        self._size = size

    def draw(self, origin_row: int) -> None:
        status = self._status
        beginning = (
            f"{status.file_name} - {status.line_count_text()} "
            f"{status.modified_indicator_text()}"
        )
        back_part = f"{status.file_type_text()} | {status.position_indicator_text()}"
        remainder = max(0, self._size.width - len(beginning))
        text = beginning + back_part.rjust(remainder)
        # Print nothing rather than a cut-off status, so the row is still cleared.
        to_print = text if len(text) <= self._size.width else ""
        self._terminal.print_inverted_row(origin_row, to_print)