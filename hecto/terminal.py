"""Terminal output through ANSI escape sequences, and keyboard input."""

from __future__ import annotations

import shutil
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from typing import TextIO

import blessed

from hecto.annotatedstring import AnnotatedString
from hecto.annotation import AnnotationType
from hecto.command import KeyCode, KeyEvent, KeyModifiers, ResizeEvent
from hecto.geometry import Position, Size

Rgb = tuple[int, int, int]

_MAX_COORD = 0xFFFF
_POLL_SECONDS = 0.1

_ENTER_ALTERNATE_SCREEN = "\x1b[?1049h"
_LEAVE_ALTERNATE_SCREEN = "\x1b[?1049l"
_DISABLE_LINE_WRAP = "\x1b[?7l"
_ENABLE_LINE_WRAP = "\x1b[?7h"
_CLEAR_ALL = "\x1b[2J"
_CLEAR_LINE = "\x1b[2K"
_HIDE_CARET = "\x1b[?25l"
_SHOW_CARET = "\x1b[?25h"
_RESET_COLOR = "\x1b[0m"
_REVERSE = "\x1b[7m"
_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Attribute:
    """Foreground and background colours used to draw an annotation."""

    foreground: Rgb | None = None
    background: Rgb | None = None


_WHITE = (255, 255, 255)

_ATTRIBUTES = {
    AnnotationType.MATCH: Attribute(_WHITE, (211, 211, 211)),
    AnnotationType.SELECTED_MATCH: Attribute(_WHITE, (255, 255, 153)),
    AnnotationType.NUMBER: Attribute((255, 99, 71)),
    AnnotationType.KEYWORD: Attribute((100, 149, 237)),
    AnnotationType.TYPE: Attribute((175, 225, 175)),
    AnnotationType.KNOWN_VALUE: Attribute((195, 177, 225)),
    AnnotationType.CHAR: Attribute((255, 191, 0)),
    AnnotationType.LIFETIME_SPECIFIER: Attribute((102, 205, 170)),
    AnnotationType.COMMENT: Attribute((34, 139, 34)),
    AnnotationType.STRING: Attribute((255, 179, 102)),
}


def attribute_for(annotation_type: AnnotationType) -> Attribute:
    """Return the colours used for ``annotation_type``."""
    return _ATTRIBUTES[annotation_type]


_SEQUENCE_KEYS = {
    "KEY_UP": KeyCode.UP,
    "KEY_DOWN": KeyCode.DOWN,
    "KEY_LEFT": KeyCode.LEFT,
    "KEY_RIGHT": KeyCode.RIGHT,
    "KEY_HOME": KeyCode.HOME,
    "KEY_END": KeyCode.END,
    "KEY_PGUP": KeyCode.PAGE_UP,
    "KEY_PGDOWN": KeyCode.PAGE_DOWN,
    "KEY_ENTER": KeyCode.ENTER,
    "KEY_BACKSPACE": KeyCode.BACKSPACE,
    "KEY_DELETE": KeyCode.DELETE,
    "KEY_TAB": KeyCode.TAB,
    "KEY_ESCAPE": KeyCode.ESC,
}

_CONTROL_CHARS = {
    "\t": KeyCode.TAB,
    "\r": KeyCode.ENTER,
    "\n": KeyCode.ENTER,
    "\x7f": KeyCode.BACKSPACE,
    "\x08": KeyCode.BACKSPACE,
    "\x1b": KeyCode.ESC,
}


def _key_event_from(name: str | None, text: str) -> KeyEvent | None:
    """Build a key event from a named key sequence or the typed text."""
    if name:
        code = _SEQUENCE_KEYS.get(name)
        return KeyEvent(code) if code is not None else None
    if len(text) != 1:
        return None
    if text in _CONTROL_CHARS:
        return KeyEvent(_CONTROL_CHARS[text])
    if ord(text) < 32:
        return KeyEvent(chr(ord(text) + 96), KeyModifiers.CONTROL)
    return KeyEvent(text)


def _sgr_color(layer: int, rgb: Rgb) -> str:
    red, green, blue = rgb
    return f"\x1b[{layer};2;{red};{green};{blue}m"


class Terminal:
    """Queues drawing commands for a text stream and reads keyboard events.

    Nothing reaches the stream until ``execute`` is called.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._pending: list[str] = []
        self._keyboard: blessed.Terminal | None = None
        self._raw_mode = ExitStack()
        self._known_size: Size | None = None

    def _queue(self, text: str) -> None:
        self._pending.append(text)

    def _keyboard_terminal(self) -> blessed.Terminal:
        if self._keyboard is None:
            self._keyboard = blessed.Terminal(stream=self._stream)
        return self._keyboard

    def _is_tty(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty is not None and isatty())

    def initialize(self) -> None:
        """Enter raw mode and the alternate screen, and clear it."""
        if self._is_tty():
            self._raw_mode.enter_context(self._keyboard_terminal().raw())
        self._queue(_ENTER_ALTERNATE_SCREEN)
        self._queue(_DISABLE_LINE_WRAP)
        self.clear_screen()
        self.execute()

    def terminate(self) -> None:
        """Restore the screen and leave raw mode."""
        self._queue(_LEAVE_ALTERNATE_SCREEN)
        self._queue(_ENABLE_LINE_WRAP)
        self.show_caret()
        self.execute()
        self._raw_mode.close()

    def clear_screen(self) -> None:
        self._queue(_CLEAR_ALL)

    def clear_line(self) -> None:
        self._queue(_CLEAR_LINE)

    def move_caret_to(self, position: Position) -> None:
        """Move the caret; coordinates beyond 65535 are clamped."""
        col = min(position.col, _MAX_COORD)
        row = min(position.row, _MAX_COORD)
        self._queue(f"\x1b[{row + 1};{col + 1}H")

    def hide_caret(self) -> None:
        self._queue(_HIDE_CARET)

    def show_caret(self) -> None:
        self._queue(_SHOW_CARET)

    def set_title(self, title: str) -> None:
        self._queue(f"\x1b]0;{title}\x07")

    def print(self, text: str) -> None:
        self._queue(text)

    def print_row(self, row: int, text: str) -> None:
        """Replace the contents of ``row`` with ``text``."""
        self.move_caret_to(Position(col=0, row=row))
        self.clear_line()
        self.print(text)

    def print_annotated_row(self, row: int, annotated_string: AnnotatedString) -> None:
        """Replace the contents of ``row`` with coloured text."""
        self.move_caret_to(Position(col=0, row=row))
        self.clear_line()
        for part in annotated_string:
            if part.annotation_type is not None:
                self._set_attribute(attribute_for(part.annotation_type))
            self.print(part.string)
            self._queue(_RESET_COLOR)

    def _set_attribute(self, attribute: Attribute) -> None:
        if attribute.foreground is not None:
            self._queue(_sgr_color(38, attribute.foreground))
        if attribute.background is not None:
            self._queue(_sgr_color(48, attribute.background))

    def print_inverted_row(self, row: int, text: str) -> None:
        """Print ``text`` in reverse video, padded or cut to the terminal width."""
        width = self.size().width
        self.print_row(row, f"{_REVERSE}{text[:width].ljust(width)}{_RESET}")

    def size(self) -> Size:
        columns, lines = shutil.get_terminal_size()
        return Size(height=lines, width=columns)

    def execute(self) -> None:
        """Write everything queued to the stream and flush it."""
        if self._pending:
            self._stream.write("".join(self._pending))
            self._pending.clear()
        self._stream.flush()

    def read_event(self) -> KeyEvent | ResizeEvent:
        """Block until a key is pressed or the terminal changes size."""
        keyboard = self._keyboard_terminal()
        if self._known_size is None:
            self._known_size = self.size()
        while True:
            keystroke = keyboard.inkey(timeout=_POLL_SECONDS)
            if keystroke:
                name = keystroke.name if keystroke.is_sequence else None
                event = _key_event_from(name, str(keystroke))
                if event is not None:
                    return event
                continue
            current = self.size()
            if current != self._known_size:
                self._known_size = current
                return ResizeEvent(width=current.width, height=current.height)