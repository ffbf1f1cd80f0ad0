"""Key and resize events, and the editor commands they map to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto

from hecto.geometry import Size


class UnsupportedEventError(ValueError):
    """Raised when an event does not map to any command."""


class KeyCode(Enum):
    """Non-character keys. Character keys are given as one-character strings."""

    BACKSPACE = auto()
    ENTER = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    TAB = auto()
    DELETE = auto()
    ESC = auto()


class KeyModifiers(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()
    ALT = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A key press: a ``KeyCode`` or a single character, plus modifiers."""

    code: KeyCode | str
    modifiers: KeyModifiers = KeyModifiers.NONE
    pressed: bool = True


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


class Move(Enum):
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    START_OF_LINE = auto()
    END_OF_LINE = auto()
    UP = auto()
    LEFT = auto()
    RIGHT = auto()
    DOWN = auto()


class EditAction(Enum):
    INSERT = auto()
    INSERT_NEWLINE = auto()
    DELETE = auto()
    DELETE_BACKWARD = auto()


@dataclass(frozen=True)
class Edit:
    """An editing command; ``character`` is set for insertions."""

    action: EditAction
    character: str | None = None


class SystemAction(Enum):
    SAVE = auto()
    RESIZE = auto()
    QUIT = auto()
    DISMISS = auto()
    SEARCH = auto()


@dataclass(frozen=True)
class System:
    """A system command; ``size`` is set for resizes."""

    action: SystemAction
    size: Size | None = None


Command = Move | Edit | System

_MOVE_KEYS = {
    KeyCode.UP: Move.UP,
    KeyCode.DOWN: Move.DOWN,
    KeyCode.LEFT: Move.LEFT,
    KeyCode.RIGHT: Move.RIGHT,
    KeyCode.PAGE_DOWN: Move.PAGE_DOWN,
    KeyCode.PAGE_UP: Move.PAGE_UP,
    KeyCode.HOME: Move.START_OF_LINE,
    KeyCode.END: Move.END_OF_LINE,
}

_EDIT_KEYS = {
    KeyCode.TAB: Edit(EditAction.INSERT, "\t"),
    KeyCode.ENTER: Edit(EditAction.INSERT_NEWLINE),
    KeyCode.BACKSPACE: Edit(EditAction.DELETE_BACKWARD),
    KeyCode.DELETE: Edit(EditAction.DELETE),
}

_CONTROL_KEYS = {
    "q": SystemAction.QUIT,
    "s": SystemAction.SAVE,
    "f": SystemAction.SEARCH,
}


def parse_edit(event: KeyEvent) -> Edit:
    code, modifiers = event.code, event.modifiers
    if isinstance(code, str):
        if modifiers in (KeyModifiers.NONE, KeyModifiers.SHIFT):
            return Edit(EditAction.INSERT, code)
    elif modifiers == KeyModifiers.NONE and code in _EDIT_KEYS:
        return _EDIT_KEYS[code]
    raise UnsupportedEventError(f"Unsupported key code {code!r} with modifiers {modifiers!r}")


def parse_move(event: KeyEvent) -> Move:
    code, modifiers = event.code, event.modifiers
    if modifiers != KeyModifiers.NONE:
        raise UnsupportedEventError(f"Unsupported key code {code!r} or modifier {modifiers!r}")
    if isinstance(code, KeyCode) and code in _MOVE_KEYS:
        return _MOVE_KEYS[code]
    raise UnsupportedEventError(f"Unsupported code: {code!r}")


def parse_system(event: KeyEvent) -> System:
    code, modifiers = event.code, event.modifiers
    if modifiers == KeyModifiers.CONTROL:
        if isinstance(code, str) and code in _CONTROL_KEYS:
            return System(_CONTROL_KEYS[code])
        raise UnsupportedEventError(f"Unsupported CONTROL+{code!r} combination")
    if modifiers == KeyModifiers.NONE and code is KeyCode.ESC:
        return System(SystemAction.DISMISS)
    raise UnsupportedEventError(f"Unsupported key code {code!r} or modifier {modifiers!r}")


def parse_command(event: object) -> Command:
    """Map a key or resize event to a command.

    Raises ``UnsupportedEventError`` for events with no command.
    """
    if isinstance(event, ResizeEvent):
        return System(SystemAction.RESIZE, Size(height=event.height, width=event.width))
    if isinstance(event, KeyEvent):
        for parser in (parse_edit, parse_move, parse_system):
            try:
                return parser(event)
            except UnsupportedEventError:
                continue
        raise UnsupportedEventError(f"Event not supported: {event!r}")
    raise UnsupportedEventError(f"Event not supported: {event!r}")