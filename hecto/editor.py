"""The editor: ties the view and the bars together and runs the event loop."""

from __future__ import annotations

import sys
from contextlib import suppress
from enum import Enum, auto
from os import PathLike

from hecto.bars import CommandBar, MessageBar, StatusBar
from hecto.command import (
    Edit,
    EditAction,
    KeyEvent,
    Move,
    ResizeEvent,
    System,
    SystemAction,
    UnsupportedEventError,
    parse_command,
)
from hecto.geometry import NAME, Position, Size
from hecto.terminal import Terminal
from hecto.view import View

QUIT_TIMES = 3

HELP_MESSAGE = "HELP: Ctrl-F = find | Ctrl-S = save | Ctrl-Q = quit"
SAVE_PROMPT = "Save as: "
SEARCH_PROMPT = "Search (Esc to cancel, Arrows to navigate): "

Command = Edit | Move | System


class PromptType(Enum):
    """Which prompt, if any, the command bar is showing."""

    SEARCH = auto()
    SAVE = auto()
    NONE = auto()


class Editor:
    """A terminal text editor.

    Use it as a context manager: entering sets up the terminal, leaving
    restores it, even when an exception escapes.
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        file_name: str | PathLike[str] | None = None,
    ) -> None:
        self._terminal = terminal if terminal is not None else Terminal()
        self.should_quit = False
        self._view = View(self._terminal)
        self._status_bar = StatusBar(self._terminal)
        self._message_bar = MessageBar(self._terminal)
        self._command_bar = CommandBar(self._terminal)
        self.prompt_type = PromptType.NONE
        self._terminal_size = Size()
        self._title = ""
        self._quit_times = 0

        try:
            size = self._terminal.size()
        except OSError:
            size = Size()
        self._handle_resize(size)
        self._update_message(HELP_MESSAGE)

        if file_name:
            try:
                self._view.load(file_name)
            except OSError:
                self._update_message(f"ERR: Could not open file: {file_name}")
        self.refresh_status()

    # Lifecycle

    def __enter__(self) -> Editor:
        self._terminal.initialize()
        return self

    def __exit__(self, exc_type, exc, traceback) -> bool:
        with suppress(OSError):
            self._terminal.terminate()
            if self.should_quit:
                self._terminal.print("Goodbye.\r\n")
                self._terminal.execute()
        return False

    # Event loop

    def run(self) -> None:
        """Draw and handle events until the user quits."""
        while True:
            self.refresh_screen()
            if self.should_quit:
                break
            self.evaluate_event(self._terminal.read_event())
            self.refresh_status()

    def refresh_screen(self) -> None:
        """Redraw whatever has changed and place the caret."""
        height, width = self._terminal_size.height, self._terminal_size.width
        if height == 0 or width == 0:
            return
        bottom_bar_row = height - 1
        self._terminal.hide_caret()
        if self.in_prompt():
            self._command_bar.render(bottom_bar_row)
        else:
            self._message_bar.render(bottom_bar_row)
        if height > 1:
            self._status_bar.render(height - 2)
        if height > 2:
            self._view.render(0)
        if self.in_prompt():
            caret = Position(col=self._command_bar.caret_position_col(), row=bottom_bar_row)
        else:
            caret = self._view.caret_position()
        self._terminal.move_caret_to(caret)
        self._terminal.show_caret()
        with suppress(OSError):
            self._terminal.execute()

    def refresh_status(self) -> None:
        """Pass the document status to the status bar and update the title."""
        status = self._view.get_status()
        title = f"{status.file_name} - {NAME}"
        self._status_bar.update_status(status)
        if title != self._title:
            with suppress(OSError):
                self._terminal.set_title(title)
                self._title = title

    def evaluate_event(self, event: object) -> None:
        """Turn a key or resize event into a command and process it."""
        if not isinstance(event, (KeyEvent, ResizeEvent)):
            return
        try:
            command = parse_command(event)
        except UnsupportedEventError:
            return
        self.process_command(command)

    # Command handling

    def process_command(self, command: Command) -> None:
        if isinstance(command, System) and command.action is SystemAction.RESIZE:
            self._handle_resize(command.size)
            return
        if self.prompt_type is PromptType.SEARCH:
            self._process_during_search(command)
        elif self.prompt_type is PromptType.SAVE:
            self._process_during_save(command)
        else:
            self._process_no_prompt(command)

    def _process_no_prompt(self, command: Command) -> None:
        if isinstance(command, System) and command.action is SystemAction.QUIT:
            self._handle_quit()
            return
        self._reset_quit_times()

        if isinstance(command, System):
            if command.action is SystemAction.SEARCH:
                self._set_prompt(PromptType.SEARCH)
            elif command.action is SystemAction.SAVE:
                self._handle_save()
        elif isinstance(command, Edit):
            self._view.handle_edit_command(command)
        elif isinstance(command, Move):
            self._view.handle_move_command(command)

    def _handle_resize(self, size: Size) -> None:
        self._terminal_size = size
        self._view.resize(Size(height=max(0, size.height - 2), width=size.width))
        bar_size = Size(height=1, width=size.width)
        self._message_bar.resize(bar_size)
        self._status_bar.resize(bar_size)
        self._command_bar.resize(bar_size)

    def _handle_quit(self) -> None:
        if not self._view.get_status().is_modified or self._quit_times + 1 == QUIT_TIMES:
            self.should_quit = True
            return
        remaining = QUIT_TIMES - self._quit_times - 1
        self._update_message(
            f"WARNING! File has unsaved changes. Press Ctrl-Q {remaining} more times to quit."
        )
        self._quit_times += 1

    def _reset_quit_times(self) -> None:
        if self._quit_times > 0:
            self._quit_times = 0
            self._update_message("")

    def _handle_save(self) -> None:
        if self._view.is_file_loaded():
            self._save(None)
        else:
            self._set_prompt(PromptType.SAVE)

    def _process_during_save(self, command: Command) -> None:
        if isinstance(command, System) and command.action is SystemAction.DISMISS:
            self._set_prompt(PromptType.NONE)
            self._update_message("Save aborted.")
        elif isinstance(command, Edit):
            if command.action is EditAction.INSERT_NEWLINE:
                file_name = self._command_bar.value()
                self._save(file_name)
                self._set_prompt(PromptType.NONE)
            else:
                self._command_bar.handle_edit_command(command)

    def _save(self, file_name: str | None) -> None:
        try:
            if file_name is None:
                self._view.save()
            else:
                self._view.save_as(file_name)
        except (OSError, ValueError):
            self._update_message("Error writing file!")
        else:
            self._update_message("File saved successfully.")

    def _process_during_search(self, command: Command) -> None:
        if isinstance(command, System):
            if command.action is SystemAction.DISMISS:
                self._set_prompt(PromptType.NONE)
                self._view.dismiss_search()
        elif isinstance(command, Edit):
            if command.action is EditAction.INSERT_NEWLINE:
                self._set_prompt(PromptType.NONE)
                self._view.exit_search()
            else:
                self._command_bar.handle_edit_command(command)
                self._view.search(self._command_bar.value())
        elif command in (Move.RIGHT, Move.DOWN):
            self._view.search_next()
        elif command in (Move.UP, Move.LEFT):
            self._view.search_prev()

    # Messages and prompts

    def _update_message(self, message: str) -> None:
        self._message_bar.update_message(message)

    def in_prompt(self) -> bool:
        return self.prompt_type is not PromptType.NONE

    def _set_prompt(self, prompt_type: PromptType) -> None:
        if prompt_type is PromptType.NONE:
            # Repaint the message bar where the prompt was.
            self._message_bar.needs_redraw = True
        elif prompt_type is PromptType.SAVE:
            self._command_bar.set_prompt(SAVE_PROMPT)
        else:
            self._view.enter_search()
            self._command_bar.set_prompt(SEARCH_PROMPT)
        self._command_bar.clear_value()
        self.prompt_type = prompt_type


def main(argv: list[str] | None = None) -> int:
    """Open the file named by the first argument, if any, and edit it."""
    args = sys.argv[1:] if argv is None else list(argv)
    file_name = args[0] if args else None
    with Editor(Terminal(), file_name) as editor:
        editor.run()
    return 0