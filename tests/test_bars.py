import io
import os
import re
from unittest import mock

import pytest

from hecto.bars import CommandBar, MessageBar, StatusBar
from hecto.command import Edit, EditAction
from hecto.documentstatus import DocumentStatus
from hecto.geometry import Size
from hecto.terminal import Terminal

_CSI = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def _visible(text):
    return _CSI.sub("", text)


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def terminal(stream):
    return Terminal(stream)


def _output(terminal, stream):
    terminal.execute()
    value = stream.getvalue()
    stream.seek(0)
    stream.truncate()
    return value


def _type(bar, text):
    for character in text:
        bar.handle_edit_command(Edit(EditAction.INSERT, character))


# CommandBar


def test_command_bar_edits_value(terminal):
    bar = CommandBar(terminal)
    _type(bar, "ab")
    assert bar.value() == "ab"
    bar.handle_edit_command(Edit(EditAction.DELETE))
    bar.handle_edit_command(Edit(EditAction.INSERT_NEWLINE))
    assert bar.value() == "ab"
    bar.handle_edit_command(Edit(EditAction.DELETE_BACKWARD))
    assert bar.value() == "a"


def test_command_bar_clear_value(terminal):
    bar = CommandBar(terminal)
    _type(bar, "abc")
    bar.clear_value()
    assert bar.value() == ""
    assert bar.needs_redraw is True


def test_command_bar_caret_follows_prompt_and_value(terminal):
    bar = CommandBar(terminal)
    bar.resize(Size(height=1, width=100))
    bar.set_prompt("Save as: ")
    _type(bar, "ab")
    assert bar.caret_position_col() == len("Save as: ") + 2


def test_command_bar_caret_limited_by_width(terminal):
    bar = CommandBar(terminal)
    bar.resize(Size(height=1, width=5))
    bar.set_prompt("Save as: ")
    assert bar.caret_position_col() == 5


def test_command_bar_draws_prompt_and_value(terminal, stream):
    bar = CommandBar(terminal)
    bar.resize(Size(height=1, width=20))
    bar.set_prompt("Save as: ")
    _type(bar, "ab")
    bar.render(3)
    assert _visible(_output(terminal, stream)) == "Save as: " + "ab"
    assert bar.needs_redraw is False


def test_command_bar_shows_end_of_long_value(terminal, stream):
    bar = CommandBar(terminal)
    bar.resize(Size(height=1, width=5))
    bar.set_prompt("> ")
    _type(bar, "abcdef")
    bar.render(0)
    assert _visible(_output(terminal, stream)) == "> def"


def test_command_bar_prints_nothing_when_prompt_too_wide(terminal, stream):
    bar = CommandBar(terminal)
    bar.resize(Size(height=1, width=3))
    bar.set_prompt("Search: ")
    bar.render(0)
    assert _visible(_output(terminal, stream)) == ""


# MessageBar


def test_message_bar_draws_message(terminal, stream):
    bar = MessageBar(terminal)
    bar.update_message("hello there")
    assert bar.needs_redraw is True
    bar.render(7)
    assert _visible(_output(terminal, stream)) == "hello there"
    assert bar.needs_redraw is False


def test_message_bar_clears_expired_message_once(terminal, stream):
    bar = MessageBar(terminal)
    with mock.patch("time.monotonic", return_value=1000.0):
        bar.update_message("hello")
        bar.render(0)
    _output(terminal, stream)
    with mock.patch("time.monotonic", return_value=1004.0):
        assert bar.needs_redraw is False
    with mock.patch("time.monotonic", return_value=1006.0):
        assert bar.needs_redraw is True
        bar.render(0)
        assert bar.needs_redraw is False
    assert _visible(_output(terminal, stream)) == ""


def test_message_bar_new_message_after_expiry(terminal, stream):
    bar = MessageBar(terminal)
    with mock.patch("time.monotonic", return_value=1000.0):
        bar.update_message("first")
    with mock.patch("time.monotonic", return_value=1010.0):
        bar.render(0)
        bar.update_message("second")
        bar.render(0)
    out = _output(terminal, stream)
    assert _visible(out).endswith("second")
    assert "first" not in out


# StatusBar


@pytest.fixture
def wide_terminal():
    with mock.patch("shutil.get_terminal_size", return_value=os.terminal_size((40, 10))):
        yield


def _status():
    return DocumentStatus(
        total_lines=3, current_line_idx=1, is_modified=True, file_name="notes.txt"
    )


def test_status_bar_redraws_only_on_change(terminal, stream, wide_terminal):
    bar = StatusBar(terminal)
    bar.resize(Size(height=1, width=40))
    bar.update_status(_status())
    bar.render(0)
    assert bar.needs_redraw is False
    bar.update_status(_status())
    assert bar.needs_redraw is False
    bar.update_status(DocumentStatus(total_lines=4, file_name="notes.txt"))
    assert bar.needs_redraw is True


def test_status_bar_layout(terminal, stream, wide_terminal):
    status = _status()
    bar = StatusBar(terminal)
    bar.resize(Size(height=1, width=40))
    bar.update_status(status)
    bar.render(8)
    visible = _visible(_output(terminal, stream))
    assert len(visible) == 40
    assert visible.startswith(f"notes.txt - {status.line_count_text()}")
    assert status.modified_indicator_text() in visible
    assert visible.endswith(
        f"{status.file_type_text()} | {status.position_indicator_text()}"
    )


def test_status_bar_blank_when_too_narrow(terminal, stream):
    bar = StatusBar(terminal)
    bar.resize(Size(height=1, width=5))
    bar.update_status(_status())
    with mock.patch("shutil.get_terminal_size", return_value=os.terminal_size((5, 10))):
        bar.render(0)
    assert _visible(_output(terminal, stream)) == " " * 5