import io

import pytest

from hecto.annotation import AnnotationType
from hecto.command import Edit, EditAction, Move
from hecto.fileinfo import NO_NAME
from hecto.geometry import NAME, VERSION, Position, Size
from hecto.terminal import Terminal, attribute_for
from hecto.view import View, build_welcome_message

WELCOME = f"{NAME} editor -- version {VERSION}"


def make_view(height=10, width=40):
    stream = io.StringIO()
    view = View(Terminal(stream))
    view.resize(Size(height=height, width=width))
    return view, stream


def type_text(view, text):
    for ch in text:
        view.handle_edit_command(Edit(EditAction.INSERT, ch))


def load_view(tmp_path, text, name="doc.txt", height=10, width=40):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    view, stream = make_view(height, width)
    view.load(str(path))
    return view, stream, path


def test_welcome_message_fits_width():
    message = build_welcome_message(80)
    assert len(message) == 80
    assert message.startswith("~")
    assert WELCOME in message


def test_welcome_message_edge_cases():
    assert build_welcome_message(0) == ""
    assert build_welcome_message(len(WELCOME)) == "~"


def test_status_of_empty_view():
    view, _ = make_view()
    status = view.get_status()
    assert status.total_lines == 0
    assert status.file_name == NO_NAME
    assert not status.is_modified
    assert not view.is_file_loaded()


def test_typing_moves_caret_and_marks_modified():
    view, _ = make_view()
    type_text(view, "ab")
    assert view.caret_position() == Position(col=len("ab"), row=0)
    status = view.get_status()
    assert status.is_modified
    assert status.total_lines == 1


def test_newline_moves_to_next_line():
    view, _ = make_view()
    type_text(view, "ab")
    view.handle_edit_command(Edit(EditAction.INSERT_NEWLINE))
    status = view.get_status()
    assert status.total_lines == 2
    assert status.current_line_idx == 1
    assert view.caret_position().col == 0


def test_delete_backward_at_start_does_nothing():
    view, _ = make_view()
    view.handle_edit_command(Edit(EditAction.DELETE_BACKWARD))
    assert not view.get_status().is_modified


def test_delete_backward_joins_lines(tmp_path):
    view, _, path = load_view(tmp_path, "ab\ncd\n")
    view.handle_move_command(Move.DOWN)
    view.handle_edit_command(Edit(EditAction.DELETE_BACKWARD))
    assert view.get_status().total_lines == 1
    assert view.caret_position().col == len("ab")
    view.save()
    assert path.read_text(encoding="utf-8") == "abcd\n"


def test_move_down_snaps_to_document_end(tmp_path):
    view, _, _ = load_view(tmp_path, "one\ntwo\n")
    for _ in range(5):
        view.handle_move_command(Move.DOWN)
    status = view.get_status()
    assert status.current_line_idx == status.total_lines


def test_end_and_home_of_line(tmp_path):
    view, _, _ = load_view(tmp_path, "hello\n")
    view.handle_move_command(Move.END_OF_LINE)
    assert view.caret_position().col == len("hello")
    view.handle_move_command(Move.START_OF_LINE)
    assert view.caret_position().col == 0


def test_horizontal_scroll_keeps_caret_visible(tmp_path):
    text = "x" * 30
    view, _, _ = load_view(tmp_path, text + "\n", width=10)
    view.handle_move_command(Move.END_OF_LINE)
    caret = view.caret_position()
    assert 0 <= caret.col < 10


def test_search_next_prev_and_dismiss(tmp_path):
    view, _, _ = load_view(tmp_path, "alpha\nbeta\ngamma beta\n")
    view.enter_search()
    view.search("beta")
    assert view.get_status().current_line_idx == 1
    view.search_next()
    assert view.get_status().current_line_idx == 2
    assert view.caret_position().col == len("gamma ")
    view.search_next()
    assert view.get_status().current_line_idx == 1
    view.search_prev()
    assert view.get_status().current_line_idx == 2
    view.dismiss_search()
    assert view.get_status().current_line_idx == 0
    assert view.caret_position() == Position()


def test_exit_search_keeps_found_location(tmp_path):
    view, _, _ = load_view(tmp_path, "alpha\nbeta\n")
    view.enter_search()
    view.search("beta")
    view.exit_search()
    assert view.get_status().current_line_idx == 1


def test_search_without_match_stays(tmp_path):
    view, _, _ = load_view(tmp_path, "alpha\nbeta\n")
    view.enter_search()
    view.search("zzz")
    assert view.get_status().current_line_idx == 0


def test_load_missing_file_raises(tmp_path):
    view, _ = make_view()
    with pytest.raises(OSError):
        view.load(str(tmp_path / "missing.txt"))


def test_save_as_writes_and_clears_modified(tmp_path):
    view, _ = make_view()
    type_text(view, "hi")
    target = tmp_path / "out.txt"
    view.save_as(str(target))
    assert target.read_text(encoding="utf-8") == "hi\n"
    status = view.get_status()
    assert not status.is_modified
    assert status.file_name == "out.txt"
    assert view.is_file_loaded()


def test_draw_empty_view_shows_welcome():
    view, stream = make_view(height=6, width=60)
    view.draw(0)
    view._terminal.execute()
    output = stream.getvalue()
    assert WELCOME in output
    assert "~" in output


def test_draw_shows_text_and_tildes(tmp_path):
    view, stream, _ = load_view(tmp_path, "alpha\nbeta\n", height=5)
    view.draw(0)
    view._terminal.execute()
    output = stream.getvalue()
    assert "alpha" in output
    assert "beta" in output
    assert "~" in output
    assert WELCOME not in output


def test_draw_highlights_rust_keywords(tmp_path):
    view, stream, _ = load_view(tmp_path, "fn main() {}\n", name="main.rs")
    view.draw(0)
    view._terminal.execute()
    red, green, blue = attribute_for(AnnotationType.KEYWORD).foreground
    output = stream.getvalue()
    assert f"{red};{green};{blue}" in output
    assert "fn" in output


def test_render_clears_redraw_flag(tmp_path):
    view, _, _ = load_view(tmp_path, "text\n")
    assert view.needs_redraw
    view.render(0)
    assert not view.needs_redraw