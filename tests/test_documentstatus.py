import pytest

from hecto.documentstatus import DocumentStatus, FileType


@pytest.mark.parametrize(
    ("file_type", "expected"), [(FileType.RUST, "Rust"), (FileType.TEXT, "Text")]
)
def test_file_type_display(file_type, expected):
    assert str(file_type) == expected


def test_default_file_type_is_text():
    assert DocumentStatus().file_type is FileType.TEXT


def test_modified_indicator():
    assert DocumentStatus(is_modified=True).modified_indicator_text() == "(modified)"
    assert DocumentStatus(is_modified=False).modified_indicator_text() == ""


def test_line_count_text():
    status = DocumentStatus(total_lines=42)
    assert status.line_count_text() == "42 lines"


def test_position_indicator_is_one_based():
    status = DocumentStatus(total_lines=10, current_line_idx=4)
    assert status.position_indicator_text() == "5/10"


def test_position_indicator_on_first_line_starts_with_one():
    status = DocumentStatus(total_lines=3, current_line_idx=0)
    current, total = status.position_indicator_text().split("/")
    assert current == "1"
    assert total == str(status.total_lines)


def test_file_type_text_matches_file_type():
    status = DocumentStatus(file_type=FileType.RUST)
    assert status.file_type_text() == str(FileType.RUST)


def test_statuses_compare_by_value():
    a = DocumentStatus(total_lines=2, file_name="a.rs", file_type=FileType.RUST)
    b = DocumentStatus(total_lines=2, file_name="a.rs", file_type=FileType.RUST)
    assert a == b
    b.is_modified = True
    assert a != b