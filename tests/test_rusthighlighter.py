import pytest

from hecto.annotation import AnnotationType
from hecto.line import Line
from hecto.rusthighlighter import (
    RustSyntaxHighlighter,
    is_numeric_literal,
    is_valid_number,
    split_word_bounds,
)


def spans(highlighter, idx, text):
    return [(a.annotation_type, text[a.start : a.end]) for a in highlighter.get_annotations(idx)]


def highlight_lines(*texts):
    highlighter = RustSyntaxHighlighter()
    for idx, text in enumerate(texts):
        highlighter.highlight(idx, Line(text))
    return highlighter


@pytest.mark.parametrize(
    "text",
    ["fn main() {", "let x = 1.5;", "", "  \t a_b 'c' // x", "日本語 e\u0301t\u00e9"],
)
def test_split_covers_text(text):
    words = split_word_bounds(text)
    assert "".join(words) == text
    assert all(words)


def test_split_example():
    assert split_word_bounds("let x = 1.5;") == ["let", " ", "x", " ", "=", " ", "1.5", ";"]


def test_split_keeps_identifier_with_underscore():
    assert split_word_bounds("foo_bar1") == ["foo_bar1"]


@pytest.mark.parametrize(
    "word", ["0", "123", "1_000", "1.5", "1e10", "1.5e3", "0x1F", "0b101", "0o17"]
)
def test_valid_numbers(word):
    assert is_valid_number(word) is True


@pytest.mark.parametrize(
    "word", ["", "a1", "1.", "1..2", "1__0", "1e", "0x", "0xG", "1.2.3", "_1"]
)
def test_invalid_numbers(word):
    assert is_valid_number(word) is False


def test_numeric_literal_checks_digits_for_base():
    assert is_numeric_literal("0b101") is True
    assert is_numeric_literal("0b102") is False
    assert is_numeric_literal("0x") is False


def test_keywords_types_and_values():
    text = "let x: Option<u8> = None;"
    highlighter = highlight_lines(text)
    assert set(spans(highlighter, 0, text)) == {
        (AnnotationType.KEYWORD, "let"),
        (AnnotationType.TYPE, "Option"),
        (AnnotationType.TYPE, "u8"),
        (AnnotationType.KNOWN_VALUE, "None"),
    }


def test_true_is_a_keyword_before_known_value():
    highlighter = highlight_lines("true")
    assert spans(highlighter, 0, "true") == [(AnnotationType.KEYWORD, "true")]


def test_single_line_comment_runs_to_end():
    text = "let a = 1; // note"
    highlighter = highlight_lines(text)
    assert spans(highlighter, 0, text) == [
        (AnnotationType.KEYWORD, "let"),
        (AnnotationType.NUMBER, "1"),
        (AnnotationType.COMMENT, "// note"),
    ]


def test_multi_line_comment_spans_lines():
    lines = ("/* start", "middle", "end */ fn")
    highlighter = highlight_lines(*lines)
    assert spans(highlighter, 0, lines[0]) == [(AnnotationType.COMMENT, lines[0])]
    assert spans(highlighter, 1, lines[1]) == [(AnnotationType.COMMENT, lines[1])]
    assert spans(highlighter, 2, lines[2]) == [
        (AnnotationType.COMMENT, "end */"),
        (AnnotationType.KEYWORD, "fn"),
    ]


def test_nested_multi_line_comment():
    lines = ("/* /* */ still", "x */")
    highlighter = highlight_lines(*lines)
    assert spans(highlighter, 0, lines[0]) == [(AnnotationType.COMMENT, lines[0])]
    assert spans(highlighter, 1, lines[1]) == [(AnnotationType.COMMENT, lines[1])]


def test_multi_line_string():
    lines = ('let s = "abc', 'def" + 1')
    highlighter = highlight_lines(*lines)
    assert spans(highlighter, 0, lines[0]) == [
        (AnnotationType.KEYWORD, "let"),
        (AnnotationType.STRING, '"abc'),
    ]
    assert spans(highlighter, 1, lines[1]) == [
        (AnnotationType.STRING, 'def"'),
        (AnnotationType.NUMBER, "1"),
    ]


def test_single_line_string():
    text = 'x = "a b";'
    highlighter = highlight_lines(text)
    assert spans(highlighter, 0, text) == [(AnnotationType.STRING, '"a b"')]


def test_char_literal():
    text = "let c = 'a';"
    highlighter = highlight_lines(text)
    assert spans(highlighter, 0, text) == [
        (AnnotationType.KEYWORD, "let"),
        (AnnotationType.CHAR, "'a'"),
    ]


def test_escaped_char_literal():
    text = "'\\n'"
    highlighter = highlight_lines(text)
    assert spans(highlighter, 0, text) == [(AnnotationType.CHAR, text)]


def test_lifetime_specifiers():
    text = "fn f<'a>(x: &'a str)"
    highlighter = highlight_lines(text)
    assert spans(highlighter, 0, text) == [
        (AnnotationType.KEYWORD, "fn"),
        (AnnotationType.LIFETIME_SPECIFIER, "'a"),
        (AnnotationType.LIFETIME_SPECIFIER, "'a"),
        (AnnotationType.TYPE, "str"),
    ]


def test_unknown_line_has_no_annotations():
    highlighter = highlight_lines("fn")
    assert highlighter.get_annotations(1) is None


def test_lines_must_come_in_order():
    highlighter = RustSyntaxHighlighter()
    with pytest.raises(ValueError):
        highlighter.highlight(1, Line("fn"))