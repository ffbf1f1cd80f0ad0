"""Syntax highlighting for Rust source code."""

from __future__ import annotations

import unicodedata
from itertools import accumulate

from hecto.annotation import Annotation, AnnotationType
from hecto.line import Line
from hecto.searchhighlighter import SyntaxHighlighter

KEYWORDS = frozenset(
    {
        "break", "const", "continue", "crate", "else", "enum", "extern", "false",
        "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod", "move",
        "mut", "pub", "ref", "return", "self", "Self", "static", "struct", "super",
        "trait", "true", "type", "unsafe", "use", "where", "while", "async",
        "await", "dyn", "abstract", "become", "box", "do", "final", "macro",
        "override", "priv", "typeof", "unsized", "virtual", "yield", "try",
        "macro_rules", "union",
    }
)
TYPES = frozenset(
    {
        "i8", "i16", "i32", "i64", "i128", "isize", "u8", "u16", "u32", "u64",
        "u128", "usize", "f32", "f64", "bool", "char", "Option", "Result",
        "String", "str", "Vec", "HashMap",
    }
)
KNOWN_VALUES = frozenset({"Some", "None", "true", "false", "Ok", "Err"})

# Word-break classes, a subset of those in Unicode's word segmentation rules.
_OTHER = "Other"
_CR = "CR"
_LF = "LF"
_NEWLINE = "Newline"
_EXTEND = "Extend"
_REGIONAL = "Regional_Indicator"
_WSEG = "WSegSpace"
_ALETTER = "ALetter"
_NUMERIC = "Numeric"
_EXTEND_NUM_LET = "ExtendNumLet"
_MID_LETTER = "MidLetter"
_MID_NUM = "MidNum"
_MID_NUM_LET = "MidNumLet"
_SINGLE_QUOTE = "Single_Quote"

_MID_LETTER_CHARS = frozenset(":\u00b7\u0387\u055f\u05f4\u2027\ufe13\ufe55\uff1a")
_MID_NUM_CHARS = frozenset(
    ",;\u037e\u0589\u060c\u060d\u066c\u07f8\u2044\ufe10\ufe14\ufe50\ufe54\uff0c\uff1b"
)
_MID_NUM_LET_CHARS = frozenset(".\u2018\u2019\u2024\ufe52\uff07\uff0e")
_NEWLINE_CHARS = frozenset("\x0b\x0c\x85\u2028\u2029")
_NO_BREAK_SPACES = frozenset("\u00a0\u2007\u202f")

_LINE_BREAKS = {_CR, _LF, _NEWLINE}
_AH_LETTER = {_ALETTER}
_MID_LETTER_Q = {_MID_LETTER, _MID_NUM_LET, _SINGLE_QUOTE}
_MID_NUM_Q = {_MID_NUM, _MID_NUM_LET, _SINGLE_QUOTE}
_WORD_LIKE = {_ALETTER, _NUMERIC}


def _is_ideographic(ch: str) -> bool:
    if "\u3040" <= ch <= "\u30ff":
        return True
    return unicodedata.name(ch, "").startswith("CJK")


def _word_break_class(ch: str) -> str:
    if ch == "\r":
        return _CR
    if ch == "\n":
        return _LF
    if ch in _NEWLINE_CHARS:
        return _NEWLINE
    category = unicodedata.category(ch)
    if category in ("Mn", "Me", "Mc", "Cf"):
        return _EXTEND
    if "\U0001f1e6" <= ch <= "\U0001f1ff":
        return _REGIONAL
    if category == "Zs" and ch not in _NO_BREAK_SPACES:
        return _WSEG
    if ch == "'":
        return _SINGLE_QUOTE
    if ch in _MID_LETTER_CHARS:
        return _MID_LETTER
    if ch in _MID_NUM_CHARS:
        return _MID_NUM
    if ch in _MID_NUM_LET_CHARS:
        return _MID_NUM_LET
    if category == "Nd":
        return _NUMERIC
    if category == "Pc":
        return _EXTEND_NUM_LET
    if category.startswith("L") and not _is_ideographic(ch):
        return _ALETTER
    return _OTHER


def _is_break(classes: list[str], i: int, regional_run: int) -> bool:
    prev, cur = classes[i - 1], classes[i]
    before = classes[i - 2] if i >= 2 else None
    after = classes[i + 1] if i + 1 < len(classes) else None
    if prev == _CR and cur == _LF:
        return False
    if prev in _LINE_BREAKS or cur in _LINE_BREAKS:
        return True
    if prev == _WSEG and cur == _WSEG:
        return False
    if prev in _WORD_LIKE and cur in _WORD_LIKE:
        return False
    if prev in _AH_LETTER and cur in _MID_LETTER_Q and after in _AH_LETTER:
        return False
    if before in _AH_LETTER and prev in _MID_LETTER_Q and cur in _AH_LETTER:
        return False
    if before == _NUMERIC and prev in _MID_NUM_Q and cur == _NUMERIC:
        return False
    if prev == _NUMERIC and cur in _MID_NUM_Q and after == _NUMERIC:
        return False
    if prev in (_ALETTER, _NUMERIC, _EXTEND_NUM_LET) and cur == _EXTEND_NUM_LET:
        return False
    if prev == _EXTEND_NUM_LET and cur in _WORD_LIKE:
        return False
    if prev == _REGIONAL and cur == _REGIONAL and regional_run % 2 == 1:
        return False
    return True


def split_word_bounds(text: str) -> list[str]:
    """Split ``text`` at Unicode word boundaries, keeping every character."""
    clusters: list[list[str]] = []
    classes: list[str] = []
    for ch in text:
        cls = _word_break_class(ch)
        if cls == _EXTEND and classes and classes[-1] not in _LINE_BREAKS:
            clusters[-1].append(ch)
        else:
            clusters.append([ch])
            classes.append(cls)

    words: list[str] = []
    regional_run = 0
    for i, cluster in enumerate(clusters):
        piece = "".join(cluster)
        if i == 0 or _is_break(classes, i, regional_run):
            words.append(piece)
        else:
            words[-1] += piece
        regional_run = regional_run + 1 if classes[i] == _REGIONAL else 0
    return words


def _word_bound_indices(text: str) -> list[tuple[int, str]]:
    words = split_word_bounds(text)
    starts = accumulate((len(word) for word in words[:-1]), initial=0)
    return list(zip(starts, words))


def is_numeric_literal(word: str) -> bool:
    """Whether ``word`` is a ``0b``, ``0o`` or ``0x`` prefixed integer."""
    if len(word) < 3 or word[0] != "0":
        return False
    digits = _BASE_DIGITS.get(word[1])
    if digits is None:
        return False
    return all(ch in digits for ch in word[2:])


_BASE_DIGITS = {
    "b": frozenset("01"),
    "B": frozenset("01"),
    "o": frozenset("01234567"),
    "O": frozenset("01234567"),
    "x": frozenset("0123456789abcdefABCDEF"),
    "X": frozenset("0123456789abcdefABCDEF"),
}
_ASCII_DIGITS = frozenset("0123456789")


def is_valid_number(word: str) -> bool:
    """Whether ``word`` is a decimal, float or prefixed numeric literal."""
    if not word:
        return False
    if is_numeric_literal(word):
        return True
    if word[0] not in _ASCII_DIGITS:
        return False

    seen_dot = False
    seen_e = False
    prev_was_digit = True
    for ch in word[1:]:
        if ch in _ASCII_DIGITS:
            prev_was_digit = True
        elif ch == "_":
            if not prev_was_digit:
                return False
            prev_was_digit = False
        elif ch == ".":
            if seen_dot or seen_e or not prev_was_digit:
                return False
            seen_dot = True
            prev_was_digit = False
        elif ch in "eE":
            if seen_e or not prev_was_digit:
                return False
            seen_e = True
            prev_was_digit = False
        else:
            return False
    return prev_was_digit


def _annotate_next_word(text: str, annotation_type: AnnotationType, valid) -> Annotation | None:
    words = split_word_bounds(text)
    if words and valid(words[0]):
        return Annotation(annotation_type, 0, len(words[0]))
    return None


def _annotate_single_line_comment(text: str) -> Annotation | None:
    if text.startswith("//"):
        return Annotation(AnnotationType.COMMENT, 0, len(text))
    return None


def _annotate_char(text: str) -> Annotation | None:
    words = _word_bound_indices(text)
    if not words or words[0][1] != "'":
        return None
    pos = 1
    if pos < len(words) and words[pos][1] == "\\":
        pos += 1  # the escape character
    pos += 1  # the quoted character
    if pos < len(words) and words[pos][1] == "'":
        return Annotation(AnnotationType.CHAR, 0, words[pos][0] + 1)
    return None


def _annotate_lifetime_specifier(text: str) -> Annotation | None:
    words = _word_bound_indices(text)
    if len(words) >= 2 and words[0][1] == "'":
        idx, word = words[1]
        return Annotation(AnnotationType.LIFETIME_SPECIFIER, 0, idx + len(word))
    return None


def _annotate_number(text: str) -> Annotation | None:
    return _annotate_next_word(text, AnnotationType.NUMBER, is_valid_number)


def _annotate_keyword(text: str) -> Annotation | None:
    return _annotate_next_word(text, AnnotationType.KEYWORD, KEYWORDS.__contains__)


def _annotate_type(text: str) -> Annotation | None:
    return _annotate_next_word(text, AnnotationType.TYPE, TYPES.__contains__)


def _annotate_known_value(text: str) -> Annotation | None:
    return _annotate_next_word(text, AnnotationType.KNOWN_VALUE, KNOWN_VALUES.__contains__)


_STATELESS_ANNOTATORS = (
    _annotate_single_line_comment,
    _annotate_char,
    _annotate_lifetime_specifier,
    _annotate_number,
    _annotate_keyword,
    _annotate_type,
    _annotate_known_value,
)


class RustSyntaxHighlighter(SyntaxHighlighter):
    """Highlights Rust code; lines must be highlighted in order from the first."""

    def __init__(self) -> None:
        self._highlights: list[list[Annotation]] = []
        self._ml_comment_balance = 0
        self._in_ml_string = False

    def _annotate_ml_comment(self, text: str) -> Annotation | None:
        chars = list(enumerate(text))
        i = 0
        while i < len(chars):
            _, ch = chars[i]
            i += 1
            has_next = i < len(chars)
            if ch == "/":
                if has_next and chars[i][1] == "*":
                    self._ml_comment_balance += 1
                    i += 1
            elif self._ml_comment_balance == 0:
                return None
            elif ch == "*" and has_next and chars[i][1] == "/":
                self._ml_comment_balance = max(0, self._ml_comment_balance - 1)
                if self._ml_comment_balance == 0:
                    return Annotation(AnnotationType.COMMENT, 0, chars[i][0] + 1)
                i += 1
        if self._ml_comment_balance > 0:
            return Annotation(AnnotationType.COMMENT, 0, len(text))
        return None

    def _annotate_string(self, text: str) -> Annotation | None:
        i = 0
        while i < len(text):
            ch = text[i]
            idx = i
            i += 1
            if ch == "\\" and self._in_ml_string:
                i += 1
                continue
            if ch == '"':
                if self._in_ml_string:
                    self._in_ml_string = False
                    return Annotation(AnnotationType.STRING, 0, idx + 1)
                self._in_ml_string = True
            if not self._in_ml_string:
                return None
        if self._in_ml_string:
            return Annotation(AnnotationType.STRING, 0, len(text))
        return None

    def _initial_annotation(self, text: str) -> Annotation | None:
        if self._in_ml_string:
            return self._annotate_string(text)
        if self._ml_comment_balance > 0:
            return self._annotate_ml_comment(text)
        return None

    def _annotate_remainder(self, remainder: str) -> Annotation | None:
        annotation = self._annotate_ml_comment(remainder) or self._annotate_string(remainder)
        if annotation is not None:
            return annotation
        for annotate in _STATELESS_ANNOTATORS:
            annotation = annotate(remainder)
            if annotation is not None:
                return annotation
        return None

    def highlight(self, idx: int, line: Line) -> None:
        if idx != len(self._highlights):
            raise ValueError(f"expected line {len(self._highlights)}, got line {idx}")
        text = str(line)
        words = _word_bound_indices(text)
        result: list[Annotation] = []
        pos = 0

        def skip_covered(end: int) -> int:
            skip_to = pos
            while skip_to < len(words) and words[skip_to][0] < end:
                skip_to += 1
            return skip_to

        # Multi-line comments or strings continuing from the previous line.
        initial = self._initial_annotation(text)
        if initial is not None:
            result.append(initial)
            pos = skip_covered(initial.end)

        while pos < len(words):
            start_idx, _ = words[pos]
            pos += 1
            annotation = self._annotate_remainder(text[start_idx:])
            if annotation is not None:
                annotation.shift(start_idx)
                result.append(annotation)
                pos = skip_covered(annotation.end)
        self._highlights.append(result)

    def get_annotations(self, idx: int) -> list[Annotation] | None:
        if 0 <= idx < len(self._highlights):
            return self._highlights[idx]
        return None