"""Annotations marking highlighted ranges of text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class AnnotationType(Enum):
    """The kinds of highlighting a range of text may carry."""

    MATCH = auto()
    SELECTED_MATCH = auto()
    NUMBER = auto()
    KEYWORD = auto()
    TYPE = auto()
    KNOWN_VALUE = auto()
    CHAR = auto()
    LIFETIME_SPECIFIER = auto()
    COMMENT = auto()
    STRING = auto()


@dataclass
class Annotation:
    """A half-open range ``[start, end)`` of text with a highlight kind."""

    annotation_type: AnnotationType
    start: int
    end: int

    def shift(self, offset: int) -> None:
        """Move the range right by ``offset`` characters."""
        self.start += offset
        self.end += offset