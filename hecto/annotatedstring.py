"""Strings carrying highlight annotations over character ranges."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from hecto.annotation import Annotation, AnnotationType


@dataclass(frozen=True)
class AnnotatedStringPart:
    """A run of text with at most one annotation type applied."""

    string: str
    annotation_type: AnnotationType | None


class AnnotatedString:
    """Text with a list of annotations that follow edits to the text.

    Indices are character offsets into the text.
    """

    def __init__(self, string: str = "") -> None:
        self._string = string
        self._annotations: list[Annotation] = []

    @property
    def annotations(self) -> tuple[Annotation, ...]:
        return tuple(self._annotations)

    def add_annotation(self, annotation_type: AnnotationType, start: int, end: int) -> None:
        if start > end:
            raise ValueError(f"annotation start {start} is after its end {end}")
        self._annotations.append(Annotation(annotation_type, start, end))

    def truncate_left_until(self, until: int) -> None:
        """Remove everything before ``until``."""
        self.replace(0, until, "")

    def truncate_right_from(self, start: int) -> None:
        """Remove everything from ``start`` on."""
        self.replace(start, len(self._string), "")

    def replace(self, start: int, end: int, new_string: str) -> None:
        """Replace ``[start, end)`` with ``new_string``, adjusting annotations."""
        end = min(end, len(self._string))
        if start > end:
            return
        self._string = self._string[:start] + new_string + self._string[end:]

        delta = len(new_string) - (end - start)
        if delta == 0:
            return

        def adjust(idx: int) -> int:
            if idx >= end:
                return max(0, idx + delta)
            if idx >= start:
                # Indices inside the replaced range stay within its bounds.
                return max(start, idx + delta) if delta < 0 else min(end, idx + delta)
            return idx

        for annotation in self._annotations:
            annotation.start = adjust(annotation.start)
            annotation.end = adjust(annotation.end)

        length = len(self._string)
        self._annotations = [
            annotation
            for annotation in self._annotations
            if annotation.start < annotation.end and annotation.start < length
        ]

    def __iter__(self) -> Iterator[AnnotatedStringPart]:
        text = self._string
        length = len(text)
        current = 0
        while current < length:
            active = [a for a in self._annotations if a.start <= current < a.end]
            if active:
                annotation = active[-1]
                end = min(annotation.end, length)
                yield AnnotatedStringPart(text[current:end], annotation.annotation_type)
                current = end
                continue
            end = min(
                (a.start for a in self._annotations if current < a.start < length),
                default=length,
            )
            yield AnnotatedStringPart(text[current:end], None)
            current = end

    def __str__(self) -> str:
        return self._string

    def __repr__(self) -> str:
        return f"AnnotatedString({self._string!r}, annotations={self._annotations!r})"