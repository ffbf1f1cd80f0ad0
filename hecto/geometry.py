"""Screen positions, sizes and text locations shared across the editor."""

from __future__ import annotations

from dataclasses import dataclass

NAME = "hecto"
VERSION = "0.1.0"


@dataclass(frozen=True)
class Position:
    """A cell on screen, addressed by column and row."""

    col: int = 0
    row: int = 0

    def saturating_sub(self, other: Position) -> Position:
        """Subtract component-wise, clamping each component at zero."""
        return Position(
            col=max(0, self.col - other.col),
            row=max(0, self.row - other.row),
        )


@dataclass(frozen=True)
class Size:
    """The extent of a screen area in rows and columns."""

    height: int = 0
    width: int = 0


@dataclass(frozen=True)
class Location:
    """A place in the document, addressed by line and grapheme index."""

    grapheme_idx: int = 0
    line_idx: int = 0