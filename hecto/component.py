"""Base class for the parts of the screen that draw themselves."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hecto.geometry import Size


class UIComponent(ABC):
    """A screen area that is redrawn only when it has changed."""

    def __init__(self) -> None:
        self._needs_redraw = False

    @property
    def needs_redraw(self) -> bool:
        return self._needs_redraw

    @needs_redraw.setter
    def needs_redraw(self, value: bool) -> None:
        self._needs_redraw = value

    def resize(self, size: Size) -> None:
        """Update the size and mark the component for redrawing."""
        self.set_size(size)
        self.needs_redraw = True

    @abstractmethod
    def set_size(self, size: Size) -> None:
        """Store the new size."""

    def render(self, origin_row: int) -> None:
        """Draw the component at ``origin_row`` if it needs redrawing."""
        if not self.needs_redraw:
            return
        try:
            self.draw(origin_row)
        except OSError:
            # Leave the component marked so the next cycle tries again.
            return
        self.needs_redraw = False

    @abstractmethod
    def draw(self, origin_row: int) -> None:
        """Draw the component starting at ``origin_row``."""