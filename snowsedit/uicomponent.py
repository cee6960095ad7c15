"""Common behaviour of the parts of the screen that redraw themselves."""

from __future__ import annotations

import abc

from .terminal import Size, Terminal


class UIComponent(abc.ABC):
    """A screen region that is drawn only when it has changed."""

    def __init__(self) -> None:
        self.size = Size()
        self.needs_redraw = False

    def resize(self, size: Size) -> None:
        self.set_size(size)
        self.needs_redraw = True

    def set_size(self, size: Size) -> None:
        self.size = size

    def render(self, terminal: Terminal, origin_y: int) -> None:
        """Draw the component at row ``origin_y`` if it needs it."""
        if not self.needs_redraw:
            return
        try:
            self.draw(terminal, origin_y)
        except OSError:
            # A failed draw leaves the component dirty, so the next render retries it.
            return
        self.needs_redraw = False

    @abc.abstractmethod
    def draw(self, terminal: Terminal, origin_y: int) -> None:
        """Write the component to the terminal starting at row ``origin_y``."""