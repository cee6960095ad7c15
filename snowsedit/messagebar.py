"""A one-line bar showing a message that disappears after a while."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .terminal import Size, Terminal
from .uicomponent import UIComponent

DEFAULT_DURATION = 5.0


@dataclass
class _Message:
    text: str
    time: float


class MessageBar(UIComponent):
    """Shows the latest message until it expires."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._message = _Message("", clock())
        self._needs_redraw = False
        self._cleared_after_expiry = False
        super().__init__()

    def _is_expired(self) -> bool:
        return self._clock() - self._message.time > DEFAULT_DURATION

    @property
    def needs_redraw(self) -> bool:
        return (not self._cleared_after_expiry and self._is_expired()) or self._needs_redraw

    @needs_redraw.setter
    def needs_redraw(self, value: bool) -> None:
        self._needs_redraw = value

    def update_message(self, new_message: str) -> None:
        self._message = _Message(new_message, self._clock())
        self._cleared_after_expiry = False
        self.needs_redraw = True

    def set_size(self, size: Size) -> None:
        """The bar always spans one row; its size is not kept."""

    def draw(self, terminal: Terminal, origin_y: int) -> None:
        expired = self._is_expired()
        if expired:
            self._cleared_after_expiry = True
        terminal.print_row(origin_y, "" if expired else self._message.text)