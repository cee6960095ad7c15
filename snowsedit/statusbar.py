"""The inverted status line showing file name, line count and position."""

from __future__ import annotations

from .documentstatus import DocumentStatus
from .terminal import Size, Terminal
from .uicomponent import UIComponent


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


class Statusbar(UIComponent):
    def __init__(self) -> None:
        super().__init__()
        self.current_status = DocumentStatus()

    def update_status(self, new_status: DocumentStatus) -> None:
        if self.current_status != new_status:
            self.current_status = new_status
            self.needs_redraw = True

    def set_size(self, size: Size) -> None:
        self.size = size

    def draw(self, terminal: Terminal, origin_y: int) -> None:
        status = self.current_status
        beginning = (
            f"{status.file_name} - {status.line_count_to_string()} "
            f"{status.modified_indicator_to_string()}"
        )
        position = status.position_indicator_to_string()
        width = self.size.width
        remainder = max(width - _byte_len(beginning), 0)
        text = beginning + position.rjust(remainder)
        terminal.print_inverted_row(origin_y, text if _byte_len(text) <= width else "")