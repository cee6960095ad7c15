"""A snapshot of the document's state, shown in the status bar."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DocumentStatus:
    total_lines: int = 0
    current_line_index: int = 0
    is_modified: bool = False
    file_name: str = ""

    def modified_indicator_to_string(self) -> str:
        return "(modified)" if self.is_modified else ""

    def line_count_to_string(self) -> str:
        return f"{self.total_lines} lines"

    def position_indicator_to_string(self) -> str:
        return f"{self.current_line_index + 1}/{self.total_lines}"