"""The text of a document and the operations that change it."""

from __future__ import annotations

from dataclasses import dataclass, field

from .fileinfo import FileInfo
from .line import Line


@dataclass
class Location:
    """A place in the text: a grapheme within a line."""

    grapheme_index: int = 0
    line_index: int = 0


def _split_lines(contents: str) -> list[str]:
    parts = contents.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


@dataclass
class Buffer:
    lines: list[Line] = field(default_factory=list)
    file_info: FileInfo = field(default_factory=FileInfo)
    dirty: bool = False

    @classmethod
    def load(cls, file_name: str) -> Buffer:
        """Read a UTF-8 file into a new buffer."""
        with open(file_name, encoding="utf-8", newline="") as handle:
            contents = handle.read()
        return cls(
            lines=[Line.from_str(text) for text in _split_lines(contents)],
            file_info=FileInfo.from_name(file_name),
            dirty=False,
        )

    def is_empty(self) -> bool:
        return not self.lines

    def height(self) -> int:
        return len(self.lines)

    def insert_char(self, character: str, at: Location) -> None:
        if at.line_index > self.height():
            return
        if at.line_index == self.height():
            self.lines.append(Line.from_str(character))
        else:
            self.lines[at.line_index].insert_char(character, at.grapheme_index)
        self.dirty = True

    def delete(self, at: Location) -> None:
        if at.line_index >= self.height():
            return
        line = self.lines[at.line_index]
        count = line.grapheme_count()
        if at.grapheme_index >= count and self.height() > at.line_index + 1:
            line.append(self.lines.pop(at.line_index + 1))
            self.dirty = True
        elif at.grapheme_index < count:
            line.delete(at.grapheme_index)
            self.dirty = True

    def insert_newline(self, at: Location) -> None:
        if at.line_index == self.height():
            self.lines.append(Line())
            self.dirty = True
        elif at.line_index < self.height():
            remainder = self.lines[at.line_index].split(at.grapheme_index)
            self.lines.insert(at.line_index + 1, remainder)
            self.dirty = True

    def save(self) -> None:
        """Write the buffer to its file, if it has one."""
        path = self.file_info.path
        if path is None:
            return
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.writelines(f"{line}\n" for line in self.lines)
        self.dirty = False