"""Information about the file a buffer belongs to."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

NO_NAME = "[No Name]"


@dataclass
class FileInfo:
    """The path of a document, if it has one."""

    path: Path | None = None

    @classmethod
    def from_name(cls, file_name: str) -> FileInfo:
        return cls(Path(file_name))

    def __str__(self) -> str:
        if self.path is None:
            return NO_NAME
        name = self.path.name
        if not name or name == "..":
            return NO_NAME
        return name