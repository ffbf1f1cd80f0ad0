"""The path and kind of the file being edited."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hecto.documentstatus import FileType

NO_NAME = "[No Name]"


@dataclass(frozen=True)
class FileInfo:
    """Where a document lives on disk, if anywhere, and what kind it is."""

    path: Path | None = None
    file_type: FileType = FileType.TEXT

    @classmethod
    def from_file_name(cls, file_name: str) -> FileInfo:
        """Describe ``file_name``, recognising Rust sources by extension."""
        path = Path(file_name)
        is_rust = path.suffix.lower() == ".rs"
        return cls(path=path, file_type=FileType.RUST if is_rust else FileType.TEXT)

    def has_path(self) -> bool:
        return self.path is not None

    def __str__(self) -> str:
        name = self.path.name if self.path is not None else ""
        if not name or name == "..":
            return NO_NAME
        return name