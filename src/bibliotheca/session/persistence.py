"""Plain-text file persistence and file-picker collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence

from bibliotheca.runtime.settings import FileFilter


class FileStore(Protocol):
    def read_text(self, path: Path) -> str:
        ...

    def write_text(self, path: Path, content: str) -> None:
        ...

    def is_file(self, path: Path) -> bool:
        ...


class LocalFileStore:
    """Reads and overwrites files in place, line endings untouched."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_text(self, path: Path) -> str:
        with open(path, "r", encoding=self.encoding, newline="") as handle:
            return handle.read()

    def write_text(self, path: Path, content: str) -> None:
        with open(path, "w", encoding=self.encoding, newline="") as handle:
            handle.write(content)

    def is_file(self, path: Path) -> bool:
        return Path(path).is_file()


# (dialog title, accepted filters) -> chosen path, or None when cancelled
FilePicker = Callable[[str, Sequence[FileFilter]], Optional[Path]]


def fixed_destination(path: Optional[Path | str]) -> FilePicker:
    """Picker that answers with a path the host already collected."""

    chosen = Path(path) if path else None

    def pick(title: str, filters: Sequence[FileFilter]) -> Optional[Path]:
        del title, filters
        return chosen

    return pick


def cancelled_picker(title: str, filters: Sequence[FileFilter]) -> Optional[Path]:
    del title, filters
    return None


__all__ = [
    "FilePicker",
    "FileStore",
    "LocalFileStore",
    "cancelled_picker",
    "fixed_destination",
]
