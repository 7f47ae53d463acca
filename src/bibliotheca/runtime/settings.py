"""Environment-driven settings shared by the session layer and the host app."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .telemetry import env_value

CLIPBOARD_BACKENDS = ("system", "memory")

REPL_TITLE = "Daemonium Bibliotheca"
EDITOR_TITLE = "Daemonium Bibliotheca Editor"
NEW_FILE_TITLE = "New File"
EDITING_TITLE_PREFIX = "Editing: "


@dataclass(frozen=True, slots=True)
class FileFilter:
    """A labelled set of glob patterns offered by file pickers."""

    label: str
    patterns: Tuple[str, ...]

    def describe(self) -> str:
        return f"{self.label} ({', '.join(self.patterns)})"

    @property
    def suffixes(self) -> Tuple[str, ...]:
        return tuple(pattern.lstrip("*") for pattern in self.patterns)


RITUAL_FILTER = FileFilter("Ritual", ("*.ritual",))
TEXT_FILTER = FileFilter("Text", ("*.txt",))


def parse_file_filters(raw: str) -> Tuple[FileFilter, ...]:
    """Parse ``Label:*.a,*.b;Other:*.c`` into filters, skipping blank entries."""

    filters = []
    for entry in raw.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        label, sep, patterns = entry.partition(":")
        if not sep or not label.strip():
            raise ValueError(f"Malformed file filter '{entry}'")
        globs = tuple(p.strip() for p in patterns.split(",") if p.strip())
        if not globs:
            raise ValueError(f"File filter '{label.strip()}' has no patterns")
        filters.append(FileFilter(label.strip(), globs))
    return tuple(filters)


@dataclass(slots=True)
class Settings:
    encoding: str = "utf-8"
    clipboard: str = "system"
    open_filters: Tuple[FileFilter, ...] = field(
        default_factory=lambda: (RITUAL_FILTER, TEXT_FILTER)
    )
    save_filters: Tuple[FileFilter, ...] = field(
        default_factory=lambda: (RITUAL_FILTER,)
    )

    def __post_init__(self) -> None:
        if self.clipboard not in CLIPBOARD_BACKENDS:
            raise ValueError(
                f"Unknown clipboard backend '{self.clipboard}', "
                f"expected one of {CLIPBOARD_BACKENDS}"
            )
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown text encoding '{self.encoding}'") from None

    @classmethod
    def from_env(cls, *, clipboard: Optional[str] = None) -> "Settings":
        settings = cls(
            encoding=env_value("ENCODING") or "utf-8",
            clipboard=clipboard or env_value("CLIPBOARD") or "system",
        )
        raw_filters = env_value("FILE_FILTERS")
        if raw_filters:
            parsed = parse_file_filters(raw_filters)
            if parsed:
                settings.open_filters = parsed
                settings.save_filters = parsed[:1]
        return settings


def editing_title(name: str) -> str:
    return f"{EDITING_TITLE_PREFIX}{name}"


__all__ = [
    "CLIPBOARD_BACKENDS",
    "EDITOR_TITLE",
    "FileFilter",
    "NEW_FILE_TITLE",
    "REPL_TITLE",
    "RITUAL_FILTER",
    "Settings",
    "TEXT_FILTER",
    "editing_title",
    "parse_file_filters",
]
