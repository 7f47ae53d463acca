from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from bibliotheca.buffer import MemoryClipboard
from bibliotheca.context import AppContext
from bibliotheca.runtime.settings import FileFilter, Settings
from bibliotheca.views import ViewId
from bibliotheca.views.registry import CloseHandler


class MemoryFileStore:
    """Dict-backed FileStore; ``fail_on`` maps a path to the error to raise."""

    def __init__(self, files: Optional[Dict[Path, str]] = None) -> None:
        self.files: Dict[Path, str] = dict(files or {})
        self.fail_on: Dict[Path, Exception] = {}
        self.writes: List[Path] = []

    def read_text(self, path: Path) -> str:
        if path in self.fail_on:
            raise self.fail_on[path]
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(2, "No such file", str(path)) from None

    def write_text(self, path: Path, content: str) -> None:
        if path in self.fail_on:
            raise self.fail_on[path]
        self.files[path] = content
        self.writes.append(path)

    def is_file(self, path: Path) -> bool:
        return path in self.files


class RecordingHost:
    def __init__(self) -> None:
        self.shown: List[ViewId] = []
        self.titles: Dict[ViewId, str] = {}
        self.close_handlers: Dict[ViewId, CloseHandler] = {}

    def show(self, view_id: ViewId) -> None:
        self.shown.append(view_id)

    def set_title(self, view_id: ViewId, text: str) -> None:
        self.titles[view_id] = text

    def on_close_requested(self, view_id: ViewId, handler: CloseHandler) -> None:
        self.close_handlers[view_id] = handler


class ScriptedPicker:
    """Answers picker calls from a queue and records what it was asked."""

    def __init__(self, *answers: Optional[Path]) -> None:
        self.answers = list(answers)
        self.calls: List[Tuple[str, Tuple[FileFilter, ...]]] = []

    def __call__(self, title: str, filters: Sequence[FileFilter]) -> Optional[Path]:
        self.calls.append((title, tuple(filters)))
        return self.answers.pop(0) if self.answers else None


@pytest.fixture
def store() -> MemoryFileStore:
    return MemoryFileStore()


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture
def app_context(
    host: RecordingHost, store: MemoryFileStore, clipboard: MemoryClipboard
) -> AppContext:
    return AppContext.create(
        host,
        settings=Settings(clipboard="memory"),
        clipboard=clipboard,
        store=store,
    )


@pytest.fixture
def make_picker():
    return ScriptedPicker
