"""The single long-lived editing session and its dirty-state tracking."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from bibliotheca.buffer import TextBuffer, fingerprint
from bibliotheca.runtime import telemetry
from bibliotheca.runtime.settings import NEW_FILE_TITLE

from .bus import SessionBus


class SessionBusy(RuntimeError):
    """Raised when the session is touched while an I/O operation is outstanding."""

    def __init__(self, action: str, pending: str) -> None:
        super().__init__(f"Cannot {action} while '{pending}' is in progress")
        self.action = action
        self.pending = pending


class EditorSession:
    """Owns the buffer, its backing path, and the fingerprint of the last save.

    ``saved_fingerprint`` stays ``None`` until the document has been loaded
    from or written to a file. Untitled documents are compared against the
    content they were created with instead, so an untouched new document
    is clean.
    """

    def __init__(
        self,
        buffer: Optional[TextBuffer] = None,
        *,
        bus: Optional[SessionBus] = None,
    ) -> None:
        self.buffer = buffer or TextBuffer()
        self.bus = bus or SessionBus()
        self.backing_path: Optional[Path] = None
        self.saved_fingerprint: Optional[str] = None
        self._baseline = fingerprint(self.buffer.content)
        self._busy: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.backing_path.name if self.backing_path else NEW_FILE_TITLE

    @property
    def is_busy(self) -> bool:
        return self._busy is not None

    def ensure_idle(self, action: str) -> None:
        if self._busy is not None:
            raise SessionBusy(action, self._busy)

    @contextmanager
    def busy(self, label: str) -> Iterator[None]:
        """Mark an I/O operation as outstanding for the duration of the block."""

        self.ensure_idle(label)
        self._busy = label
        try:
            yield
        finally:
            self._busy = None

    def current_fingerprint(self) -> str:
        return fingerprint(self.buffer.content)

    def load(self, path: Optional[Path], content: str) -> None:
        self.ensure_idle("load")
        self.buffer.replace(content)
        self.buffer.set_caret(0)
        self.backing_path = Path(path) if path is not None else None
        self._baseline = fingerprint(content)
        self.saved_fingerprint = self._baseline if path is not None else None
        telemetry.record_event(
            "session.loaded",
            data={"path": self.backing_path or "<untitled>", "chars": len(content)},
        )
        self.bus.emit("session.loaded", self.backing_path)

    def is_dirty(self) -> bool:
        reference = self.saved_fingerprint
        if reference is None:
            reference = self._baseline
        return self.current_fingerprint() != reference

    def mark_saved(self, path: Path) -> None:
        self.ensure_idle("mark_saved")
        self.backing_path = Path(path)
        self.saved_fingerprint = self.current_fingerprint()
        self._baseline = self.saved_fingerprint
        telemetry.record_event("session.saved", data={"path": self.backing_path})
        self.bus.emit("session.saved", self.backing_path)


__all__ = ["EditorSession", "SessionBusy"]
