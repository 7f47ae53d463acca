"""Save, save-as, and open on top of the editor session.

All persistence errors stop here: they come back as ``SessionResult``
values carrying an ``IoFailure`` and the session keeps its previous
path, fingerprint, and content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from bibliotheca.runtime import telemetry
from bibliotheca.runtime.settings import Settings, editing_title

from .editor_session import EditorSession
from .persistence import FilePicker, FileStore
from .results import IoFailure, SessionResult

SAVE_AS_TITLE = "Save As"
OPEN_TITLE = "Select source file..."

# (content, title, path) -> None; surfaces a freshly read document
DocumentOpener = Callable[[str, str, Optional[Path]], None]


class SaveCoordinator:
    def __init__(
        self,
        session: EditorSession,
        store: FileStore,
        *,
        settings: Optional[Settings] = None,
        picker: Optional[FilePicker] = None,
        opener: Optional[DocumentOpener] = None,
    ) -> None:
        self.session = session
        self.store = store
        self.settings = settings or Settings()
        self.picker = picker
        self.opener = opener

    @property
    def has_file(self) -> bool:
        return self.session.backing_path is not None

    def save(self, picker: Optional[FilePicker] = None) -> SessionResult:
        """Overwrite the backing file, or fall back to save-as without one."""

        path = self.session.backing_path
        if path is None:
            return self.save_as(picker)
        return self._write(path)

    def save_as(self, picker: Optional[FilePicker] = None) -> SessionResult:
        choose = picker or self.picker
        destination = None
        if choose is not None:
            destination = choose(SAVE_AS_TITLE, self.settings.save_filters)
        if destination is None:
            telemetry.record_event(
                "session.no_selection", level="debug", data={"operation": "save_as"}
            )
            return SessionResult.no_selection()
        return self._write(Path(destination))

    def open(
        self, path: Path, read: Optional[Callable[[Path], str]] = None
    ) -> SessionResult:
        """Read ``path`` and hand it to the editor; nothing changes on failure."""

        path = Path(path)
        reader = read or self.store.read_text
        try:
            with self.session.busy("open"):
                content = reader(path)
        except (OSError, UnicodeError, LookupError) as exc:
            return self._failed(path, "read", exc)

        title = editing_title(path.name)
        if self.opener is not None:
            self.opener(content, title, path)
        else:
            self.session.load(path, content)
        return SessionResult.success(path)

    def choose_and_open(self, picker: Optional[FilePicker] = None) -> SessionResult:
        choose = picker or self.picker
        selected = None
        if choose is not None:
            selected = choose(OPEN_TITLE, self.settings.open_filters)
        if selected is None:
            telemetry.record_event(
                "session.no_selection", level="debug", data={"operation": "open"}
            )
            return SessionResult.no_selection()
        selected = Path(selected)
        if not self.store.is_file(selected):
            failure = IoFailure(selected, "open", "not a regular file")
            telemetry.record_event(
                "session.io_failure",
                level="error",
                data={"path": selected, "operation": "open", "reason": failure.reason},
            )
            return SessionResult.io_failure(failure)
        return self.open(selected)

    def _write(self, path: Path) -> SessionResult:
        content = self.session.buffer.content
        with telemetry.span(
            "session::write", component="session", metadata={"path": path}
        ) as handle:
            handle.add_metadata("chars", len(content))
            try:
                with self.session.busy("save"):
                    self.store.write_text(path, content)
            except (OSError, UnicodeError, LookupError) as exc:
                return self._failed(path, "write", exc)
        self.session.mark_saved(path)
        return SessionResult.success(path)

    def _failed(self, path: Path, operation: str, exc: Exception) -> SessionResult:
        failure = IoFailure(path, operation, str(exc) or exc.__class__.__name__)
        telemetry.record_event(
            "session.io_failure",
            level="error",
            data={"path": path, "operation": operation, "reason": failure.reason},
        )
        return SessionResult.io_failure(failure)


__all__ = ["DocumentOpener", "OPEN_TITLE", "SAVE_AS_TITLE", "SaveCoordinator"]
