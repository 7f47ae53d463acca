"""Registry of the REPL and editor views and routing between them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

from bibliotheca.runtime import telemetry
from bibliotheca.runtime.settings import (
    EDITOR_TITLE,
    NEW_FILE_TITLE,
    REPL_TITLE,
    editing_title,
)
from bibliotheca.session import CloseGuard, CloseStep, EditorSession


class ViewId(str, Enum):
    REPL = "repl"
    EDITOR = "editor"


DEFAULT_TITLES = {ViewId.REPL: REPL_TITLE, ViewId.EDITOR: EDITOR_TITLE}

CloseHandler = Callable[[], CloseStep]


class HostSurface(Protocol):
    """What the UI toolkit must provide for the registry to drive it."""

    def show(self, view_id: ViewId) -> None:
        ...

    def set_title(self, view_id: ViewId, text: str) -> None:
        ...

    def on_close_requested(self, view_id: ViewId, handler: CloseHandler) -> None:
        ...


class ViewAlreadyRegistered(RuntimeError):
    def __init__(self, view_id: ViewId) -> None:
        super().__init__(f"View '{view_id.value}' is already registered")
        self.view_id = view_id


@dataclass(slots=True)
class ViewHandle:
    view_id: ViewId
    title: str
    visible: bool = False


class ViewRegistry:
    """Holds at most one REPL view and one editor view.

    The editor view always renders the single shared ``EditorSession``.
    """

    def __init__(self, host: HostSurface, session: EditorSession) -> None:
        self.host = host
        self.session = session
        self._views: Dict[ViewId, ViewHandle] = {}
        session.bus.subscribe("session.saved", self._on_saved)

    def register(self, view_id: ViewId, title: Optional[str] = None) -> ViewHandle:
        view_id = ViewId(view_id)
        if view_id in self._views:
            raise ViewAlreadyRegistered(view_id)
        handle = ViewHandle(view_id=view_id, title=title or DEFAULT_TITLES[view_id])
        self._views[view_id] = handle
        self.host.set_title(view_id, handle.title)
        return handle

    def get(self, view_id: ViewId) -> ViewHandle:
        try:
            return self._views[ViewId(view_id)]
        except KeyError:
            raise KeyError(f"View '{view_id}' is not registered") from None

    def show(self, view_id: ViewId) -> None:
        handle = self.get(view_id)
        handle.visible = True
        telemetry.record_event("view.show", data={"view": handle.view_id.value})
        self.host.show(handle.view_id)

    def set_title(self, view_id: ViewId, text: str) -> None:
        handle = self.get(view_id)
        handle.title = text
        self.host.set_title(handle.view_id, text)

    def mark_hidden(self, view_id: ViewId) -> None:
        self.get(view_id).visible = False

    def attach_close_guard(self, guard: CloseGuard) -> None:
        self.get(ViewId.EDITOR)
        self.host.on_close_requested(ViewId.EDITOR, guard.request_close)

    def open_document_in_editor(
        self, content: str, title: str, path: Optional[Path]
    ) -> None:
        self.session.load(path, content)
        self.set_title(ViewId.EDITOR, title)
        self.show(ViewId.EDITOR)

    def new_document(self) -> None:
        self.open_document_in_editor("", NEW_FILE_TITLE, None)

    def _on_saved(self, payload: object | None) -> None:
        if isinstance(payload, Path) and ViewId.EDITOR in self._views:
            self.set_title(ViewId.EDITOR, editing_title(payload.name))


__all__ = [
    "CloseHandler",
    "HostSurface",
    "ViewAlreadyRegistered",
    "ViewHandle",
    "ViewId",
    "ViewRegistry",
]
