"""Explicitly constructed application context: one per process run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bibliotheca.buffer import (
    Clipboard,
    ClipboardBridge,
    MemoryClipboard,
    SystemClipboard,
)
from bibliotheca.runtime import telemetry
from bibliotheca.runtime.settings import Settings
from bibliotheca.session import (
    CloseGuard,
    EditorSession,
    FilePicker,
    FileStore,
    LocalFileStore,
    SaveCoordinator,
    SessionBus,
)
from bibliotheca.views import HostSurface, ReplConsole, ViewId, ViewRegistry


def make_clipboard(settings: Settings) -> Clipboard:
    if settings.clipboard == "memory":
        return MemoryClipboard()
    return SystemClipboard()


@dataclass
class AppContext:
    """Everything the views share, wired once at startup."""

    settings: Settings
    session: EditorSession
    clipboard: ClipboardBridge
    coordinator: SaveCoordinator
    guard: CloseGuard
    registry: ViewRegistry
    repl: ReplConsole
    closed: bool = False

    @classmethod
    def create(
        cls,
        host: HostSurface,
        *,
        settings: Optional[Settings] = None,
        clipboard: Optional[Clipboard] = None,
        store: Optional[FileStore] = None,
        picker: Optional[FilePicker] = None,
    ) -> "AppContext":
        settings = settings or Settings.from_env()
        session = EditorSession(bus=SessionBus())
        registry = ViewRegistry(host, session)
        registry.register(ViewId.REPL)
        registry.register(ViewId.EDITOR)
        coordinator = SaveCoordinator(
            session,
            store or LocalFileStore(encoding=settings.encoding),
            settings=settings,
            picker=picker,
            opener=registry.open_document_in_editor,
        )
        guard = CloseGuard(session, coordinator)
        registry.attach_close_guard(guard)
        context = cls(
            settings=settings,
            session=session,
            clipboard=ClipboardBridge(clipboard or make_clipboard(settings)),
            coordinator=coordinator,
            guard=guard,
            registry=registry,
            repl=ReplConsole(registry, coordinator, bus=session.bus),
        )
        telemetry.record_event(
            "app.started", level="debug", data={"clipboard": settings.clipboard}
        )
        return context

    def shutdown(self) -> None:
        if self.closed:
            return
        self.session.ensure_idle("shutdown")
        self.session.bus.clear()
        self.closed = True
        telemetry.record_event("app.shutdown", level="debug")


__all__ = ["AppContext", "make_clipboard"]
