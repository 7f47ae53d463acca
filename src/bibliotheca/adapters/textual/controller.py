"""Textual adapter that wires the application context into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from bibliotheca.buffer import BufferMirror, PasteResult, Selection
from bibliotheca.context import AppContext
from bibliotheca.session import (
    CloseStep,
    ConfirmationChoice,
    SessionResult,
    fixed_destination,
)
from bibliotheca.views import ReplResult, ViewId
from bibliotheca.views.registry import CloseHandler

Location = Tuple[int, int]  # (row, column) as TextArea reports it


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    show_view: Callable[[ViewId], None]
    set_title: Callable[[ViewId, str], None] = _noop
    update_editor: Callable[[BufferMirror], None] = _noop
    notify: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualHostSurface:
    """HostSurface implementation that forwards to ``TextualUIHooks``."""

    def __init__(self, hooks: TextualUIHooks) -> None:
        self.hooks = hooks
        self.titles: Dict[ViewId, str] = {}
        self._close_handlers: Dict[ViewId, CloseHandler] = {}

    def show(self, view_id: ViewId) -> None:
        self.hooks.show_view(view_id)

    def set_title(self, view_id: ViewId, text: str) -> None:
        self.titles[view_id] = text
        self.hooks.set_title(view_id, text)

    def on_close_requested(self, view_id: ViewId, handler: CloseHandler) -> None:
        self._close_handlers[view_id] = handler

    def request_close(self, view_id: ViewId) -> Optional[CloseStep]:
        handler = self._close_handlers.get(view_id)
        return handler() if handler is not None else None


class TextualEditorAdapter:
    """Bridges widget events to buffer, clipboard, save and close verbs."""

    def __init__(self, context: AppContext, surface: TextualHostSurface) -> None:
        self.context = context
        self.surface = surface
        self.hooks = surface.hooks
        bus = context.session.bus
        bus.subscribe("session.loaded", lambda _payload: self._refresh_editor())
        bus.subscribe("session.saved", lambda _payload: self._refresh_editor())

    @property
    def needs_path_for_save(self) -> bool:
        return not self.context.coordinator.has_file

    def needs_path_for(self, choice: ConfirmationChoice) -> bool:
        if choice is ConfirmationChoice.SAVE_AS:
            return True
        return choice is ConfirmationChoice.SAVE and self.needs_path_for_save

    def sync_from_widget(self, text: str, location: Location) -> None:
        """Adopt text typed directly into the widget."""

        buffer = self.context.session.buffer
        if text == buffer.content:
            return
        self.context.session.ensure_idle("edit")
        buffer.replace(text)
        buffer.set_caret(min(location_to_offset(text, location), buffer.length))
        self._log_state("edit ->", chars=buffer.length)

    def copy(self, anchor: Location, head: Location) -> str:
        self.context.session.ensure_idle("copy")
        buffer = self.context.session.buffer
        text = self.context.clipboard.copy(buffer, self._selection(anchor, head))
        self.hooks.notify(f"Copied {len(text)} characters")
        return text

    def cut(self, anchor: Location, head: Location) -> str:
        self.context.session.ensure_idle("cut")
        buffer = self.context.session.buffer
        text = self.context.clipboard.cut(buffer, self._selection(anchor, head))
        self._refresh_editor()
        return text

    def paste(self, caret: Location) -> PasteResult:
        self.context.session.ensure_idle("paste")
        buffer = self.context.session.buffer
        offset = location_to_offset(buffer.content, caret)
        result = self.context.clipboard.paste(buffer, offset)
        if result.ok:
            self._refresh_editor()
        else:
            self.hooks.notify("Clipboard holds no text")
        return result

    def save(self, path: Optional[str] = None) -> SessionResult:
        result = self.context.coordinator.save(fixed_destination(path))
        self._report(result)
        return result

    def save_as(self, path: Optional[str]) -> SessionResult:
        result = self.context.coordinator.save_as(fixed_destination(path))
        self._report(result)
        return result

    def open_path(self, path: Optional[str]) -> SessionResult:
        result = self.context.coordinator.choose_and_open(fixed_destination(path))
        if not result.ok:
            self._report(result)
        return result

    def new_document(self) -> None:
        self.context.registry.new_document()

    def request_close(self) -> Optional[CloseStep]:
        step = self.surface.request_close(ViewId.EDITOR)
        if step is not None:
            self._log_state("close ->", verdict=step.verdict.value)
        return step

    def choose(
        self, choice: ConfirmationChoice, path: Optional[str] = None
    ) -> CloseStep:
        picker = fixed_destination(path) if self.needs_path_for(choice) else None
        step = self.context.guard.choose(choice, picker=picker)
        self._log_state("choice ->", choice=choice.value, verdict=step.verdict.value)
        if step.result is not None and not step.result.ok:
            self._report(step.result)
        return step

    def closed(self) -> None:
        self.context.registry.mark_hidden(ViewId.EDITOR)
        self.context.registry.show(ViewId.REPL)

    def submit_repl(self, line: str) -> ReplResult:
        result = self.context.repl.submit(line)
        self._log_state("repl ->", status=result.status)
        return result

    def _selection(self, anchor: Location, head: Location) -> Selection:
        text = self.context.session.buffer.content
        return Selection.between(
            location_to_offset(text, anchor), location_to_offset(text, head)
        )

    def _report(self, result: SessionResult) -> None:
        if result.ok or result.failure is not None:
            self.hooks.notify(result.message)

    def _refresh_editor(self) -> None:
        self.hooks.update_editor(self.context.session.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        session = self.context.session
        snapshot: Dict[str, object] = {
            "document": session.display_name,
            "caret": session.buffer.caret,
            "version": session.buffer.version,
            "dirty": session.is_dirty(),
            "guard": self.context.guard.state.value,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


def _newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def location_to_offset(text: str, location: Location) -> int:
    """Convert a TextArea ``(row, column)`` into a flat offset into ``text``."""

    newline = _newline(text)
    lines = text.split(newline)
    row, col = location
    row = max(0, min(row, len(lines) - 1))
    offset = sum(len(line) + len(newline) for line in lines[:row])
    return offset + max(0, min(col, len(lines[row])))


def offset_to_location(text: str, offset: int) -> Location:
    newline = _newline(text)
    lines = text.split(newline)
    running = 0
    for row, line in enumerate(lines):
        if offset <= running + len(line):
            return (row, max(0, offset - running))
        running += len(line) + len(newline)
    return (len(lines) - 1, len(lines[-1]))


__all__ = [
    "TextualEditorAdapter",
    "TextualHostSurface",
    "TextualUIHooks",
    "location_to_offset",
    "offset_to_location",
]
