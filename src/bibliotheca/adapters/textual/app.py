"""Executable Textual app hosting the REPL view and the editor view."""

from __future__ import annotations

import argparse
from typing import Callable, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical
    from textual.screen import ModalScreen, Screen
    from textual.widgets import Button, Footer, Header, Input, Label, Log, Static
    from textual.widgets import TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use bibliotheca.adapters.textual.app"
    ) from exc

from bibliotheca.buffer import BufferMirror
from bibliotheca.context import AppContext
from bibliotheca.runtime import telemetry
from bibliotheca.runtime.settings import CLIPBOARD_BACKENDS, Settings
from bibliotheca.session import CloseStep, CloseVerdict, ConfirmationChoice
from bibliotheca.session import ConfirmationRequest
from bibliotheca.views import ViewId

from .controller import (
    TextualEditorAdapter,
    TextualHostSurface,
    TextualUIHooks,
    offset_to_location,
)

_CHOICE_LABELS = {
    ConfirmationChoice.SAVE: "Save",
    ConfirmationChoice.SAVE_AS: "Save As",
    ConfirmationChoice.DISCARD: "Discard",
    ConfirmationChoice.CANCEL: "Cancel",
}


class PathPromptScreen(ModalScreen[Optional[str]]):
    """Stands in for a native file dialog: one path, or ``None`` on escape."""

    def __init__(self, title: str, hint: str = "") -> None:
        super().__init__()
        self._title = title
        self._hint = hint

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt"):
            yield Label(self._title)
            if self._hint:
                yield Static(self._hint, classes="hint")
            self._input = Input(placeholder="path/to/file.ritual")
            yield self._input

    def on_mount(self) -> None:
        self.set_focus(self._input)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        path = event.value.strip()
        self.dismiss(path or None)

    def on_key(self, event) -> None:
        if event.key == "escape":
            self.dismiss(None)


class ConfirmCloseScreen(ModalScreen[ConfirmationChoice]):
    def __init__(self, request: ConfirmationRequest) -> None:
        super().__init__()
        self.request = request

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt"):
            yield Label(self.request.prompt)
            with Horizontal():
                for choice in self.request.choices:
                    yield Button(_CHOICE_LABELS[choice], id=f"choice-{choice.value}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        self.dismiss(ConfirmationChoice(button_id.removeprefix("choice-")))

    def on_key(self, event) -> None:
        if event.key == "escape":
            self.dismiss(ConfirmationChoice.CANCEL)


class ReplScreen(Screen[None]):
    BINDINGS = [
        Binding("ctrl+n", "app.new_file", "New File"),
        Binding("ctrl+o", "app.open_file", "Open File"),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        self.transcript = Log(id="transcript")
        yield self.transcript
        with Horizontal(id="repl-actions"):
            yield Button("New File", id="new-file")
            yield Button("Open File", id="open-file")
        self.command_input = Input(placeholder=":open path, :new, :history, :quit")
        yield self.command_input
        yield Footer()

    def on_mount(self) -> None:
        self.set_focus(self.command_input)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "new-file":
            self.app.action_new_file()
        elif event.button.id == "open-file":
            self.app.action_open_file()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.command_input.value = ""
        self.app.submit_repl(event.value)


class EditorScreen(Screen[None]):
    BINDINGS = [
        Binding("ctrl+s", "app.save", "Save", priority=True),
        Binding("ctrl+e", "app.save_as", "Save As", priority=True),
        Binding("ctrl+w", "app.close_editor", "Close", priority=True),
        Binding("ctrl+c", "app.copy", "Copy", priority=True),
        Binding("ctrl+x", "app.cut", "Cut", priority=True),
        Binding("ctrl+v", "app.paste", "Paste", priority=True),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        self.text_area = TextArea(id="codezone", show_line_numbers=True)
        yield self.text_area
        self.status = Static("", id="status-line")
        yield self.status
        yield Footer()

    def on_screen_resume(self) -> None:
        self.app.refresh_editor()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.app.sync_editor(event.text_area.text, event.text_area.cursor_location)


class BibliothecaApp(App[None]):
    """REPL view plus a single-document editor view."""

    CSS = """
    #transcript {
        height: 1fr;
        border: round $accent;
    }

    #repl-actions {
        height: auto;
    }

    #codezone {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #prompt {
        width: 70;
        height: auto;
        padding: 1 2;
        border: thick $accent;
        background: $surface;
    }

    ModalScreen {
        align: center middle;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "request_quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        open_path: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._open_path = open_path
        self._repl_screen = ReplScreen()
        self._editor_screen = EditorScreen()
        self.surface = TextualHostSurface(
            TextualUIHooks(
                show_view=self._show_view,
                set_title=self._set_title,
                update_editor=self._update_editor,
                notify=self._notify,
                log=self._log_line,
            )
        )
        self.context: Optional[AppContext] = None
        self.adapter: Optional[TextualEditorAdapter] = None

    def on_mount(self) -> None:
        self.context = AppContext.create(self.surface, settings=self._settings)
        self.adapter = TextualEditorAdapter(self.context, self.surface)
        self.install_screen(self._editor_screen, name="editor")
        self.push_screen(self._repl_screen)
        self._set_title(ViewId.REPL, self.surface.titles[ViewId.REPL])
        if self._open_path:
            self.adapter.open_path(self._open_path)

    def on_unmount(self) -> None:
        if self.context is not None:
            self.context.shutdown()

    # -- host surface hooks -------------------------------------------------

    def _show_view(self, view_id: ViewId) -> None:
        if view_id is ViewId.EDITOR:
            if self.screen is not self._editor_screen:
                self.push_screen("editor")
            else:
                self.refresh_editor()
        elif self.screen is self._editor_screen:
            self.pop_screen()
        self.title = self.surface.titles.get(view_id, self.title)

    def _set_title(self, view_id: ViewId, text: str) -> None:
        showing_editor = self.screen is self._editor_screen
        if (view_id is ViewId.EDITOR) == showing_editor:
            self.title = text

    def _update_editor(self, mirror: BufferMirror) -> None:
        if not self._editor_screen.is_mounted:
            return
        area = self._editor_screen.text_area
        if area.text != mirror.text:
            area.load_text(mirror.text)
        area.cursor_location = offset_to_location(mirror.text, mirror.caret)

    def _notify(self, message: str) -> None:
        if self._editor_screen.is_mounted:
            self._editor_screen.status.update(message)
        self.notify(message)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("ui.trace", level="debug", data={"line": line})

    # -- widget callbacks ---------------------------------------------------

    def refresh_editor(self) -> None:
        if self.context is not None:
            self._update_editor(self.context.session.buffer.mirror())

    def sync_editor(self, text: str, location: tuple[int, int]) -> None:
        if self.adapter is not None:
            self.adapter.sync_from_widget(text, location)

    def submit_repl(self, line: str) -> None:
        if self.adapter is None:
            return
        log = self._repl_screen.transcript
        log.write_line(f"> {line}")
        result = self.adapter.submit_repl(line)
        if result.message and result.status != "input":
            log.write_line(result.message)
        if result.status == "quit":
            self.action_request_quit()

    # -- actions ------------------------------------------------------------

    def action_new_file(self) -> None:
        if self.adapter is not None:
            self.adapter.new_document()

    def action_open_file(self) -> None:
        filters = self._filters_hint(open_dialog=True)
        self.push_screen(
            PathPromptScreen("Select source file...", filters), self._open_chosen
        )

    def _open_chosen(self, path: Optional[str]) -> None:
        if self.adapter is not None and path:
            self.adapter.open_path(path)

    def action_save(self) -> None:
        if self.adapter is None:
            return
        if self.adapter.needs_path_for_save:
            self.action_save_as()
        else:
            self.adapter.save()

    def action_save_as(self) -> None:
        hint = self._filters_hint(open_dialog=False)
        self.push_screen(PathPromptScreen("Save As", hint), self._save_as_chosen)

    def _save_as_chosen(self, path: Optional[str]) -> None:
        if self.adapter is not None and path:
            self.adapter.save_as(path)

    def action_copy(self) -> None:
        if self.adapter is not None:
            selection = self._editor_screen.text_area.selection
            self.adapter.copy(selection.start, selection.end)

    def action_cut(self) -> None:
        if self.adapter is not None:
            selection = self._editor_screen.text_area.selection
            self.adapter.cut(selection.start, selection.end)

    def action_paste(self) -> None:
        if self.adapter is not None:
            self.adapter.paste(self._editor_screen.text_area.cursor_location)

    def action_close_editor(self, then: Optional[Callable[[], None]] = None) -> None:
        if self.adapter is None:
            return
        step = self.adapter.request_close()
        if step is not None:
            self._handle_close_step(step, then)

    def action_request_quit(self) -> None:
        if self.screen is self._editor_screen:
            self.action_close_editor(then=self.exit)
        else:
            self.exit()

    # -- close confirmation -------------------------------------------------

    def _handle_close_step(
        self, step: CloseStep, then: Optional[Callable[[], None]]
    ) -> None:
        assert self.adapter is not None
        if step.verdict is CloseVerdict.ALLOW:
            self.adapter.closed()
            if then is not None:
                then()
            return
        if step.verdict is CloseVerdict.CANCELLED or step.request is None:
            self._notify("Close cancelled")
            return

        def on_choice(choice: Optional[ConfirmationChoice]) -> None:
            choice = choice or ConfirmationChoice.CANCEL
            if self.adapter is not None and self.adapter.needs_path_for(choice):
                hint = self._filters_hint(open_dialog=False)
                self.push_screen(
                    PathPromptScreen("Save As", hint),
                    lambda path: self._apply_choice(choice, path, then),
                )
            else:
                self._apply_choice(choice, None, then)

        self.push_screen(ConfirmCloseScreen(step.request), on_choice)

    def _apply_choice(
        self,
        choice: ConfirmationChoice,
        path: Optional[str],
        then: Optional[Callable[[], None]],
    ) -> None:
        assert self.adapter is not None
        self._handle_close_step(self.adapter.choose(choice, path), then)

    def _filters_hint(self, *, open_dialog: bool) -> str:
        if self.context is None:
            return ""
        settings = self.context.settings
        filters = settings.open_filters if open_dialog else settings.save_filters
        return ", ".join(f.describe() for f in filters)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the Daemonium Bibliotheca editing shell."
    )
    parser.add_argument("path", nargs="?", help="File to open in the editor")
    parser.add_argument(
        "--clipboard",
        choices=CLIPBOARD_BACKENDS,
        default=None,
        help="Clipboard backend (default: $BIBLIOTHECA_CLIPBOARD or 'system')",
    )
    parser.add_argument(
        "--log-preset",
        default=telemetry.env_value("LOG_PRESET") or "production",
        help="Telemetry preset: development, production, or performance "
        "(default: $BIBLIOTHECA_LOG_PRESET or production)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = Settings.from_env(clipboard=args.clipboard)
    BibliothecaApp(settings=settings, open_path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()


__all__ = ["BibliothecaApp", "ConfirmCloseScreen", "PathPromptScreen", "main"]
