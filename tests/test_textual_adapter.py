from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from bibliotheca.buffer import BufferMirror, MemoryClipboard
from bibliotheca.adapters.textual import (
    TextualEditorAdapter,
    TextualHostSurface,
    TextualUIHooks,
    location_to_offset,
    offset_to_location,
)
from bibliotheca.context import AppContext
from bibliotheca.runtime.settings import Settings
from bibliotheca.session import (
    CloseVerdict,
    ConfirmationChoice,
    LocalFileStore,
    SessionBusy,
)
from bibliotheca.views import ViewId


def make_adapter(tmp_path: Path, **hook_overrides):
    shown: List[ViewId] = []
    hooks = TextualUIHooks(show_view=shown.append, **hook_overrides)
    surface = TextualHostSurface(hooks)
    context = AppContext.create(
        surface,
        settings=Settings(clipboard="memory"),
        clipboard=MemoryClipboard(),
        store=LocalFileStore(),
    )
    return TextualEditorAdapter(context, surface), context, shown


def test_location_offset_conversion_handles_both_newline_styles() -> None:
    text = "ab\ncde\n"
    assert location_to_offset(text, (1, 2)) == 5
    assert offset_to_location(text, 5) == (1, 2)
    assert offset_to_location(text, len(text)) == (2, 0)

    crlf = "ab\r\ncd"
    assert location_to_offset(crlf, (1, 1)) == 5
    assert offset_to_location(crlf, 5) == (1, 1)


def test_opening_a_file_updates_editor_and_title(tmp_path: Path) -> None:
    mirrors: List[BufferMirror] = []
    titles: List[tuple[ViewId, str]] = []
    adapter, context, shown = make_adapter(
        tmp_path,
        update_editor=mirrors.append,
        set_title=lambda view, text: titles.append((view, text)),
    )
    path = tmp_path / "spell.ritual"
    path.write_text("chant", encoding="utf-8")

    result = adapter.open_path(str(path))

    assert result.ok
    assert shown == [ViewId.EDITOR]
    assert mirrors[-1].text == "chant"
    assert titles[-1] == (ViewId.EDITOR, "Editing: spell.ritual")


def test_widget_typing_is_synced_into_the_buffer(tmp_path: Path) -> None:
    adapter, context, _ = make_adapter(tmp_path)
    adapter.new_document()

    adapter.sync_from_widget("line\nmore", (1, 2))

    assert context.session.buffer.content == "line\nmore"
    assert context.session.buffer.caret == 7
    assert context.session.is_dirty()


def test_cut_and_paste_use_widget_locations(tmp_path: Path) -> None:
    mirrors: List[BufferMirror] = []
    adapter, context, _ = make_adapter(tmp_path, update_editor=mirrors.append)
    adapter.new_document()
    adapter.sync_from_widget("hello world", (0, 11))

    assert adapter.cut((0, 6), (0, 0)) == "hello "
    result = adapter.paste((0, 5))

    assert result.ok
    assert context.session.buffer.content == "worldhello  "
    assert mirrors[-1].caret == 11


def test_paste_with_empty_clipboard_notifies(tmp_path: Path) -> None:
    notes: List[str] = []
    adapter, context, _ = make_adapter(tmp_path, notify=notes.append)
    context.clipboard.clipboard = MemoryClipboard(None)

    assert not adapter.paste((0, 0)).ok
    assert notes == ["Clipboard holds no text"]


def test_close_flow_with_save_as_path(tmp_path: Path) -> None:
    adapter, context, shown = make_adapter(tmp_path)
    adapter.new_document()
    adapter.sync_from_widget("draft", (0, 5))

    step = adapter.request_close()
    assert step is not None and step.verdict is CloseVerdict.CONFIRM
    assert adapter.needs_path_for(ConfirmationChoice.SAVE)

    target = tmp_path / "draft.ritual"
    done = adapter.choose(ConfirmationChoice.SAVE, str(target))
    adapter.closed()

    assert done.allow_close
    assert target.read_text(encoding="utf-8") == "draft"
    assert shown[-1] is ViewId.REPL
    assert not context.registry.get(ViewId.EDITOR).visible


def test_close_flow_escape_from_path_prompt_asks_again(tmp_path: Path) -> None:
    adapter, _, _ = make_adapter(tmp_path)
    adapter.new_document()
    adapter.sync_from_widget("draft", (0, 5))
    adapter.request_close()

    step = adapter.choose(ConfirmationChoice.SAVE_AS, None)

    assert step.verdict is CloseVerdict.CONFIRM
    assert step.request is not None and step.request.attempt == 2


def test_save_failure_is_surfaced_to_the_status_line(tmp_path: Path) -> None:
    notes: List[str] = []
    adapter, _, _ = make_adapter(tmp_path, notify=notes.append)
    adapter.new_document()
    adapter.sync_from_widget("text", (0, 4))

    result = adapter.save_as(str(tmp_path / "missing-dir" / "x.ritual"))

    assert not result.ok
    assert notes and notes[-1].startswith("Could not write x.ritual")


def test_adapter_emits_log_lines(tmp_path: Path) -> None:
    logs: List[str] = []
    adapter, _, _ = make_adapter(tmp_path, log=logs.append)

    adapter.submit_repl(":new")

    assert any(line.startswith("repl ->") for line in logs)


def test_clipboard_verbs_wait_for_outstanding_io(tmp_path: Path) -> None:
    adapter, context, _ = make_adapter(tmp_path)
    adapter.new_document()
    adapter.sync_from_widget("hello", (0, 5))
    context.clipboard.clipboard.write("x")

    with context.session.busy("save"):
        with pytest.raises(SessionBusy):
            adapter.cut((0, 0), (0, 5))
        with pytest.raises(SessionBusy):
            adapter.paste((0, 0))

    assert context.session.buffer.content == "hello"
