from __future__ import annotations

import pyperclip
import pytest

from bibliotheca.buffer import (
    ClipboardBridge,
    MemoryClipboard,
    OutOfRange,
    PasteStatus,
    Selection,
    SystemClipboard,
    TextBuffer,
)


def make_bridge(value: str | None = None) -> tuple[ClipboardBridge, MemoryClipboard]:
    clipboard = MemoryClipboard(value)
    return ClipboardBridge(clipboard), clipboard


def test_copy_writes_selection_without_mutating_buffer() -> None:
    bridge, clipboard = make_bridge()
    buffer = TextBuffer("hello world")

    copied = bridge.copy(buffer, Selection(6, 11))

    assert copied == "world"
    assert clipboard.value == "world"
    assert buffer.content == "hello world"
    assert buffer.version == 0


def test_copy_of_empty_selection_copies_empty_string() -> None:
    bridge, clipboard = make_bridge("previous")
    buffer = TextBuffer("hello")

    bridge.copy(buffer, Selection.caret(2))

    assert clipboard.value == ""


def test_cut_removes_selection_and_fills_clipboard() -> None:
    bridge, clipboard = make_bridge()
    buffer = TextBuffer("hello world")

    bridge.cut(buffer, Selection(0, 6))

    assert buffer.content == "world"
    assert clipboard.value == "hello "
    assert buffer.caret == 0


def test_cut_out_of_range_touches_neither_buffer_nor_clipboard() -> None:
    bridge, clipboard = make_bridge("keep")
    buffer = TextBuffer("abc")

    with pytest.raises(OutOfRange):
        bridge.cut(buffer, Selection(1, 9))

    assert buffer.content == "abc"
    assert clipboard.value == "keep"


def test_paste_inserts_text_and_trailing_space() -> None:
    bridge, _ = make_bridge("XYZ")
    buffer = TextBuffer("helloworld")

    result = bridge.paste(buffer, 5)

    assert buffer.content == "helloXYZ world"
    assert buffer.caret == 8
    assert result.ok
    assert result.inserted == "XYZ "
    assert result.caret == 8


def test_paste_is_a_single_buffer_mutation() -> None:
    bridge, _ = make_bridge("abc")
    buffer = TextBuffer("")

    bridge.paste(buffer, 0)

    assert buffer.version == 1
    assert buffer.content == "abc "


def test_paste_without_text_is_a_silent_noop() -> None:
    bridge, _ = make_bridge(None)
    buffer = TextBuffer("hello")
    buffer.set_caret(2)

    result = bridge.paste(buffer, 2)

    assert result.status is PasteStatus.NON_TEXTUAL_CLIPBOARD
    assert not result.ok
    assert buffer.content == "hello"
    assert buffer.caret == 2
    assert buffer.version == 0


def test_paste_rejects_caret_outside_buffer() -> None:
    bridge, _ = make_bridge("x")
    buffer = TextBuffer("ab")

    with pytest.raises(OutOfRange):
        bridge.paste(buffer, 3)
    assert buffer.content == "ab"


def test_system_clipboard_round_trips_through_pyperclip(monkeypatch) -> None:
    stored: dict[str, str] = {}
    monkeypatch.setattr(pyperclip, "copy", lambda text: stored.update(value=text))
    monkeypatch.setattr(pyperclip, "paste", lambda: stored.get("value", ""))
    clipboard = SystemClipboard()

    clipboard.write("spell")

    assert clipboard.read() == "spell"
    assert clipboard.available


def test_system_clipboard_falls_back_to_memory_when_unavailable(monkeypatch) -> None:
    def broken(*_args):
        raise pyperclip.PyperclipException("no clipboard utility")

    monkeypatch.setattr(pyperclip, "copy", broken)
    monkeypatch.setattr(pyperclip, "paste", broken)
    clipboard = SystemClipboard()

    clipboard.write("ritual")

    assert not clipboard.available
    assert clipboard.read() == "ritual"


def test_system_clipboard_reports_non_text_payload_as_absent(monkeypatch) -> None:
    monkeypatch.setattr(pyperclip, "paste", lambda: None)

    assert SystemClipboard().read() is None


def test_system_clipboard_treats_empty_payload_as_non_text(monkeypatch) -> None:
    monkeypatch.setattr(pyperclip, "paste", lambda: "")
    bridge = ClipboardBridge(SystemClipboard())
    buffer = TextBuffer("hello")
    buffer.set_caret(2)

    result = bridge.paste(buffer, 2)

    assert result.status is PasteStatus.NON_TEXTUAL_CLIPBOARD
    assert buffer.content == "hello"
    assert buffer.version == 0
