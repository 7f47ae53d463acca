"""Copy/cut/paste between a TextBuffer and a clipboard backend."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

import pyperclip

from bibliotheca.runtime import telemetry

from .buffer import TextBuffer, Transaction
from .state import Selection
from .validation import ensure_offset, ensure_range

PASTE_TRAILER = " "


class Clipboard(Protocol):
    def write(self, text: str) -> None:
        ...

    def read(self) -> Optional[str]:
        """Return clipboard text, or ``None`` when it holds no text."""
        ...


class MemoryClipboard:
    """Process-local clipboard for headless hosts and tests."""

    def __init__(self, value: Optional[str] = None) -> None:
        self.value = value

    def write(self, text: str) -> None:
        self.value = text

    def read(self) -> Optional[str]:
        return self.value


class SystemClipboard:
    """System clipboard via pyperclip, falling back to process memory.

    If the platform clipboard utilities are missing, writes land in the
    fallback and reads come back from it.
    """

    def __init__(self) -> None:
        self._fallback = MemoryClipboard()
        self.available = True

    def write(self, text: str) -> None:
        self._fallback.write(text)
        if not self.available:
            return
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            self._mark_unavailable(exc)

    def read(self) -> Optional[str]:
        if not self.available:
            return self._fallback.read()
        try:
            value = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            self._mark_unavailable(exc)
            return self._fallback.read()
        # pyperclip reports images and file lists as an empty string
        return value if isinstance(value, str) and value else None

    def _mark_unavailable(self, exc: Exception) -> None:
        self.available = False
        telemetry.record_event(
            "clipboard.unavailable",
            level="warning",
            data={"reason": str(exc), "fallback": "memory"},
        )


class PasteStatus(str, Enum):
    OK = "ok"
    NON_TEXTUAL_CLIPBOARD = "non_textual_clipboard"


@dataclass(frozen=True, slots=True)
class PasteResult:
    status: PasteStatus
    inserted: str
    caret: int

    @property
    def ok(self) -> bool:
        return self.status is PasteStatus.OK


class ClipboardBridge:
    """Clipboard verbs over a host-supplied selection or caret."""

    def __init__(self, clipboard: Clipboard) -> None:
        self.clipboard = clipboard

    def copy(self, buffer: TextBuffer, selection: Selection) -> str:
        text = buffer.selected_text(selection)
        self.clipboard.write(text)
        telemetry.record_event(
            "clipboard.copy", level="debug", data={"chars": len(text)}
        )
        return text

    def cut(self, buffer: TextBuffer, selection: Selection) -> str:
        ensure_range(buffer.length, selection.start, selection.end)
        text = self.copy(buffer, selection)
        buffer.delete_range(selection.start, selection.end)
        return text

    def paste(self, buffer: TextBuffer, caret_offset: int) -> PasteResult:
        """Insert clipboard text plus a trailing space at ``caret_offset``.

        The caret ends up right after the pasted text, before the space.
        A clipboard without text is an informational no-op.
        """

        ensure_offset(buffer.length, caret_offset)
        text = self.clipboard.read()
        if text is None:
            telemetry.record_event(
                "clipboard.paste_skipped",
                level="info",
                data={"reason": "clipboard holds no text"},
            )
            return PasteResult(
                status=PasteStatus.NON_TEXTUAL_CLIPBOARD,
                inserted="",
                caret=buffer.caret,
            )

        content = buffer.content
        inserted = text + PASTE_TRAILER
        with Transaction(buffer, "paste") as tx:
            tx.commit(
                content[:caret_offset] + inserted + content[caret_offset:],
                caret_offset + len(text),
            )
        return PasteResult(status=PasteStatus.OK, inserted=inserted, caret=buffer.caret)


__all__ = [
    "Clipboard",
    "ClipboardBridge",
    "MemoryClipboard",
    "PASTE_TRAILER",
    "PasteResult",
    "PasteStatus",
    "SystemClipboard",
]
