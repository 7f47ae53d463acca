"""Flat text buffer with a caret, the unit every editing operation acts on."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from bibliotheca.runtime import telemetry

from .state import Selection
from .sync import BufferMirror
from .validation import ensure_offset, ensure_range


class TextBuffer:
    """Mutable character sequence plus a caret in ``0..len(content)``.

    Every mutation goes through a ``Transaction`` so the new content and
    caret are computed first and swapped in together.
    """

    def __init__(self, content: str = "", *, name: str = "editor") -> None:
        self.name = name
        self._content = content
        self._caret = 0
        self.version = 0

    @property
    def content(self) -> str:
        return self._content

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def length(self) -> int:
        return len(self._content)

    def __len__(self) -> int:
        return len(self._content)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self._content,
            caret=self._caret,
            version=self.version,
            attributes=dict(attributes or {}),
        )

    def set_caret(self, offset: int) -> int:
        self._caret = ensure_offset(len(self._content), offset)
        return self._caret

    def replace(self, new_content: str) -> None:
        with Transaction(self, "replace") as tx:
            tx.commit(new_content, min(self._caret, len(new_content)))

    def insert_at(self, offset: int, text: str) -> None:
        ensure_offset(len(self._content), offset)
        with Transaction(self, "insert_at") as tx:
            updated = self._content[:offset] + text + self._content[offset:]
            tx.commit(updated, offset + len(text))

    def delete_range(self, start: int, end: int) -> str:
        """Remove ``[start, end)`` and return the removed text."""

        ensure_range(len(self._content), start, end)
        with Transaction(self, "delete_range") as tx:
            removed = self._content[start:end]
            tx.commit(self._content[:start] + self._content[end:], start)
        return removed

    def text_in_range(self, start: int, end: int) -> str:
        ensure_range(len(self._content), start, end)
        return self._content[start:end]

    def selected_text(self, selection: Selection) -> str:
        return self.text_in_range(selection.start, selection.end)


class Transaction(AbstractContextManager["Transaction"]):
    """Applies one buffer mutation inside a telemetry span.

    Nothing is written until ``commit``; an exception raised inside the
    block leaves the buffer exactly as it was.
    """

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, content: str, caret: int) -> None:
        buffer = self.buffer
        buffer._content = content
        buffer._caret = caret
        buffer.version += 1

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["TextBuffer", "Transaction"]
