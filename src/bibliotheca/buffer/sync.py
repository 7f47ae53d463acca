"""Boundary types exchanged between buffers and host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what the editor should render."""

    text: str
    caret: int
    version: int
    attributes: dict[str, str] = field(default_factory=dict)


class OutOfRange(IndexError):
    """Raised when an offset or range falls outside ``[0, len(content)]``.

    This is a contract violation by the caller; the buffer is left untouched.
    """

    def __init__(
        self,
        message: str,
        *,
        length: int,
        offset: Optional[int] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.length = length
        self.offset = offset
        self.start = start
        self.end = end
