"""Caret and selection value types consumed by buffer operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Selection:
    """Half-open ``[start, end)`` range supplied by the host on each call.

    The buffer never stores a selection; hosts own it and pass it in.
    """

    start: int
    end: int

    @classmethod
    def caret(cls, offset: int) -> "Selection":
        return cls(offset, offset)

    @classmethod
    def between(cls, anchor: int, head: int) -> "Selection":
        """Build a selection from an anchor/head pair in either order."""

        return cls(min(anchor, head), max(anchor, head))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return max(0, self.end - self.start)
