"""Offset and range checks shared by buffer operations."""

from __future__ import annotations

from typing import Tuple

from .sync import OutOfRange


def ensure_offset(length: int, offset: int) -> int:
    if offset < 0 or offset > length:
        raise OutOfRange(
            f"Offset {offset} outside 0..{length}", length=length, offset=offset
        )
    return offset


def ensure_range(length: int, start: int, end: int) -> Tuple[int, int]:
    if not 0 <= start <= end <= length:
        raise OutOfRange(
            f"Range [{start}, {end}) outside 0..{length}",
            length=length,
            start=start,
            end=end,
        )
    return start, end
