"""Text buffer, fingerprints, and clipboard editing verbs."""

from .buffer import TextBuffer, Transaction
from .clipboard import (
    Clipboard,
    ClipboardBridge,
    MemoryClipboard,
    PasteResult,
    PasteStatus,
    SystemClipboard,
)
from .fingerprint import fingerprint
from .state import Selection
from .sync import BufferMirror, OutOfRange
from .validation import ensure_offset, ensure_range

__all__ = [
    "BufferMirror",
    "Clipboard",
    "ClipboardBridge",
    "MemoryClipboard",
    "OutOfRange",
    "PasteResult",
    "PasteStatus",
    "Selection",
    "SystemClipboard",
    "TextBuffer",
    "Transaction",
    "ensure_offset",
    "ensure_range",
    "fingerprint",
]
