"""Textual host adapter; ``app`` holds the runnable application."""

from .controller import (
    TextualEditorAdapter,
    TextualHostSurface,
    TextualUIHooks,
    location_to_offset,
    offset_to_location,
)

__all__ = [
    "TextualEditorAdapter",
    "TextualHostSurface",
    "TextualUIHooks",
    "location_to_offset",
    "offset_to_location",
]
