"""View registry, host surface protocol, and the REPL front end."""

from .registry import (
    HostSurface,
    ViewAlreadyRegistered,
    ViewHandle,
    ViewId,
    ViewRegistry,
)
from .repl import ReplConsole, ReplResult

__all__ = [
    "HostSurface",
    "ReplConsole",
    "ReplResult",
    "ViewAlreadyRegistered",
    "ViewHandle",
    "ViewId",
    "ViewRegistry",
]
