"""Two-view editing shell: a REPL view and a single-document editor."""

__all__ = [
    "adapters",
    "buffer",
    "context",
    "runtime",
    "session",
    "views",
]

__version__ = "0.1.0"
