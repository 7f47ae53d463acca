"""Synchronous event bus connecting the session layer to views and hosts."""

from __future__ import annotations

from typing import Callable, Dict


class SessionBus:
    """Fan-out of named events to subscribers, in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)

    def clear(self) -> None:
        self._subscribers.clear()
