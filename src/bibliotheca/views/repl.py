"""REPL view state and the command table that routes into the editor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from bibliotheca.session import SaveCoordinator, SessionBus

from .registry import ViewRegistry


@dataclass(frozen=True, slots=True)
class ReplResult:
    status: str
    message: Optional[str] = None


class ReplConsole:
    """Line-oriented REPL front end.

    Lines starting with ``:`` are commands; everything else is recorded in
    the transcript for an attached interpreter to pick up.
    """

    PREFIX = ":"

    def __init__(
        self,
        registry: ViewRegistry,
        coordinator: SaveCoordinator,
        *,
        bus: Optional[SessionBus] = None,
    ) -> None:
        self.registry = registry
        self.coordinator = coordinator
        self.bus = bus or registry.session.bus
        self.history: List[str] = []
        self.transcript: List[str] = []

    def submit(self, line: str) -> ReplResult:
        text = line.strip()
        if not text:
            return ReplResult(status="empty")
        self.history.append(text)
        if not text.startswith(self.PREFIX):
            self.transcript.append(text)
            self.bus.emit("repl.input", text)
            return ReplResult(status="input", message=text)

        parts = text[len(self.PREFIX):].split(maxsplit=1)
        if not parts:
            return ReplResult(status="empty")
        command = parts[0]
        argument = parts[1] if len(parts) > 1 else ""
        handler = _COMMAND_HANDLERS.get(command)
        if handler is None:
            self.bus.emit("repl.error", command)
            return ReplResult(status="unknown_command", message=command)
        return handler(self, argument)


ReplHandler = Callable[[ReplConsole, str], ReplResult]


def _handle_new(console: ReplConsole, argument: str) -> ReplResult:
    del argument
    console.registry.new_document()
    return ReplResult(status="new", message=console.registry.session.display_name)


def _handle_open(console: ReplConsole, argument: str) -> ReplResult:
    if not argument:
        return ReplResult(status="missing_argument", message="open <path>")
    result = console.coordinator.open(Path(argument).expanduser())
    if not result.ok:
        return ReplResult(status=result.status.value, message=result.message)
    return ReplResult(status="open", message=str(result.path))


def _handle_echo(console: ReplConsole, argument: str) -> ReplResult:
    console.transcript.append(argument)
    return ReplResult(status="echo", message=argument)


def _handle_history(console: ReplConsole, argument: str) -> ReplResult:
    del argument
    return ReplResult(status="history", message="\n".join(console.history))


def _handle_quit(console: ReplConsole, argument: str) -> ReplResult:
    del argument
    console.bus.emit("repl.quit", None)
    return ReplResult(status="quit", message="quit")


_COMMAND_HANDLERS: Dict[str, ReplHandler] = {
    "new": _handle_new,
    "open": _handle_open,
    "edit": _handle_open,
    "e": _handle_open,
    "echo": _handle_echo,
    "history": _handle_history,
    "quit": _handle_quit,
    "q": _handle_quit,
}


__all__ = ["ReplConsole", "ReplResult"]
