"""Confirmation flow that gates closing the editor on unsaved changes.

The guard is a small state machine driven by two events:

``request_close()`` -- the host wants to close or hide the editor view
``choose(choice)`` -- the user answered the pending confirmation

Each call returns a ``CloseStep`` telling the host whether to close, to
(re)present the confirmation, or to keep the view open. ``run`` drives
the same machine synchronously for hosts with a blocking prompt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from bibliotheca.runtime import telemetry

from .editor_session import EditorSession
from .persistence import FilePicker
from .results import IoFailure, SessionResult
from .save_coordinator import SaveCoordinator


class ConfirmationChoice(str, Enum):
    SAVE = "save"
    SAVE_AS = "save_as"
    DISCARD = "discard"
    CANCEL = "cancel"


class GuardState(str, Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"


class CloseVerdict(str, Enum):
    ALLOW = "allow"
    CONFIRM = "confirm"
    CANCELLED = "cancelled"


class CloseGuardError(RuntimeError):
    """Raised when an event arrives that the current state cannot accept."""


@dataclass(frozen=True, slots=True)
class ConfirmationRequest:
    """What the host shows when a dirty document is about to close."""

    document: str
    attempt: int = 1
    failure: Optional[IoFailure] = None
    choices: tuple[ConfirmationChoice, ...] = tuple(ConfirmationChoice)

    @property
    def prompt(self) -> str:
        text = f"Save changes to {self.document} before closing?"
        if self.failure is not None:
            text = f"{self.failure.describe()}\n{text}"
        return text


@dataclass(frozen=True, slots=True)
class CloseStep:
    verdict: CloseVerdict
    request: Optional[ConfirmationRequest] = None
    result: Optional[SessionResult] = None

    @property
    def allow_close(self) -> bool:
        return self.verdict is CloseVerdict.ALLOW


Confirm = Callable[[ConfirmationRequest], ConfirmationChoice]


class CloseGuard:
    def __init__(self, session: EditorSession, coordinator: SaveCoordinator) -> None:
        self.session = session
        self.coordinator = coordinator
        self.state = GuardState.IDLE
        self.pending: Optional[ConfirmationRequest] = None

    def request_close(self) -> CloseStep:
        if self.state is GuardState.CONFIRMING:
            raise CloseGuardError("A close confirmation is already pending")
        self.session.ensure_idle("close")
        if not self.session.is_dirty():
            return self._resolve(CloseVerdict.ALLOW, "clean")
        return self._present(ConfirmationRequest(document=self.session.display_name))

    def choose(
        self, choice: ConfirmationChoice, *, picker: Optional[FilePicker] = None
    ) -> CloseStep:
        if self.state is not GuardState.CONFIRMING or self.pending is None:
            raise CloseGuardError("No close confirmation is pending")
        choice = ConfirmationChoice(choice)

        if choice is ConfirmationChoice.CANCEL:
            return self._resolve(CloseVerdict.CANCELLED, choice.value)
        if choice is ConfirmationChoice.DISCARD:
            return self._resolve(CloseVerdict.ALLOW, choice.value)

        if choice is ConfirmationChoice.SAVE:
            result = self.coordinator.save(picker)
        else:
            result = self.coordinator.save_as(picker)
        if result.ok:
            return self._resolve(CloseVerdict.ALLOW, choice.value, result)

        # failed or abandoned save: the document is still dirty, ask again
        retry = ConfirmationRequest(
            document=self.session.display_name,
            attempt=self.pending.attempt + 1,
            failure=result.failure,
        )
        return self._present(retry, result)

    def run(
        self, confirm: Confirm, *, picker: Optional[FilePicker] = None
    ) -> CloseStep:
        """Drive the flow to a terminal verdict with a blocking ``confirm``."""

        step = self.request_close()
        while step.verdict is CloseVerdict.CONFIRM and step.request is not None:
            step = self.choose(confirm(step.request), picker=picker)
        return step

    def _present(
        self, request: ConfirmationRequest, result: Optional[SessionResult] = None
    ) -> CloseStep:
        self.state = GuardState.CONFIRMING
        self.pending = request
        telemetry.record_event(
            "close.prompt",
            data={"document": request.document, "attempt": request.attempt},
        )
        return CloseStep(CloseVerdict.CONFIRM, request=request, result=result)

    def _resolve(
        self,
        verdict: CloseVerdict,
        reason: str,
        result: Optional[SessionResult] = None,
    ) -> CloseStep:
        self.state = GuardState.IDLE
        self.pending = None
        telemetry.record_event(
            "close.resolved", data={"verdict": verdict.value, "reason": reason}
        )
        return CloseStep(verdict, result=result)


__all__ = [
    "CloseGuard",
    "CloseGuardError",
    "CloseStep",
    "CloseVerdict",
    "ConfirmationChoice",
    "ConfirmationRequest",
    "GuardState",
]
