"""Result values for recoverable session outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class SessionStatus(str, Enum):
    OK = "ok"
    IO_FAILURE = "io_failure"
    NO_SELECTION = "no_selection"


@dataclass(frozen=True, slots=True)
class IoFailure:
    """A read or write against the persistence collaborator that failed."""

    path: Path
    operation: str
    reason: str

    def describe(self) -> str:
        return f"Could not {self.operation} {self.path.name}: {self.reason}"


@dataclass(frozen=True, slots=True)
class SessionResult:
    status: SessionStatus
    path: Optional[Path] = None
    failure: Optional[IoFailure] = None

    @classmethod
    def success(cls, path: Path) -> "SessionResult":
        return cls(status=SessionStatus.OK, path=path)

    @classmethod
    def no_selection(cls) -> "SessionResult":
        return cls(status=SessionStatus.NO_SELECTION)

    @classmethod
    def io_failure(cls, failure: IoFailure) -> "SessionResult":
        return cls(status=SessionStatus.IO_FAILURE, path=failure.path, failure=failure)

    @property
    def ok(self) -> bool:
        return self.status is SessionStatus.OK

    @property
    def message(self) -> str:
        if self.failure is not None:
            return self.failure.describe()
        if self.status is SessionStatus.NO_SELECTION:
            return "No file selected"
        return f"Saved {self.path.name}" if self.path else "ok"


__all__ = ["IoFailure", "SessionResult", "SessionStatus"]
