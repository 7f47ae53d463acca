"""Editor session lifecycle: dirty tracking, saving, and close guarding."""

from .bus import SessionBus
from .close_guard import (
    CloseGuard,
    CloseGuardError,
    CloseStep,
    CloseVerdict,
    ConfirmationChoice,
    ConfirmationRequest,
    GuardState,
)
from .editor_session import EditorSession, SessionBusy
from .persistence import (
    FilePicker,
    FileStore,
    LocalFileStore,
    cancelled_picker,
    fixed_destination,
)
from .results import IoFailure, SessionResult, SessionStatus
from .save_coordinator import SaveCoordinator

__all__ = [
    "CloseGuard",
    "CloseGuardError",
    "CloseStep",
    "CloseVerdict",
    "ConfirmationChoice",
    "ConfirmationRequest",
    "EditorSession",
    "FilePicker",
    "FileStore",
    "GuardState",
    "IoFailure",
    "LocalFileStore",
    "SaveCoordinator",
    "SessionBus",
    "SessionBusy",
    "SessionResult",
    "SessionStatus",
    "cancelled_picker",
    "fixed_destination",
]
