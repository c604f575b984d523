"""
focusmode — FocusMode study tracker client for Python.

Talks to the FocusMode REST API when logged in and keeps working from an
on-device store when not.
"""

from focusmode.app import FocusModeApp
from focusmode.auth import Auth
from focusmode.client import FocusModeClient
from focusmode.context import SessionContext
from focusmode.controller import (
    BookController,
    NoteController,
    Outcome,
    SessionController,
    Source,
    StatsController,
    TimerController,
)
from focusmode.errors import (
    AuthRequired,
    FocusModeError,
    InvalidTransition,
    LocalStorageFailure,
    NotFoundError,
    RemoteUnavailable,
    ValidationError,
)
from focusmode.store import LocalStore

__version__ = "0.1.0"
__all__ = [
    "FocusModeApp",
    "FocusModeClient",
    "Auth",
    "SessionContext",
    "LocalStore",
    "Source",
    "Outcome",
    "SessionController",
    "NoteController",
    "BookController",
    "TimerController",
    "StatsController",
    "FocusModeError",
    "ValidationError",
    "InvalidTransition",
    "AuthRequired",
    "RemoteUnavailable",
    "NotFoundError",
    "LocalStorageFailure",
]
