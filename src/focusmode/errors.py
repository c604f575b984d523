"""
FocusMode error types.

RemoteUnavailable and AuthRequired degrade reads to the local store.
LocalStorageFailure is terminal for the current operation.
"""

from typing import Any, Optional


class FocusModeError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.status = status


class ValidationError(FocusModeError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None, status: Optional[int] = None):
        super().__init__("validation_error", message, details, status)


class InvalidTransition(ValidationError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move from {current!r} to {target!r}", {"from": current, "to": target})
        self.code = "invalid_transition"


class AuthRequired(FocusModeError):
    def __init__(self, message: str = "Access token required", status: Optional[int] = None):
        super().__init__("auth_required", message, status=status)


class RemoteUnavailable(FocusModeError):
    def __init__(self, message: str, status: Optional[int] = None, details: Optional[dict[str, Any]] = None):
        super().__init__("remote_unavailable", message, details, status)


class NotFoundError(FocusModeError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__("not_found", message, status=status)


class LocalStorageFailure(FocusModeError):
    def __init__(self, message: str):
        super().__init__("local_storage_failure", message)
