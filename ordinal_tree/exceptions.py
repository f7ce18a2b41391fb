"""Custom exception hierarchy for the ordinal tree engine.

Every failure an operation can report is one of the kinds in ``ErrorKind``.
Exceptions carry a technical message, a stable error code, structured
details and a user-facing message. The operation boundary in
``error_handler`` converts them into result models, so callers never see
these raised.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure taxonomy shared by every tree operation."""

    BAD_REQUEST = "BadRequest"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    NOT_A_DIRECTORY = "NotADirectory"
    NOT_A_FILE = "NotAFile"
    ACCESS_DENIED = "AccessDenied"
    BOUNDARY = "Boundary"
    SERVER_ERROR = "ServerError"

    @property
    def status_code(self) -> int:
        """Transport-level status a calling boundary should map this kind to."""
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_A_DIRECTORY: 400,
    ErrorKind.NOT_A_FILE: 400,
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.BOUNDARY: 400,
    ErrorKind.SERVER_ERROR: 500,
}


class TreeError(Exception):
    """Base exception for all tree engine errors."""

    kind: ErrorKind = ErrorKind.SERVER_ERROR

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "UNKNOWN_ERROR"
        self.details = details or {}
        self.user_message = user_message or message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_kind": self.kind.value,
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
        }


class InvalidRequestError(TreeError):
    """Missing or malformed request fields."""

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str, field: str | None = None, value: Any = None, **kwargs):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = value
        super().__init__(message=message, error_code="BAD_REQUEST", details=details, **kwargs)


class NodeNotFoundError(TreeError):
    """A root, parent folder, file or folder does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str, node_type: str = "File or folder", **kwargs):
        details = kwargs.pop("details", {})
        details.update({"path": path, "node_type": node_type})
        super().__init__(
            message=f"{node_type} not found: {path}",
            error_code="NOT_FOUND",
            details=details,
            user_message=f"{node_type} '{path}' does not exist",
            **kwargs,
        )


class NodeConflictError(TreeError):
    """The destination name or ordinal is already taken."""

    kind = ErrorKind.CONFLICT

    def __init__(self, path: str, message: str | None = None, **kwargs):
        details = kwargs.pop("details", {})
        details["path"] = path
        super().__init__(
            message=message or f"An entry with this name already exists: {path}",
            error_code="CONFLICT",
            details=details,
            **kwargs,
        )


class NotAFolderError(TreeError):
    """A folder was expected but the path is a file."""

    kind = ErrorKind.NOT_A_DIRECTORY

    def __init__(self, path: str, **kwargs):
        super().__init__(
            message=f"Path is not a directory: {path}",
            error_code="NOT_A_DIRECTORY",
            details={"path": path},
            **kwargs,
        )


class NotAFileError(TreeError):
    """A file was expected but the path is a folder."""

    kind = ErrorKind.NOT_A_FILE

    def __init__(self, path: str, **kwargs):
        super().__init__(
            message=f"Path is not a file: {path}",
            error_code="NOT_A_FILE",
            details={"path": path},
            **kwargs,
        )


class AccessDeniedError(TreeError):
    """A path resolves outside of the configured root."""

    kind = ErrorKind.ACCESS_DENIED

    def __init__(self, path: str, root: str, **kwargs):
        super().__init__(
            message=f"Access denied: {path} is outside of {root}",
            error_code="ACCESS_DENIED",
            details={"path": path, "root": root},
            user_message="Access denied",
            **kwargs,
        )


class BoundaryError(TreeError):
    """An item cannot move past the first or last position."""

    kind = ErrorKind.BOUNDARY

    def __init__(self, name: str, direction: str, **kwargs):
        edge = "top" if direction == "up" else "bottom"
        super().__init__(
            message=f"File is already at the {edge}: {name}",
            error_code="BOUNDARY",
            details={"name": name, "direction": direction},
            **kwargs,
        )


class FileSystemError(TreeError):
    """Unexpected I/O failure."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, operation: str, file_path: str, reason: str, **kwargs):
        super().__init__(
            message=f"File system operation '{operation}' failed for {file_path}: {reason}",
            error_code="FILE_SYSTEM_ERROR",
            details={"operation": operation, "file_path": file_path, "failure_reason": reason},
            user_message=f"File operation failed: {reason}",
            **kwargs,
        )


class RootNotConfiguredError(TreeError):
    """A symbolic root key has no usable directory behind it."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, root_key: str, **kwargs):
        details = kwargs.pop("details", {})
        details["root_key"] = root_key
        super().__init__(
            message=f"bad root: no document root configured for key '{root_key}'",
            error_code="BAD_ROOT",
            details=details,
            **kwargs,
        )
