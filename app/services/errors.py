"""
Error taxonomy raised by the user directory.

Every error carries a ``public_message`` that is safe to hand to callers and
an optional ``detail`` meant for server logs only. The HTTP layer picks a
status code from ``kind``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


class UserDirectoryError(Exception):
    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message = "Unexpected server error"

    def __init__(self, public_message: str | None = None, detail: str | None = None):
        self.public_message = public_message or self.default_message
        self.detail = detail
        super().__init__(detail or self.public_message)


class ValidationError(UserDirectoryError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid request."


class ConflictError(UserDirectoryError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists."


class NotFoundError(UserDirectoryError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found."


class UnexpectedStoreError(UserDirectoryError):
    kind = ErrorKind.UNEXPECTED
