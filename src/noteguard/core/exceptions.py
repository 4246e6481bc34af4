"""
Domain errors.

Every service failure is one of these, tagged with an explicit ErrorKind.
The HTTP layer maps kinds to status codes in exception_handlers.py.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Outcome categories surfaced by the core."""

    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    DECRYPTION_FAILED = "decryption_failed"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class NoteGuardError(Exception):
    """Base exception for all application errors."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def is_fatal(self) -> bool:
        return self.kind is ErrorKind.INTERNAL


class NotFoundError(NoteGuardError):
    """Absent, expired, or not visible to the caller."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Note not found"


class AccessDeniedError(NoteGuardError):
    """Authenticated but lacking the owner/admin capability."""

    kind = ErrorKind.ACCESS_DENIED
    default_message = "Access denied"


class DecryptionError(NoteGuardError):
    """Ciphertext cannot be read with the configured key."""

    kind = ErrorKind.DECRYPTION_FAILED
    default_message = "Stored content could not be decrypted"


class ValidationError(NoteGuardError):
    """Malformed input."""

    kind = ErrorKind.VALIDATION
    default_message = "Validation failed"


class AuthenticationError(NoteGuardError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Invalid credentials"


class ConflictError(NoteGuardError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource conflict"


class InternalError(NoteGuardError):
    """Storage unreachable or other unexpected failure."""

    kind = ErrorKind.INTERNAL
    default_message = "Internal error"
