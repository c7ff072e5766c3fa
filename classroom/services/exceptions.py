"""Exceptions raised by the repository layer.

Every failure a repository surfaces is one of these kinds, so callers can
classify it without inspecting raw boundary responses.
"""

from typing import Optional


class ClassroomError(Exception):
    """Base exception for all data-access errors."""
    pass


class InvalidArgumentError(ClassroomError):
    """A value failed local coercion before any boundary call was made."""
    pass


class NotFoundError(ClassroomError):
    """The boundary reported no matching record."""
    pass


class ValidationFailedError(ClassroomError):
    """The boundary rejected a write with per-field errors."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class WriteFailedError(ClassroomError):
    """The boundary rejected a write without field-level detail."""
    pass


class BoundaryUnavailableError(ClassroomError):
    """The boundary call itself could not complete."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
