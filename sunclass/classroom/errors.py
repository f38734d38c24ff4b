"""
Error taxonomy for the classroom workflow layer.

Intent:
    Give the HTTP adapter one vocabulary for every failure it can observe and
    let use cases convert them into structured results at their boundary.

Design:
    - ValidationError: bad input detected locally, before any network call.
    - TransportError: the Classroom API could not be reached or timed out.
    - RejectedError (+ subclasses): the Classroom API answered non-success.
    - SessionExpiredError: the caller's credential is missing or no longer
      resolves to a user.
"""

from __future__ import annotations

from typing import Optional


class ClassroomError(Exception):
    """Base class for all workflow failures."""

    kind = "error"

    def __init__(self, message: str = "", *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(ClassroomError):
    """Locally detected bad input; never dispatched."""

    kind = "validation"


class TransportError(ClassroomError):
    """Network failure or timeout talking to the Classroom API."""

    kind = "transport"


class SessionExpiredError(ClassroomError):
    """Credential missing or rejected; caller must re-authenticate."""

    kind = "session_expired"


class RejectedError(ClassroomError):
    """Classroom API responded with a non-success status."""

    kind = "rejected"


class NotFoundError(RejectedError):
    kind = "not_found"


class ForbiddenError(RejectedError):
    kind = "forbidden"


class ConflictError(RejectedError):
    kind = "conflict"


def rejected_for_status(status_code: int, message: str) -> RejectedError:
    """Map a non-success HTTP status to the matching RejectedError subclass."""
    if status_code == 404:
        return NotFoundError(message, status_code=status_code)
    if status_code == 403:
        return ForbiddenError(message, status_code=status_code)
    if status_code == 409:
        return ConflictError(message, status_code=status_code)
    return RejectedError(message, status_code=status_code)


__all__ = [
    "ClassroomError",
    "ValidationError",
    "TransportError",
    "SessionExpiredError",
    "RejectedError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
    "rejected_for_status",
]
