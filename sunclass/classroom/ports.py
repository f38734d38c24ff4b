"""
Ports for the classroom workflows: the structured result type, the API
protocol use cases depend on, and the boundary helper that turns the error
taxonomy into results.

Intent:
    Use cases never let an exception escape to the calling surface. Every
    failure path ends in an explicit `ActionResult(success=False, ...)` and a
    log line; nothing is only logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Dict, Generic, List, Optional, Protocol, Sequence, TypeVar

from sunclass.identity_access.domain import Identity

from .errors import ClassroomError, SessionExpiredError, TransportError, ValidationError
from .models import (
    AssignmentData,
    AuthResult,
    ClassData,
    ClassList,
    ClassRole,
    DownloadedFile,
    SubmissionDetail,
    SubmissionListItem,
    UploadFile,
    UserProfile,
)

T = TypeVar("T")

LOG = logging.getLogger(__name__)


# ----------------------------- Result type ----------------------------------


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Outcome of a workflow operation.

    Parameters:
        success: Whether the Classroom API accepted the operation.
        data: Parsed payload for read operations (or a created id).
        error: Human-readable message for failures; None on success.
        kind: Error kind from the taxonomy (`validation`, `rejected`, ...).
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    kind: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, *, kind: str = "error", status_code: Optional[int] = None) -> "ActionResult[T]":
        return cls(success=False, error=error, kind=kind, status_code=status_code)

    @property
    def session_expired(self) -> bool:
        return self.kind == SessionExpiredError.kind

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success}
        if self.error is not None:
            out["error"] = self.error
        return out


# ----------------------------- Protocol -------------------------------------


class ClassroomApiProtocol(Protocol):
    """The Classroom API as seen by use cases (see ClassroomApiClient)."""

    identity: Identity

    async def login(self, email: str, password: str) -> AuthResult: ...

    async def register(self, name: str, email: str, password: str) -> AuthResult: ...

    async def logout(self) -> None: ...

    async def get_user_status(self) -> int: ...

    async def get_profile(self) -> UserProfile: ...

    async def edit_profile(self, name: str, avatar_url: str) -> None: ...

    async def list_classes(self) -> ClassList: ...

    async def create_class(self, title: str, description: str) -> None: ...

    async def join_class(self, join_code: str) -> None: ...

    async def get_class(self, class_id: int | str) -> ClassData: ...

    async def get_class_role(self, class_id: int | str) -> ClassRole: ...

    async def create_assignment(
        self, class_id: int | str, *, title: str, description: str, due_date: str, points: int | float
    ) -> Optional[int]: ...

    async def get_assignment(self, class_id: int | str, assignment_id: int | str) -> AssignmentData: ...

    async def submit_files(self, class_id: int | str, assignment_id: int | str, files: Sequence[UploadFile]) -> None: ...

    async def delete_submission_file(self, class_id: int | str, assignment_id: int | str, file_id: int | str) -> None: ...

    async def cancel_submission(self, class_id: int | str, assignment_id: int | str) -> None: ...

    async def list_submissions(self, class_id: int | str) -> List[SubmissionListItem]: ...

    async def get_submission(self, class_id: int | str, submission_id: int | str) -> SubmissionDetail: ...

    async def grade_submission(self, class_id: int | str, submission_id: int | str, grade: int | float) -> None: ...

    async def cancel_grade(self, class_id: int | str, submission_id: int | str) -> None: ...

    async def add_materials(self, class_id: int | str, assignment_id: int | str, files: Sequence[UploadFile]) -> None: ...

    async def download_submission_file(self, class_id: int | str, file_id: int | str) -> DownloadedFile: ...

    async def download_material_file(self, class_id: int | str, file_id: int | str) -> DownloadedFile: ...


# ----------------------------- Boundary -------------------------------------


async def run_action(
    event: str,
    call: Awaitable[T],
    *,
    failure_message: Optional[str] = None,
) -> ActionResult[T]:
    """Await one Classroom API call and convert its outcome into a result.

    Behavior:
        - Success wraps the call's return value in `ActionResult.ok`.
        - Session expiry keeps its own kind so the web layer can evict the
          credential instead of showing a form error.
        - Rejections and transport failures use `failure_message` when given
          (the user-facing message of the action), else the error text.
    """
    try:
        data = await call
    except SessionExpiredError as exc:
        LOG.info("%s.session_expired", event)
        return ActionResult.fail(exc.message or "Session expired.", kind=exc.kind, status_code=exc.status_code)
    except TransportError as exc:
        LOG.warning("%s.transport_failed reason=%s", event, exc.message)
        return ActionResult.fail(failure_message or exc.message, kind=exc.kind)
    except ClassroomError as exc:
        LOG.warning("%s.failed kind=%s status=%s", event, exc.kind, exc.status_code)
        return ActionResult.fail(failure_message or exc.message, kind=exc.kind, status_code=exc.status_code)
    return ActionResult.ok(data)


def invalid(event: str, message: str) -> ActionResult[Any]:
    LOG.info("%s.invalid reason=%s", event, message)
    return ActionResult.fail(message, kind=ValidationError.kind)


def unauthenticated(event: str) -> ActionResult[Any]:
    """Mutating calls never dispatch for callers without a credential."""
    LOG.info("%s.denied reason=unauthenticated", event)
    return ActionResult.fail("Not signed in.", kind=SessionExpiredError.kind)


__all__ = [
    "ActionResult",
    "ClassroomApiProtocol",
    "run_action",
    "invalid",
    "unauthenticated",
]
