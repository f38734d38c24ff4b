"""
Read models returned by the Classroom API.

Every view is re-read from the collaborator after a mutation, so these types
are plain snapshots: parsed from JSON, never updated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional

from sunclass.identity_access.domain import TEACHING_ROLES


def _opt_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class AssignmentFile:
    """A file attached either to a submission or to an assignment's materials."""

    id: Optional[int]
    file_name: str
    content_type: str
    file_type: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "AssignmentFile":
        return cls(
            id=_opt_int(data.get("id")),
            file_name=str(data.get("file_name", "")),
            content_type=str(data.get("content_type") or "unknown"),
            file_type=str(data.get("file_type") or "unknown"),
        )


@dataclass(frozen=True)
class ClassUser:
    name: str
    role: str

    @property
    def is_teacher(self) -> bool:
        return self.role in TEACHING_ROLES


@dataclass(frozen=True)
class AssignmentInfo:
    id: int
    title: str
    due_date: str


@dataclass(frozen=True)
class ClassData:
    id: int
    title: str
    description: str
    teacher: str
    join_code: str
    assignments: List[AssignmentInfo] = field(default_factory=list)
    users: List[ClassUser] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ClassData":
        return cls(
            id=int(data["id"]),
            title=str(data.get("title", "")),
            description=str(data.get("description") or ""),
            teacher=str(data.get("teacher", "")),
            join_code=str(data.get("join_code", "")),
            assignments=[
                AssignmentInfo(id=int(a["id"]), title=str(a.get("title", "")), due_date=str(a.get("due_date", "")))
                for a in data.get("assignments") or []
            ],
            users=[ClassUser(name=str(u.get("name", "")), role=str(u.get("role", ""))) for u in data.get("users") or []],
        )


@dataclass(frozen=True)
class ClassSummary:
    id: int
    title: str
    teacher: str
    upcoming_assignment: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ClassSummary":
        return cls(
            id=int(data["id"]),
            title=str(data.get("title", "")),
            teacher=str(data.get("teacher", "")),
            upcoming_assignment=_opt_str(data.get("upcoming_assignment")),
        )


@dataclass(frozen=True)
class ClassList:
    enrolled_classes: List[ClassSummary] = field(default_factory=list)
    teaching_classes: List[ClassSummary] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ClassList":
        return cls(
            enrolled_classes=[ClassSummary.from_json(c) for c in data.get("enrolled_classes") or []],
            teaching_classes=[ClassSummary.from_json(c) for c in data.get("teaching_classes") or []],
        )


@dataclass(frozen=True)
class AssignmentData:
    """Assignment view personalised to the caller (own submission files and grade)."""

    id: int
    class_id: int
    title: str
    class_title: str
    description: str
    due_date: str
    points: int
    materials: List[AssignmentFile] = field(default_factory=list)
    submission_files: List[AssignmentFile] = field(default_factory=list)
    is_submitted: bool = False
    grade: Optional[int] = None

    @property
    def is_graded(self) -> bool:
        return self.grade is not None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "AssignmentData":
        return cls(
            id=int(data["id"]),
            class_id=int(data["class_id"]),
            title=str(data.get("title", "")),
            class_title=str(data.get("class_title", "")),
            description=str(data.get("description") or ""),
            due_date=str(data.get("due_date", "")),
            points=int(data.get("points") or 0),
            materials=[AssignmentFile.from_json(f) for f in data.get("materials") or []],
            submission_files=[AssignmentFile.from_json(f) for f in data.get("submission_files") or []],
            is_submitted=bool(data.get("is_submitted", False)),
            grade=_opt_int(data.get("grade")),
        )


@dataclass(frozen=True)
class SubmissionListItem:
    id: int
    assignment_id: int
    assignment_title: str
    student_name: str
    submitted_at: Optional[str]
    is_graded: bool
    grade: Optional[int]

    @property
    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "SubmissionListItem":
        return cls(
            id=int(data["id"]),
            assignment_id=int(data["assignment_id"]),
            assignment_title=str(data.get("assignment_title", "")),
            student_name=str(data.get("student_name", "")),
            submitted_at=_opt_str(data.get("submitted_at")),
            is_graded=bool(data.get("is_graded", False)),
            grade=_opt_int(data.get("grade")),
        )


@dataclass(frozen=True)
class SubmissionDetail:
    """Teacher detail view of one submission."""

    id: int
    assignment_id: int
    assignment_title: str
    assignment_points: int
    student_name: str
    submitted_at: Optional[str]
    is_graded: bool
    grade: Optional[int]
    graded_at: Optional[str]
    grader_name: Optional[str]
    files: List[AssignmentFile] = field(default_factory=list)

    @property
    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "SubmissionDetail":
        return cls(
            id=int(data["id"]),
            assignment_id=int(data["assignment_id"]),
            assignment_title=str(data.get("assignment_title", "")),
            assignment_points=int(data.get("assignment_points") or 0),
            student_name=str(data.get("student_name", "")),
            submitted_at=_opt_str(data.get("submitted_at")),
            is_graded=bool(data.get("is_graded", False)),
            grade=_opt_int(data.get("grade")),
            graded_at=_opt_str(data.get("graded_at")),
            grader_name=_opt_str(data.get("grader_name")),
            files=[AssignmentFile.from_json(f) for f in data.get("files") or []],
        )


@dataclass(frozen=True)
class UserProfile:
    id: int
    name: str
    email: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "UserProfile":
        return cls(id=int(data["id"]), name=str(data.get("name", "")), email=str(data.get("email", "")))


@dataclass(frozen=True)
class AuthResult:
    """Outcome of login/register: the user plus the credential to attach from now on."""

    user_id: int
    email: str
    auth_token: Optional[str] = None


@dataclass(frozen=True)
class ClassRole:
    is_teacher: bool


@dataclass(frozen=True)
class UploadFile:
    """One outbound multipart part."""

    file_name: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class DownloadedFile:
    file_name: str
    content_type: str
    content: bytes


class SubmissionState(str, Enum):
    UNSUBMITTED = "unsubmitted"
    SUBMITTED = "submitted"
    GRADED = "graded"


def derive_state(*, is_submitted: bool, is_graded: bool) -> SubmissionState:
    """Name the state for flags reported by the Classroom API.

    Only maps remote flags; it never predicts the effect of a mutation.
    """
    if is_graded:
        return SubmissionState.GRADED
    if is_submitted:
        return SubmissionState.SUBMITTED
    return SubmissionState.UNSUBMITTED


__all__ = [
    "AssignmentFile",
    "ClassUser",
    "AssignmentInfo",
    "ClassData",
    "ClassSummary",
    "ClassList",
    "AssignmentData",
    "SubmissionListItem",
    "SubmissionDetail",
    "UserProfile",
    "AuthResult",
    "ClassRole",
    "UploadFile",
    "DownloadedFile",
    "SubmissionState",
    "derive_state",
]
