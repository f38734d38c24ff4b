from __future__ import annotations

from sunclass.classroom.models import (
    AssignmentData,
    AssignmentFile,
    ClassUser,
    SubmissionDetail,
    SubmissionState,
    derive_state,
)


def test_derive_state_names_remote_flags():
    assert derive_state(is_submitted=False, is_graded=False) is SubmissionState.UNSUBMITTED
    assert derive_state(is_submitted=True, is_graded=False) is SubmissionState.SUBMITTED
    assert derive_state(is_submitted=True, is_graded=True) is SubmissionState.GRADED


def test_assignment_parses_nulls_and_missing_lists():
    data = AssignmentData.from_json(
        {
            "id": 4,
            "class_id": 1,
            "title": "HW1",
            "description": None,
            "due_date": "2025-01-10T23:59",
            "points": 100,
            "materials": None,
            "is_submitted": True,
            "grade": None,
        }
    )

    assert data.description == ""
    assert data.materials == []
    assert data.submission_files == []
    assert data.is_graded is False


def test_file_without_type_is_unknown():
    f = AssignmentFile.from_json({"id": None, "file_name": "x.bin"})

    assert f.id is None
    assert f.content_type == "unknown"
    assert f.file_type == "unknown"


def test_creator_counts_as_teacher():
    assert ClassUser(name="A", role="creator").is_teacher is True
    assert ClassUser(name="B", role="student").is_teacher is False


def test_submission_detail_without_submitted_at_is_not_submitted():
    detail = SubmissionDetail.from_json({"id": 1, "assignment_id": 2, "submitted_at": None, "grader_name": None})

    assert detail.is_submitted is False
    assert detail.grader_name is None
    assert detail.files == []
