"""
Materials and downloads.

Materials are teacher reference files; they must never show up among a
student's submission files, and downloads go through the Classroom API's
access checks.
"""
from __future__ import annotations

import pytest

from sunclass.classroom.usecases import AssignmentCatalog, ClassRegistry, MaterialWorkflow, SubmissionWorkflow
from sunclass.tests.utils.scenario import pdf

pytestmark = pytest.mark.anyio("asyncio")


@pytest.mark.anyio
async def test_materials_are_listed_apart_from_submission_files(classroom):
    saved = await MaterialWorkflow(classroom.teacher).save_materials(
        classroom.class_id, classroom.assignment_id, [pdf("worksheet.pdf", b"sheet")]
    )
    assert saved.success is True

    view = (await AssignmentCatalog(classroom.student).load_assignment(classroom.class_id, classroom.assignment_id)).data
    assert [m.file_name for m in view.materials] == ["worksheet.pdf"]
    assert view.materials[0].file_type == "material"
    assert view.submission_files == []
    assert view.is_submitted is False


@pytest.mark.anyio
async def test_student_cannot_save_materials(classroom):
    result = await MaterialWorkflow(classroom.student).save_materials(
        classroom.class_id, classroom.assignment_id, [pdf()]
    )

    assert result.success is False
    assert result.kind == "forbidden"
    assert result.error == "Failed to save materials"


@pytest.mark.anyio
async def test_empty_material_list_is_rejected_locally(classroom, fake_api):
    result = await MaterialWorkflow(classroom.teacher).save_materials(classroom.class_id, classroom.assignment_id, [])

    assert result.success is False
    assert result.kind == "validation"
    assert fake_api.calls == []


@pytest.mark.anyio
async def test_download_material_returns_content_and_name(classroom):
    await MaterialWorkflow(classroom.teacher).save_materials(
        classroom.class_id, classroom.assignment_id, [pdf("worksheet.pdf", b"sheet-bytes")]
    )
    view = (await AssignmentCatalog(classroom.student).load_assignment(classroom.class_id, classroom.assignment_id)).data

    got = await MaterialWorkflow(classroom.student).download_material_file(classroom.class_id, view.materials[0].id)

    assert got.success is True
    assert got.data.file_name == "worksheet.pdf"
    assert got.data.content == b"sheet-bytes"
    assert got.data.content_type.startswith("application/pdf")


@pytest.mark.anyio
async def test_teacher_downloads_student_submission(classroom):
    await SubmissionWorkflow(classroom.student).upload_files(
        classroom.class_id, classroom.assignment_id, [pdf("answer.pdf", b"42")]
    )
    listed = await SubmissionWorkflow(classroom.teacher).list_submissions(classroom.class_id)
    detail = await SubmissionWorkflow(classroom.teacher).get_submission(classroom.class_id, listed.data[0].id)

    got = await MaterialWorkflow(classroom.teacher).download_submission_file(classroom.class_id, detail.data.files[0].id)

    assert got.success is True
    assert got.data.content == b"42"
    assert got.data.file_name == "answer.pdf"


@pytest.mark.anyio
async def test_student_cannot_download_another_students_file(classroom, fake_api, client_for):
    other_token = fake_api.add_user("Other")
    other = client_for(other_token)
    joined = await ClassRegistry(other).join_class(classroom.join_code)
    assert joined.success is True
    await SubmissionWorkflow(other).upload_files(classroom.class_id, classroom.assignment_id, [pdf("theirs.pdf")])
    theirs = (await AssignmentCatalog(other).load_assignment(classroom.class_id, classroom.assignment_id)).data

    got = await MaterialWorkflow(classroom.student).download_submission_file(
        classroom.class_id, theirs.submission_files[0].id
    )

    assert got.success is False
    assert got.kind == "forbidden"
    assert got.data is None
