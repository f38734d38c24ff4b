"""
Assignment page: personalised assignment view, submission file actions,
teacher materials and file download proxies.
"""
from __future__ import annotations

import re
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import UploadFile as FormFile

from sunclass.classroom.api_client import UPLOAD_FIELD, ClassroomApiClient
from sunclass.classroom.models import DownloadedFile, UploadFile
from sunclass.classroom.usecases import AssignmentCatalog, MaterialWorkflow, SubmissionWorkflow

from ..wiring import action_response, api_client, load_failure_response

assignments_router = APIRouter(tags=["Assignments"])

_UNSAFE_FILENAME_CHARS = re.compile(r'[^\x20-\x7e]|["\\]')


async def _uploaded_files(request: Request) -> List[UploadFile]:
    """Collect the `fileupload` parts; browsers send an empty part when nothing was chosen."""
    form = await request.form()
    files: List[UploadFile] = []
    for part in form.getlist(UPLOAD_FIELD):
        if not isinstance(part, FormFile) or not part.filename:
            continue
        content = await part.read()
        files.append(
            UploadFile(
                file_name=part.filename,
                content=content,
                content_type=part.content_type or "application/octet-stream",
            )
        )
    return files


def content_disposition(file_name: str) -> str:
    """Attachment header safe for latin-1 header encoding.

    Non-ASCII names get an ASCII fallback plus the RFC 5987 `filename*` form.
    """
    fallback = _UNSAFE_FILENAME_CHARS.sub("_", file_name) or "download"
    if fallback == file_name:
        return f'attachment; filename="{file_name}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(file_name, safe='')}"


def _file_response(downloaded: DownloadedFile) -> Response:
    return Response(
        content=downloaded.content,
        media_type=downloaded.content_type,
        headers={
            "Content-Disposition": content_disposition(downloaded.file_name),
            "Cache-Control": "private, no-store",
        },
    )


@assignments_router.get("/class/{class_id}/assignment/{assignment_id}")
async def assignment_page(class_id: str, assignment_id: str, api: ClassroomApiClient = Depends(api_client)):
    result = await AssignmentCatalog(api).load_assignment(class_id, assignment_id)
    if not result.success:
        return load_failure_response(result)
    return JSONResponse(jsonable_encoder(result.data))


@assignments_router.post("/class/{class_id}/assignment/{assignment_id}/actions/uploadassignmentfiles")
async def upload_assignment_files(
    class_id: str, assignment_id: str, request: Request, api: ClassroomApiClient = Depends(api_client)
):
    files = await _uploaded_files(request)
    result = await SubmissionWorkflow(api).upload_files(class_id, assignment_id, files)
    return action_response(result)


@assignments_router.post("/class/{class_id}/assignment/{assignment_id}/actions/deleteassignmentfile")
async def delete_assignment_file(
    class_id: str, assignment_id: str, request: Request, api: ClassroomApiClient = Depends(api_client)
):
    form = await request.form()
    file_id = form.get("fileId")
    result = await SubmissionWorkflow(api).delete_file(
        class_id, assignment_id, file_id if isinstance(file_id, str) else None
    )
    return action_response(result)


@assignments_router.post("/class/{class_id}/assignment/{assignment_id}/actions/cancelsubmission")
async def cancel_submission(class_id: str, assignment_id: str, api: ClassroomApiClient = Depends(api_client)):
    result = await SubmissionWorkflow(api).cancel_submission(class_id, assignment_id)
    return action_response(result)


@assignments_router.post("/class/{class_id}/assignment/{assignment_id}/actions/addmaterials")
async def add_materials(
    class_id: str, assignment_id: str, request: Request, api: ClassroomApiClient = Depends(api_client)
):
    files = await _uploaded_files(request)
    result = await MaterialWorkflow(api).save_materials(class_id, assignment_id, files)
    return action_response(result)


@assignments_router.get("/class/{class_id}/download-submission-file/{file_id}")
async def download_submission_file(class_id: str, file_id: str, api: ClassroomApiClient = Depends(api_client)):
    result = await MaterialWorkflow(api).download_submission_file(class_id, file_id)
    if not result.success or result.data is None:
        return load_failure_response(result)
    return _file_response(result.data)


@assignments_router.get("/class/{class_id}/download-material-file/{file_id}")
async def download_material_file(class_id: str, file_id: str, api: ClassroomApiClient = Depends(api_client)):
    result = await MaterialWorkflow(api).download_material_file(class_id, file_id)
    if not result.success or result.data is None:
        return load_failure_response(result)
    return _file_response(result.data)
