"""Teacher submission pages: list, detail, grading actions."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from sunclass.classroom.api_client import ClassroomApiClient
from sunclass.classroom.usecases import GradingWorkflow, SubmissionWorkflow

from ..wiring import action_response, api_client, load_failure_response

submissions_router = APIRouter(tags=["Submissions"])


@submissions_router.get("/class/{class_id}/submissions")
async def submissions_page(class_id: str, api: ClassroomApiClient = Depends(api_client)):
    # Order is the Classroom API's; never re-sorted here.
    result = await SubmissionWorkflow(api).list_submissions(class_id)
    if not result.success:
        return load_failure_response(result)
    return JSONResponse({"submissions": jsonable_encoder(result.data), "class_id": class_id})


@submissions_router.get("/class/{class_id}/submissions/{submission_id}")
async def submission_page(class_id: str, submission_id: str, api: ClassroomApiClient = Depends(api_client)):
    result = await SubmissionWorkflow(api).get_submission(class_id, submission_id)
    if not result.success:
        return load_failure_response(result)
    return JSONResponse({"submission_data": jsonable_encoder(result.data), "class_id": class_id})


@submissions_router.post("/class/{class_id}/submissions/{submission_id}/actions/savegrade")
async def save_grade(class_id: str, submission_id: str, request: Request, api: ClassroomApiClient = Depends(api_client)):
    form = await request.form()
    result = await GradingWorkflow(api).grade_submission(class_id, submission_id, form.get("grade"))
    if result is None:
        return Response(status_code=204)
    return action_response(result)


@submissions_router.post("/class/{class_id}/submissions/{submission_id}/actions/cancelgrade")
async def cancel_grade(class_id: str, submission_id: str, api: ClassroomApiClient = Depends(api_client)):
    result = await GradingWorkflow(api).cancel_grade(class_id, submission_id)
    return action_response(result)
