"""
Class pages: own class list, class detail, profile.

Why:
    Page loads re-read authoritative state from the Classroom API on every
    request; form actions return the structured `{success, error}` result.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from sunclass.classroom.api_client import ClassroomApiClient
from sunclass.classroom.usecases import AccountService, AssignmentCatalog, ClassRegistry
from sunclass.identity_access.session import resolve_class_role

from ..wiring import action_response, api_client, load_failure_response

classes_router = APIRouter(tags=["Classes"])


@classes_router.get("/")
async def home(api: ClassroomApiClient = Depends(api_client)):
    result = await ClassRegistry(api).list_own_classes()
    if not result.success:
        return load_failure_response(result)
    return JSONResponse(jsonable_encoder(result.data))


@classes_router.post("/actions/createclass")
async def create_class(request: Request, api: ClassroomApiClient = Depends(api_client)):
    form = await request.form()
    result = await ClassRegistry(api).create_class(form.get("title"), form.get("description"))
    return action_response(result)


@classes_router.post("/actions/joinclass")
async def join_class(request: Request, api: ClassroomApiClient = Depends(api_client)):
    form = await request.form()
    result = await ClassRegistry(api).join_class(form.get("joinCode"))
    return action_response(result)


@classes_router.get("/class/{class_id}")
async def class_page(class_id: str, api: ClassroomApiClient = Depends(api_client)):
    """Class detail plus the caller's role; role lookup failure means not a teacher."""
    result = await ClassRegistry(api).load_class(class_id)
    if not result.success:
        return load_failure_response(result)
    ctx = await resolve_class_role(api, class_id)
    return JSONResponse({"class": jsonable_encoder(result.data), "is_teacher": ctx.can_teach})


@classes_router.post("/class/{class_id}/actions/createassignment")
async def create_assignment(class_id: str, request: Request, api: ClassroomApiClient = Depends(api_client)):
    form = await request.form()
    result = await AssignmentCatalog(api).create_assignment(
        class_id,
        title=form.get("title"),
        description=form.get("description"),
        due_date=form.get("due_date"),
        points=form.get("max_points"),
    )
    return action_response(result)


@classes_router.get("/profile")
async def profile_page(api: ClassroomApiClient = Depends(api_client)):
    result = await AccountService(api).load_profile()
    if not result.success:
        return load_failure_response(result)
    return JSONResponse({"user": jsonable_encoder(result.data)})


@classes_router.post("/profile/actions/edit_profile")
async def edit_profile(request: Request, api: ClassroomApiClient = Depends(api_client)):
    form = await request.form()
    result = await AccountService(api).edit_profile(form.get("name"), form.get("avatar_url") or "")
    return action_response(result)
