"""
Authentication routes: login, registration, logout.

Why:
    These are the only public entry points. On success the credential issued
    by the Classroom API is stored in the `auth_token` cookie; everything else
    in the app requires it.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from sunclass.classroom.api_client import ClassroomApiClient
from sunclass.classroom.ports import ActionResult
from sunclass.classroom.usecases import AccountService

from ..auth_utils import set_auth_cookie
from ..wiring import LOGIN_PATH, api_client, current_environment, redirect_to_login

auth_router = APIRouter(tags=["Auth"])
logger = logging.getLogger("sunclass.web.auth")


def _signed_in_response(result: ActionResult) -> JSONResponse | RedirectResponse:
    if not result.success or result.data is None:
        status = 400 if result.kind == "validation" else 401
        return JSONResponse(result.as_dict(), status_code=status)
    token = result.data.auth_token
    if not token:
        logger.warning("web.auth.token_missing user_id=%s", result.data.user_id)
        return JSONResponse({"success": False, "error": "No session issued."}, status_code=502)
    resp = RedirectResponse(url="/", status_code=303)
    set_auth_cookie(resp, token, environment=current_environment())
    return resp


@auth_router.get(LOGIN_PATH)
async def login_page():
    return JSONResponse({"fields": ["email", "password"]})


@auth_router.post(LOGIN_PATH)
async def login(request: Request, api: ClassroomApiClient = Depends(api_client)):
    form = await request.form()
    result = await AccountService(api).login(form.get("email"), form.get("password"))
    return _signed_in_response(result)


@auth_router.post("/register")
async def register(request: Request, api: ClassroomApiClient = Depends(api_client)):
    form = await request.form()
    result = await AccountService(api).register(form.get("name"), form.get("email"), form.get("password"))
    return _signed_in_response(result)


@auth_router.post("/logout")
async def logout(api: ClassroomApiClient = Depends(api_client)):
    """Always drop the local credential, even if the API call fails."""
    if api.identity.authenticated:
        result = await AccountService(api).logout()
        if not result.success:
            logger.info("web.auth.logout_remote_failed kind=%s", result.kind)
    return redirect_to_login(evict=True)
