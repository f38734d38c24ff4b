"""
Per-request wiring between the web adapter and the Classroom API client.

Why:
    Route handlers should not know how the outbound client is built. Tests
    swap the transport (an in-memory Classroom API via ASGITransport) with
    `set_api_transport` instead of monkeypatching handlers.
"""
from __future__ import annotations

import os
from typing import AsyncIterator, Optional

import httpx
from fastapi import Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from sunclass.classroom.api_client import ClassroomApiClient
from sunclass.classroom.config import load_api_config
from sunclass.classroom.ports import ActionResult

from .auth_utils import evict_auth_cookie, identity_from_request

LOGIN_PATH = "/login"

API_TRANSPORT: Optional[httpx.AsyncBaseTransport] = None


def set_api_transport(transport: Optional[httpx.AsyncBaseTransport]) -> None:
    """Allow tests or startup code to route Classroom API calls elsewhere."""
    global API_TRANSPORT
    API_TRANSPORT = transport


def current_environment() -> str:
    return os.getenv("SUNCLASS_ENV", "dev").lower()


def client_for(request: Request) -> ClassroomApiClient:
    return ClassroomApiClient(identity_from_request(request), config=load_api_config(), transport=API_TRANSPORT)


async def api_client(request: Request) -> AsyncIterator[ClassroomApiClient]:
    """FastAPI dependency yielding a client bound to the caller's credential."""
    async with client_for(request) as api:
        yield api


def redirect_to_login(*, evict: bool) -> RedirectResponse:
    resp = RedirectResponse(url=LOGIN_PATH, status_code=303)
    if evict:
        evict_auth_cookie(resp, environment=current_environment())
    return resp


def _failure_status(result: ActionResult) -> int:
    if result.kind == "validation":
        return 400
    if result.status_code and 400 <= result.status_code < 600:
        return result.status_code
    return 502


def action_response(result: ActionResult) -> Response:
    """Render a form action outcome as `{success, error}` JSON.

    Session expiry is not a form error: the credential is evicted and the
    caller is sent to the login surface.
    """
    if result.session_expired:
        return redirect_to_login(evict=True)
    if result.success:
        return JSONResponse(result.as_dict())
    return JSONResponse(result.as_dict(), status_code=_failure_status(result))


def load_failure_response(result: ActionResult) -> Response:
    if result.session_expired:
        return redirect_to_login(evict=True)
    return JSONResponse({"error": result.error}, status_code=_failure_status(result))
