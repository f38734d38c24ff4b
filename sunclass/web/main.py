"sunclass web adapter"
from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sunclass.identity_access.session import SessionStatus, check_session

from . import config as _cfg
from .routes.assignments import assignments_router
from .routes.auth import auth_router
from .routes.classes import classes_router
from .routes.submissions import submissions_router
from .wiring import LOGIN_PATH, client_for, redirect_to_login


def _should_load_dotenv() -> bool:
    """Decide if we should load a local .env file.

    - Never load under pytest to avoid contaminating test env.
    - Allow explicit opt-out via SUNCLASS_ENABLE_DOTENV (default true
      outside pytest).
    """
    if "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST"):
        return False
    flag = (os.getenv("SUNCLASS_ENABLE_DOTENV", "true") or "").strip().lower()
    return flag in ("1", "true", "yes")


if _should_load_dotenv():
    load_dotenv()

# Minimal production safety checks (fail-fast on insecure config)
_cfg.ensure_secure_config_on_startup()

logger = logging.getLogger("sunclass.web")

app = FastAPI(title="sunclass", description="Classroom workflows over the Classroom API", version="0.1.0")

app.include_router(auth_router)
app.include_router(classes_router)
app.include_router(assignments_router)
app.include_router(submissions_router)


# --- Auth Middleware ------------------------------------------------------------

def _is_public_path(path: str) -> bool:
    return path in (LOGIN_PATH, "/register", "/logout", "/health", "/favicon.ico")


@app.middleware("http")
async def auth_enforcement(request: Request, call_next):
    """Every non-public path requires a credential that still resolves to a user.

    - No credential → 303 to the login surface.
    - Credential the Classroom API no longer recognises → evict + 303.
    """
    if _is_public_path(request.url.path):
        return await call_next(request)

    async with client_for(request) as api:
        status = await check_session(api)

    if status is SessionStatus.MISSING:
        return redirect_to_login(evict=False)
    if status is SessionStatus.EXPIRED:
        logger.info("web.auth.session_evicted path=%s", request.url.path)
        return redirect_to_login(evict=True)
    return await call_next(request)


@app.get("/health")
async def health():
    return JSONResponse({"status": "healthy"}, headers={"Cache-Control": "no-store"})
