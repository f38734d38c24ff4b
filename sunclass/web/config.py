"""
Configuration and startup security checks for the sunclass web adapter.

Why: The web adapter forwards the caller's credential to the Classroom API on
every request. A production deployment must not do that over plain HTTP or
with a broken configuration; development remains permissive.

Permissions: The caller needs no special privileges. The function reads
environment variables and raises `SystemExit` on fatal misconfiguration.
"""
from __future__ import annotations

import os

from sunclass.classroom.config import is_prod_like, load_api_config


def ensure_secure_config_on_startup() -> None:
    """Fail fast on invalid or insecure configuration.

    Checks:
    - Classroom API settings must parse (base URL shape, timeout range).
    - In prod-like envs the Classroom API base URL must use https.
    """
    try:
        cfg = load_api_config()
    except ValueError as exc:
        raise SystemExit(f"Refusing to start: {exc}")

    env = os.getenv("SUNCLASS_ENV", "dev")
    if not is_prod_like(env):
        return  # dev/test remain permissive

    if cfg.base_url.lower().startswith("http://"):
        raise SystemExit(
            "Refusing to start: CLASSROOM_API_BASE_URL must use https in production (got http)."
        )
