"""
Classroom API configuration.

Intent:
    Read every environment variable that controls how the workflow layer
    reaches the Classroom API in one place, with explicit defaults and
    validation, so tests can exercise config without booting the web app.
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from urllib.parse import urlparse


DEFAULT_BASE_URL = "http://localhost:8081/api"
DEFAULT_TIMEOUT_SECONDS = 10.0
AUTH_COOKIE_NAME = "auth_token"


@dataclass(frozen=True)
class ClassroomApiConfig:
    base_url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    environment: str = "dev"

    @property
    def is_prod_like(self) -> bool:
        return is_prod_like(self.environment)


def is_prod_like(env: str) -> bool:
    return (env or "").lower() in {"prod", "production", "stage", "staging"}


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got: {raw!r}")
    if value <= 0 or value > 300:
        raise ValueError(f"{name} out of range (1..300), got: {value}")
    return value


def _validate_base_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("CLASSROOM_API_BASE_URL must be an absolute http:// or https:// URL")
    return url.rstrip("/")


def load_api_config() -> ClassroomApiConfig:
    """
    Parse and validate Classroom API settings from environment variables.

    Behavior:
        - `CLASSROOM_API_BASE_URL` (default http://localhost:8081/api).
        - `CLASSROOM_API_TIMEOUT_SECONDS` bounded to 1..300 (default 10).
        - `SUNCLASS_ENV` selects dev/prod/stage (default dev).
    """
    base_url = _validate_base_url((os.getenv("CLASSROOM_API_BASE_URL") or DEFAULT_BASE_URL).strip())
    timeout = _float_env("CLASSROOM_API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    env = (os.getenv("SUNCLASS_ENV") or "dev").strip().lower()
    return ClassroomApiConfig(base_url=base_url, timeout_seconds=timeout, environment=env)


__all__ = ["AUTH_COOKIE_NAME", "ClassroomApiConfig", "is_prod_like", "load_api_config"]
