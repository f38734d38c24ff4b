"""
Pytest configuration for sunclass tests.

Why: Force AnyIO to use the asyncio backend, pin a predictable environment,
and provide an in-memory Classroom API plus a factory for clients bound to
fake identities.
"""
from __future__ import annotations

from typing import AsyncIterator, Callable, List, Optional

import httpx
import pytest

from sunclass.classroom.api_client import ClassroomApiClient
from sunclass.classroom.config import ClassroomApiConfig
from sunclass.identity_access.domain import Identity
from sunclass.tests.utils.fake_classroom_api import BASE_URL, FakeClassroomApi
from sunclass.tests.utils.scenario import Classroom, setup_classroom


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _pin_environment(monkeypatch: pytest.MonkeyPatch):
    """Every test starts in dev against the fake API base URL."""
    monkeypatch.setenv("SUNCLASS_ENV", "dev")
    monkeypatch.setenv("CLASSROOM_API_BASE_URL", BASE_URL)
    monkeypatch.delenv("CLASSROOM_API_TIMEOUT_SECONDS", raising=False)
    yield


@pytest.fixture
def fake_api() -> FakeClassroomApi:
    return FakeClassroomApi()


@pytest.fixture
def api_config() -> ClassroomApiConfig:
    return ClassroomApiConfig(base_url=BASE_URL, timeout_seconds=5.0)


@pytest.fixture
async def client_for(
    anyio_backend, fake_api: FakeClassroomApi, api_config: ClassroomApiConfig
) -> AsyncIterator[Callable[[Optional[str]], ClassroomApiClient]]:
    """Build ClassroomApiClient instances for tokens issued by `fake_api`."""
    created: List[ClassroomApiClient] = []

    def _make(token: Optional[str]) -> ClassroomApiClient:
        client = ClassroomApiClient(Identity(auth_token=token), config=api_config, transport=fake_api.transport())
        created.append(client)
        return client

    yield _make
    for client in created:
        await client.aclose()


@pytest.fixture
async def classroom(anyio_backend, fake_api: FakeClassroomApi, client_for) -> Classroom:
    """Teacher + enrolled student + class "Algebra I" + assignment "HW1" (100 points)."""
    room = await setup_classroom(fake_api, client_for)
    fake_api.reset_calls()
    return room


@pytest.fixture
async def web_client(anyio_backend, fake_api: FakeClassroomApi) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client against the web adapter, wired to `fake_api` as its Classroom API."""
    from sunclass.web import main
    from sunclass.web.wiring import set_api_transport

    set_api_transport(fake_api.transport())
    try:
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=main.app), base_url="http://test") as client:
            yield client
    finally:
        set_api_transport(None)
