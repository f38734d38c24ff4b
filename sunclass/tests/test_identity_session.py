"""
Identity Context: session classification and per-class role resolution.

Security:
    An unresolvable session is expired, an unresolvable role is never teacher.
"""
from __future__ import annotations

import httpx
import pytest

from sunclass.classroom.api_client import ClassroomApiClient
from sunclass.classroom.config import ClassroomApiConfig
from sunclass.identity_access.domain import UNAUTHENTICATED, Identity
from sunclass.identity_access.session import SessionStatus, check_session, resolve_class_role

pytestmark = pytest.mark.anyio("asyncio")


def _mock_client(handler) -> ClassroomApiClient:
    return ClassroomApiClient(
        Identity(auth_token="tok"),
        config=ClassroomApiConfig(base_url="http://api.test/api"),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.anyio
async def test_missing_credential_is_missing_without_call(fake_api, client_for):
    assert await check_session(client_for(None)) is SessionStatus.MISSING
    assert fake_api.calls == []


@pytest.mark.anyio
async def test_valid_credential(fake_api, client_for):
    token = fake_api.add_user("Ada")

    assert await check_session(client_for(token)) is SessionStatus.VALID
    assert fake_api.calls == [("GET", "/api/user")]


@pytest.mark.anyio
async def test_unknown_token_is_expired(fake_api, client_for):
    assert await check_session(client_for("never-issued")) is SessionStatus.EXPIRED


@pytest.mark.anyio
async def test_deleted_user_is_expired(fake_api, client_for):
    token = fake_api.add_user("Ada")
    fake_api.forget_user(token)

    assert await check_session(client_for(token)) is SessionStatus.EXPIRED


@pytest.mark.anyio
@pytest.mark.parametrize("status, expected", [(500, SessionStatus.EXPIRED), (404, SessionStatus.EXPIRED), (200, SessionStatus.VALID)])
async def test_identity_check_status_mapping(status, expected):
    async with _mock_client(lambda request: httpx.Response(status)) as api:
        assert await check_session(api) is expected


@pytest.mark.anyio
async def test_unreachable_identity_check_is_expired():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _mock_client(handler) as api:
        assert await check_session(api) is SessionStatus.EXPIRED


@pytest.mark.anyio
async def test_roles_for_teacher_student_and_outsider(classroom, fake_api, client_for):
    teacher = await resolve_class_role(classroom.teacher, classroom.class_id)
    student = await resolve_class_role(classroom.student, classroom.class_id)
    outsider = await resolve_class_role(client_for(fake_api.add_user("Nobody")), classroom.class_id)

    assert teacher.can_teach is True
    assert student.authenticated is True and student.is_teacher is False
    assert outsider == UNAUTHENTICATED


@pytest.mark.anyio
async def test_role_without_credential_makes_no_call(fake_api, client_for):
    assert await resolve_class_role(client_for(None), 1) == UNAUTHENTICATED
    assert fake_api.calls == []


def test_identity_repr_hides_token():
    ident = Identity(auth_token="super-secret", user_id=3)

    assert "super-secret" not in repr(ident)
    assert Identity.anonymous().authenticated is False
