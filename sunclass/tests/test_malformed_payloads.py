"""
Success responses whose body has the wrong shape.

Requirements:
- A 2xx payload that cannot be read as the expected record is a transport
  failure, surfaced as a structured result and never as a raw exception.
- Role resolution over such a payload falls back to unauthenticated.
"""
from __future__ import annotations

import httpx
import pytest

from sunclass.classroom.api_client import ClassroomApiClient
from sunclass.classroom.config import ClassroomApiConfig
from sunclass.classroom.usecases import ClassRegistry, SubmissionWorkflow
from sunclass.identity_access.domain import UNAUTHENTICATED, Identity
from sunclass.identity_access.session import resolve_class_role

pytestmark = pytest.mark.anyio("asyncio")

MALFORMED = "Classroom API returned malformed payload"


def _client_returning(body) -> ClassroomApiClient:
    return ClassroomApiClient(
        Identity(auth_token="tok"),
        config=ClassroomApiConfig(base_url="http://api.test/api"),
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=body)),
    )


def _assert_malformed(result) -> None:
    assert result.success is False
    assert result.kind == "transport"
    assert result.error == MALFORMED


@pytest.mark.anyio
async def test_submission_detail_missing_fields():
    async with _client_returning({}) as api:
        _assert_malformed(await SubmissionWorkflow(api).get_submission(1, 2))


@pytest.mark.anyio
async def test_submission_list_that_is_an_object():
    async with _client_returning({"error": "x"}) as api:
        _assert_malformed(await SubmissionWorkflow(api).list_submissions(1))


@pytest.mark.anyio
async def test_class_with_null_id():
    async with _client_returning({"id": None}) as api:
        _assert_malformed(await ClassRegistry(api).load_class(1))


@pytest.mark.anyio
async def test_class_list_entries_without_id():
    async with _client_returning({"teaching_classes": [{"title": "Algebra"}]}) as api:
        _assert_malformed(await ClassRegistry(api).list_own_classes())


@pytest.mark.anyio
@pytest.mark.parametrize("body", [[], None, "teacher"])
async def test_role_payload_of_wrong_shape_is_unauthenticated(body):
    async with _client_returning(body) as api:
        assert await resolve_class_role(api, 1) == UNAUTHENTICATED
