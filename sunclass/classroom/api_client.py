"""
HTTP adapter for the Classroom API.

Design:
- Framework-agnostic, one instance per caller identity; the credential is
  attached as the `auth_token` cookie on every outbound call.
- Uses httpx.AsyncClient; every method issues exactly one request and
  suspends until it settles. No retries, no caching.
- Failures are raised as the `sunclass.classroom.errors` taxonomy; callers
  (use cases) convert them into structured results.

Security:
- Do not log credentials, request bodies or file contents.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar
from urllib.parse import unquote

import httpx

from sunclass.identity_access.domain import Identity

from .config import AUTH_COOKIE_NAME, ClassroomApiConfig, load_api_config
from .errors import SessionExpiredError, TransportError, rejected_for_status
from .models import (
    AssignmentData,
    AuthResult,
    ClassData,
    ClassList,
    ClassRole,
    DownloadedFile,
    SubmissionDetail,
    SubmissionListItem,
    UploadFile,
    UserProfile,
)

LOG = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
UPLOAD_FIELD = "fileupload"

T = TypeVar("T")

_DISPOSITION_EXT_RE = re.compile(r"filename\*\s*=\s*[\w-]+'[^']*'([^;]+)", re.IGNORECASE)
_DISPOSITION_RE = re.compile(r'filename\s*=\s*"?([^";]+)"?', re.IGNORECASE)


def _error_text(resp: httpx.Response) -> str:
    text = (resp.text or "").strip()
    if text:
        return text[:200]
    return resp.reason_phrase or f"HTTP {resp.status_code}"


def _disposition_filename(disposition: str) -> Optional[str]:
    """`filename*` (RFC 5987, percent-encoded UTF-8) wins over plain `filename`."""
    ext = _DISPOSITION_EXT_RE.search(disposition)
    if ext:
        return unquote(ext.group(1).strip().strip('"'), encoding="utf-8", errors="replace")
    m = _DISPOSITION_RE.search(disposition)
    return m.group(1).strip() if m else None


def _list_body(body: Any) -> List[Any]:
    if body is None:
        return []
    if not isinstance(body, list):
        raise TypeError(f"expected a list, got {type(body).__name__}")
    return body


def _multipart(files: Sequence[UploadFile]) -> List[tuple]:
    return [(UPLOAD_FIELD, (f.file_name, f.content, f.content_type)) for f in files]


class ClassroomApiClient:
    """Thin request builder over the Classroom API endpoint table."""

    def __init__(
        self,
        identity: Identity,
        *,
        config: Optional[ClassroomApiConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.identity = identity
        self.config = config or load_api_config()
        headers: Dict[str, str] = {}
        if identity.auth_token:
            headers["Cookie"] = f"{AUTH_COOKIE_NAME}={identity.auth_token}"
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=headers,
            timeout=self.config.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "ClassroomApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # --- transport -------------------------------------------------------

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        LOG.debug("classroom.api.request method=%s path=%s", method, path)
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            LOG.warning("classroom.api.timeout method=%s path=%s", method, path)
            raise TransportError("Classroom API timed out") from exc
        except httpx.HTTPError as exc:
            LOG.warning("classroom.api.unreachable method=%s path=%s reason=%s", method, path, exc.__class__.__name__)
            raise TransportError("Classroom API unreachable") from exc

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        resp = await self._send(method, path, **kwargs)
        if resp.status_code == 401:
            raise SessionExpiredError(_error_text(resp), status_code=401)
        if not resp.is_success:
            LOG.info("classroom.api.rejected method=%s path=%s status=%s", method, path, resp.status_code)
            raise rejected_for_status(resp.status_code, _error_text(resp))
        return resp

    async def _post_json(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        return await self._request("POST", path, json=payload, headers={"Content-Type": JSON_CONTENT_TYPE})

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError("Classroom API returned malformed JSON", status_code=resp.status_code) from exc

    @classmethod
    def _parsed(cls, resp: httpx.Response, parse: Callable[[Any], T]) -> T:
        """Parse a success body; a payload of the wrong shape is a TransportError."""
        body = cls._json(resp)
        try:
            return parse(body)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            LOG.warning("classroom.api.malformed_payload path=%s reason=%s", resp.request.url.path, exc.__class__.__name__)
            raise TransportError("Classroom API returned malformed payload", status_code=resp.status_code) from exc

    # --- account ---------------------------------------------------------

    async def login(self, email: str, password: str) -> AuthResult:
        resp = await self._post_json("/auth/login", {"email": email, "password": password})
        return self._auth_result(resp)

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        resp = await self._post_json("/auth/register", {"name": name, "email": email, "password": password})
        return self._auth_result(resp)

    def _auth_result(self, resp: httpx.Response) -> AuthResult:
        return self._parsed(
            resp,
            lambda body: AuthResult(
                user_id=int(body["user_id"]),
                email=str(body.get("email", "")),
                auth_token=resp.cookies.get(AUTH_COOKIE_NAME),
            ),
        )

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout", headers={"Content-Type": JSON_CONTENT_TYPE})

    async def get_user_status(self) -> int:
        """Return the raw status of the identity check; never raises on HTTP status."""
        resp = await self._send("GET", "/user")
        return resp.status_code

    async def get_profile(self) -> UserProfile:
        return self._parsed(await self._request("GET", "/user/profile"), UserProfile.from_json)

    async def edit_profile(self, name: str, avatar_url: str) -> None:
        await self._post_json("/user/profile/edit", {"name": name, "avatar_url": avatar_url})

    async def list_classes(self) -> ClassList:
        return self._parsed(await self._request("GET", "/user/classes"), ClassList.from_json)

    # --- classes ---------------------------------------------------------

    async def create_class(self, title: str, description: str) -> None:
        await self._post_json("/class/create", {"title": title, "description": description})

    async def join_class(self, join_code: str) -> None:
        await self._post_json("/class/join", {"join_code": join_code})

    async def get_class(self, class_id: int | str) -> ClassData:
        return self._parsed(await self._request("GET", f"/class/{class_id}"), ClassData.from_json)

    async def get_class_role(self, class_id: int | str) -> ClassRole:
        resp = await self._request("GET", f"/class/{class_id}/role")
        return self._parsed(resp, lambda body: ClassRole(is_teacher=body.get("is_teacher") is True))

    # --- assignments -----------------------------------------------------

    async def create_assignment(
        self,
        class_id: int | str,
        *,
        title: str,
        description: str,
        due_date: str,
        points: int | float,
    ) -> Optional[int]:
        resp = await self._post_json(
            f"/class/{class_id}/create-assignment",
            {"title": title, "description": description, "due_date": due_date, "points": points},
        )
        try:
            body = resp.json()
        except ValueError:
            return None
        if not isinstance(body, dict) or body.get("id") is None:
            return None
        try:
            return int(body["id"])
        except (TypeError, ValueError):
            LOG.warning("classroom.api.malformed_payload path=%s reason=assignment_id", resp.request.url.path)
            return None

    async def get_assignment(self, class_id: int | str, assignment_id: int | str) -> AssignmentData:
        resp = await self._request("GET", f"/class/{class_id}/assignment/{assignment_id}")
        return self._parsed(resp, AssignmentData.from_json)

    # --- submissions -----------------------------------------------------

    async def submit_files(self, class_id: int | str, assignment_id: int | str, files: Sequence[UploadFile]) -> None:
        await self._request("POST", f"/class/{class_id}/assignment/{assignment_id}/submit", files=_multipart(files))

    async def delete_submission_file(self, class_id: int | str, assignment_id: int | str, file_id: int | str) -> None:
        await self._request("DELETE", f"/class/{class_id}/assignment/{assignment_id}/delete-file/{file_id}")

    async def cancel_submission(self, class_id: int | str, assignment_id: int | str) -> None:
        await self._request("DELETE", f"/class/{class_id}/assignment/{assignment_id}/cancel-submission")

    async def list_submissions(self, class_id: int | str) -> List[SubmissionListItem]:
        resp = await self._request("GET", f"/class/{class_id}/submissions")
        return self._parsed(resp, lambda body: [SubmissionListItem.from_json(item) for item in _list_body(body)])

    async def get_submission(self, class_id: int | str, submission_id: int | str) -> SubmissionDetail:
        resp = await self._request("GET", f"/class/{class_id}/submissions/{submission_id}")
        return self._parsed(resp, SubmissionDetail.from_json)

    # --- grading ---------------------------------------------------------

    async def grade_submission(self, class_id: int | str, submission_id: int | str, grade: int | float) -> None:
        await self._post_json(f"/class/{class_id}/submissions/{submission_id}/grade", {"grade": grade})

    async def cancel_grade(self, class_id: int | str, submission_id: int | str) -> None:
        await self._request("PUT", f"/class/{class_id}/submissions/{submission_id}/cancel-grade")

    # --- materials -------------------------------------------------------

    async def add_materials(self, class_id: int | str, assignment_id: int | str, files: Sequence[UploadFile]) -> None:
        await self._request(
            "POST", f"/class/{class_id}/assignment/{assignment_id}/add-materials", files=_multipart(files)
        )

    async def download_submission_file(self, class_id: int | str, file_id: int | str) -> DownloadedFile:
        return self._download(await self._request("GET", f"/class/{class_id}/download-submission-file/{file_id}"), file_id)

    async def download_material_file(self, class_id: int | str, file_id: int | str) -> DownloadedFile:
        return self._download(await self._request("GET", f"/class/{class_id}/download-material-file/{file_id}"), file_id)

    @staticmethod
    def _download(resp: httpx.Response, file_id: int | str) -> DownloadedFile:
        disposition = resp.headers.get("content-disposition", "")
        return DownloadedFile(
            file_name=_disposition_filename(disposition) or f"file-{file_id}",
            content_type=resp.headers.get("content-type", "application/octet-stream"),
            content=resp.content,
        )


__all__ = ["ClassroomApiClient", "JSON_CONTENT_TYPE", "UPLOAD_FIELD"]
