"""
Session boundary and per-class role resolution (Identity Context).

Why:
    Every workflow entry point needs to know whether the caller is signed in,
    and class pages need to know whether the caller teaches the class. Both
    are lookups against the Classroom API; neither mutates anything.

Security:
    A lookup that fails never widens access: an unresolvable session is
    treated as expired, and an unresolvable role is never "teacher".
"""
from __future__ import annotations

import logging
from enum import Enum

from sunclass.classroom.errors import ClassroomError
from sunclass.classroom.ports import ClassroomApiProtocol

from .domain import UNAUTHENTICATED, IdentityContext

logger = logging.getLogger(__name__)

# Identity check answers that mean "this credential no longer maps to a user".
_EXPIRED_STATUSES = frozenset({401, 404, 500})


class SessionStatus(str, Enum):
    VALID = "valid"
    MISSING = "missing"
    EXPIRED = "expired"


async def check_session(api: ClassroomApiProtocol) -> SessionStatus:
    """Classify the caller's credential.

    Behavior:
        - No credential → MISSING (redirect to login, nothing to evict).
        - `GET /user` answering 401/404/500, or failing in transport →
          EXPIRED (caller must discard the credential and redirect).
        - Otherwise VALID.
    """
    if not api.identity.authenticated:
        return SessionStatus.MISSING
    try:
        status = await api.get_user_status()
    except ClassroomError as exc:
        logger.warning("identity.session.check_failed kind=%s", exc.kind)
        return SessionStatus.EXPIRED
    if status in _EXPIRED_STATUSES:
        logger.info("identity.session.expired status=%s", status)
        return SessionStatus.EXPIRED
    return SessionStatus.VALID


async def resolve_class_role(api: ClassroomApiProtocol, class_id: int | str) -> IdentityContext:
    """Resolve `{is_teacher}` for the caller in a class; unauthenticated on any failure."""
    if not api.identity.authenticated:
        return UNAUTHENTICATED
    try:
        role = await api.get_class_role(class_id)
    except ClassroomError as exc:
        logger.info("identity.role.unresolved class_id=%s kind=%s", class_id, exc.kind)
        return UNAUTHENTICATED
    return IdentityContext(authenticated=True, is_teacher=role.is_teacher)


__all__ = ["SessionStatus", "check_session", "resolve_class_role"]
