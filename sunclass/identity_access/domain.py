"""
Identity domain constants and the explicit caller identity.

Why:
- Centralize class role names so the web layer and workflows agree.
- Carry "who is calling" as a value passed to every workflow call instead of
  process-wide state, so tests can use fake identities deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Member roles the Classroom API reports that may teach a class.
TEACHING_ROLES = frozenset({"creator", "teacher"})


@dataclass(frozen=True)
class Identity:
    """The caller's session credential as seen by the session transport.

    Parameters:
        auth_token: Opaque credential forwarded as the `auth_token` cookie.
        user_id / email: Optional hints learned at login; never trusted for
            authorization (the Classroom API decides).
    """

    auth_token: Optional[str] = None
    user_id: Optional[int] = None
    email: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return bool(self.auth_token)

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    def __repr__(self) -> str:
        # Never leak the credential into logs or tracebacks.
        return f"Identity(authenticated={self.authenticated}, user_id={self.user_id!r})"


@dataclass(frozen=True)
class IdentityContext:
    """Per-class role resolution result used to gate actions."""

    authenticated: bool
    is_teacher: bool = False

    @property
    def can_teach(self) -> bool:
        return self.authenticated and self.is_teacher


UNAUTHENTICATED = IdentityContext(authenticated=False, is_teacher=False)


__all__ = ["TEACHING_ROLES", "Identity", "IdentityContext", "UNAUTHENTICATED"]
