"""Account use cases: login, registration, logout and profile."""
from __future__ import annotations

from dataclasses import dataclass

from sunclass.classroom.models import AuthResult, UserProfile
from sunclass.classroom.ports import ActionResult, ClassroomApiProtocol, invalid, run_action, unauthenticated


@dataclass
class AccountService:
    api: ClassroomApiProtocol

    async def login(self, email: str | None, password: str | None) -> ActionResult[AuthResult]:
        if not (email or "").strip() or not password:
            return invalid("classroom.account.login", "Email and password are required.")
        result = await run_action(
            "classroom.account.login",
            self.api.login((email or "").strip(), password),
            failure_message="Invalid credentials",
        )
        # A 401 here means bad credentials, not an expired session.
        if result.session_expired:
            return ActionResult.fail("Invalid credentials", kind="rejected", status_code=result.status_code)
        return result

    async def register(self, name: str | None, email: str | None, password: str | None) -> ActionResult[AuthResult]:
        if not (name or "").strip():
            return invalid("classroom.account.register", "Name is required.")
        if not (email or "").strip() or not password:
            return invalid("classroom.account.register", "Email and password are required.")
        return await run_action(
            "classroom.account.register",
            self.api.register((name or "").strip(), (email or "").strip(), password),
            failure_message="An error occurred during registration.",
        )

    async def logout(self) -> ActionResult[None]:
        return await run_action("classroom.account.logout", self.api.logout())

    async def load_profile(self) -> ActionResult[UserProfile]:
        return await run_action("classroom.account.profile", self.api.get_profile())

    async def edit_profile(self, name: str | None, avatar_url: str | None = "") -> ActionResult[None]:
        event = "classroom.account.edit_profile"
        if not (name or "").strip():
            return invalid(event, "Name is required.")
        if not self.api.identity.authenticated:
            return unauthenticated(event)
        return await run_action(
            event,
            self.api.edit_profile((name or "").strip(), avatar_url or ""),
            failure_message="Failed to update profile",
        )
