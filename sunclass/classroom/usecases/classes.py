"""Class registry use cases: create, join, load and list classes."""
from __future__ import annotations

from dataclasses import dataclass

from sunclass.classroom.models import ClassData, ClassList
from sunclass.classroom.ports import ActionResult, ClassroomApiProtocol, invalid, run_action, unauthenticated


@dataclass
class ClassRegistry:
    """Class creation/joining independent of web adapters.

    The client performs no dedup; uniqueness of membership and join codes is
    the Classroom API's concern.
    """

    api: ClassroomApiProtocol

    async def create_class(self, title: str | None, description: str | None = "") -> ActionResult[None]:
        if not (title or "").strip():
            return invalid("classroom.classes.create", "Title is required.")
        if not self.api.identity.authenticated:
            return unauthenticated("classroom.classes.create")
        return await run_action(
            "classroom.classes.create",
            self.api.create_class(title or "", description or ""),
            failure_message="Failed to create class",
        )

    async def join_class(self, join_code: str | None) -> ActionResult[None]:
        code = (join_code or "").strip()
        if not code:
            return invalid("classroom.classes.join", "joinCode is required.")
        if not self.api.identity.authenticated:
            return unauthenticated("classroom.classes.join")
        # Rejections (unknown code, already a member) keep the API's message.
        return await run_action("classroom.classes.join", self.api.join_class(code))

    async def load_class(self, class_id: int | str) -> ActionResult[ClassData]:
        return await run_action("classroom.classes.load", self.api.get_class(class_id))

    async def list_own_classes(self) -> ActionResult[ClassList]:
        return await run_action("classroom.classes.list", self.api.list_classes())
