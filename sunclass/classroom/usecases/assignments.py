"""Assignment catalog use cases."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from sunclass.classroom.models import AssignmentData
from sunclass.classroom.ports import ActionResult, ClassroomApiProtocol, invalid, run_action, unauthenticated


def coerce_number(raw: object) -> Optional[int | float]:
    """Coerce a form value to a finite number; None when it is not one.

    Integral values come back as int so the Classroom API receives `92`,
    not `92.0`.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if math.isnan(value) or math.isinf(value):
        return None
    return int(value) if value.is_integer() else value


@dataclass
class AssignmentCatalog:
    api: ClassroomApiProtocol

    async def create_assignment(
        self,
        class_id: int | str,
        *,
        title: str | None,
        description: str | None,
        due_date: str | None,
        points: object,
    ) -> ActionResult[Optional[int]]:
        """Create an assignment in a class and return its id when known.

        Behavior:
            - Title and due date are required; points must be a finite,
              non-negative number. Any of these failing short-circuits
              without a network call.
            - Teacher-only authorization is left to the Classroom API.
        """
        event = "classroom.assignments.create"
        if not (title or "").strip():
            return invalid(event, "Title is required.")
        if not (due_date or "").strip():
            return invalid(event, "Due date is required.")
        value = coerce_number(points)
        if value is None:
            return invalid(event, "Points must be a number.")
        if value < 0:
            return invalid(event, "Points must not be negative.")
        if not self.api.identity.authenticated:
            return unauthenticated(event)
        return await run_action(
            event,
            self.api.create_assignment(
                class_id,
                title=title or "",
                description=description or "",
                due_date=due_date or "",
                points=value,
            ),
            failure_message="Failed to create assignment",
        )

    async def load_assignment(self, class_id: int | str, assignment_id: int | str) -> ActionResult[AssignmentData]:
        return await run_action("classroom.assignments.load", self.api.get_assignment(class_id, assignment_id))
