"""Grading workflow use cases."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sunclass.classroom.ports import ActionResult, ClassroomApiProtocol, invalid, run_action, unauthenticated

from .assignments import coerce_number


@dataclass
class GradingWorkflow:
    api: ClassroomApiProtocol

    async def grade_submission(
        self, class_id: int | str, submission_id: int | str, grade: object
    ) -> Optional[ActionResult[None]]:
        """Set the grade of a submission in a single request.

        Behavior:
            - A missing or blank form value returns None: nothing is
              dispatched and nothing happened.
            - A non-numeric value is a validation failure; NaN is never sent.
            - The range [0, assignment points] and the existence of a
              submission are enforced by the Classroom API.
        """
        event = "classroom.grading.grade"
        if grade is None or (isinstance(grade, str) and not grade.strip()):
            return None
        value = coerce_number(grade)
        if value is None:
            return invalid(event, "Grade must be a number.")
        if not self.api.identity.authenticated:
            return unauthenticated(event)
        return await run_action(
            event,
            self.api.grade_submission(class_id, submission_id, value),
            failure_message="Failed to save the grade",
        )

    async def cancel_grade(self, class_id: int | str, submission_id: int | str) -> ActionResult[None]:
        """Clear grade, grading time and grader; submitted files stay."""
        event = "classroom.grading.cancel"
        if not self.api.identity.authenticated:
            return unauthenticated(event)
        return await run_action(
            event,
            self.api.cancel_grade(class_id, submission_id),
            failure_message="Failed to cancel the grade",
        )
