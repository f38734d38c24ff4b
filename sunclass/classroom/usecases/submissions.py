"""Submission workflow use cases.

States per (assignment, student) as reported by the Classroom API:
UNSUBMITTED -> SUBMITTED -> GRADED, with SUBMITTED -> UNSUBMITTED via
cancellation (destructive: attached files are discarded) and
GRADED -> SUBMITTED via grade cancellation (see grading.py).

None of these operations infer the resulting state. Callers re-read the
assignment or submission after every mutation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from sunclass.classroom.models import SubmissionDetail, SubmissionListItem, UploadFile
from sunclass.classroom.ports import ActionResult, ClassroomApiProtocol, invalid, run_action, unauthenticated


@dataclass
class SubmissionWorkflow:
    api: ClassroomApiProtocol

    async def upload_files(
        self, class_id: int | str, assignment_id: int | str, files: Sequence[UploadFile]
    ) -> ActionResult[None]:
        """Attach files to the caller's submission for an assignment.

        Intent:
            Each call adds to the same submission; the first accepted upload
            moves it from UNSUBMITTED to SUBMITTED.

        Behavior:
            - An empty file list is rejected locally (nothing to attach).
            - Size/count limits belong to the Classroom API; its rejection is
              returned as "Failed to upload files" and never retried.
        """
        event = "classroom.submissions.upload"
        if not files:
            return invalid(event, "No files selected.")
        if not self.api.identity.authenticated:
            return unauthenticated(event)
        return await run_action(
            event,
            self.api.submit_files(class_id, assignment_id, list(files)),
            failure_message="Failed to upload files",
        )

    async def delete_file(self, class_id: int | str, assignment_id: int | str, file_id: int | str | None) -> ActionResult[None]:
        """Remove one file from the caller's submission.

        If that empties the file set the submission status is whatever the
        Classroom API reports on the next read.
        """
        event = "classroom.submissions.delete_file"
        if file_id is None or not str(file_id).strip():
            return invalid(event, "File id is required.")
        if not self.api.identity.authenticated:
            return unauthenticated(event)
        return await run_action(
            event,
            self.api.delete_submission_file(class_id, assignment_id, str(file_id).strip()),
            failure_message="Failed to delete file",
        )

    async def cancel_submission(self, class_id: int | str, assignment_id: int | str) -> ActionResult[None]:
        # Whether a graded submission may be cancelled is the API's policy;
        # a rejection is surfaced, never masked as success.
        event = "classroom.submissions.cancel"
        if not self.api.identity.authenticated:
            return unauthenticated(event)
        return await run_action(
            event,
            self.api.cancel_submission(class_id, assignment_id),
            failure_message="Failed to cancel submission",
        )

    async def list_submissions(self, class_id: int | str) -> ActionResult[List[SubmissionListItem]]:
        """Teacher view of all submissions in a class, in the API's order."""
        return await run_action("classroom.submissions.list", self.api.list_submissions(class_id))

    async def get_submission(self, class_id: int | str, submission_id: int | str) -> ActionResult[SubmissionDetail]:
        return await run_action("classroom.submissions.get", self.api.get_submission(class_id, submission_id))
