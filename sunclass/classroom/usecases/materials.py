"""Teacher materials and file downloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sunclass.classroom.models import DownloadedFile, UploadFile
from sunclass.classroom.ports import ActionResult, ClassroomApiProtocol, invalid, run_action, unauthenticated


@dataclass
class MaterialWorkflow:
    """Reference files attached to an assignment, separate from submissions."""

    api: ClassroomApiProtocol

    async def save_materials(
        self, class_id: int | str, assignment_id: int | str, files: Sequence[UploadFile]
    ) -> ActionResult[None]:
        event = "classroom.materials.save"
        if not files:
            return invalid(event, "No files selected.")
        if not self.api.identity.authenticated:
            return unauthenticated(event)
        return await run_action(
            event,
            self.api.add_materials(class_id, assignment_id, list(files)),
            failure_message="Failed to save materials",
        )

    async def download_material_file(self, class_id: int | str, file_id: int | str) -> ActionResult[DownloadedFile]:
        return await run_action(
            "classroom.materials.download",
            self.api.download_material_file(class_id, file_id),
            failure_message="Failed to download file",
        )

    async def download_submission_file(self, class_id: int | str, file_id: int | str) -> ActionResult[DownloadedFile]:
        return await run_action(
            "classroom.submissions.download",
            self.api.download_submission_file(class_id, file_id),
            failure_message="Failed to download file",
        )
