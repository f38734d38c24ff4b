"""Workflow use cases; each returns an ActionResult and never raises."""

from .account import AccountService
from .assignments import AssignmentCatalog
from .classes import ClassRegistry
from .grading import GradingWorkflow
from .materials import MaterialWorkflow
from .submissions import SubmissionWorkflow

__all__ = [
    "AccountService",
    "AssignmentCatalog",
    "ClassRegistry",
    "GradingWorkflow",
    "MaterialWorkflow",
    "SubmissionWorkflow",
]
