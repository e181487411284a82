"""Error taxonomy raised by the task validator, service and stores.

The API layer translates each kind into an HTTP status:

- ``InvalidIdentifierError``, ``DuplicateTitleError``, ``DueDateTooSoonError``,
  ``DueDateInPastError``: 400
- ``TaskNotFoundError``: 404
- ``TaskLockedError``: 409
- ``StoreError``: 500
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from task_manager.models.tasks import TaskStatus


class TaskManagerError(Exception):
    """Base class for all task manager errors."""


class InvalidIdentifierError(TaskManagerError):
    """Raised when a task id is empty or not a UUID."""

    def __init__(self, message: str, field: str = "id") -> None:
        self.field = field
        super().__init__(message)


class DuplicateTitleError(TaskManagerError):
    """Raised when a title is already used by another task."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__("Task title must be unique")


class DueDateTooSoonError(TaskManagerError):
    """Raised when a due date is not far enough in the future."""

    def __init__(self, due_date: datetime, min_lead_hours: int) -> None:
        self.due_date = due_date
        self.min_lead_hours = min_lead_hours
        super().__init__(f"Task due date must be at least {min_lead_hours} hours in the future")


class DueDateInPastError(TaskManagerError):
    """Raised when an updated due date is not in the future."""

    def __init__(self, due_date: datetime) -> None:
        self.due_date = due_date
        super().__init__("Task due date must not be in the past or present")


class TaskNotFoundError(TaskManagerError):
    """Raised when no task exists for an id."""

    def __init__(self, task_id: UUID) -> None:
        self.task_id = task_id
        super().__init__(f"Task with ID: {task_id} could not be found")


class TaskLockedError(TaskManagerError):
    """Raised when a task's status forbids the requested operation."""

    def __init__(self, task_id: UUID, status: TaskStatus, action: str) -> None:
        self.task_id = task_id
        self.status = status
        super().__init__(f"Task with ID: {task_id} is marked as '{status.label}' and {action}")


class StoreError(TaskManagerError):
    """Raised when the underlying store fails unexpectedly."""
