"""Task service orchestrating validation, status guards and persistence."""

from __future__ import annotations

import logging
import uuid

from task_manager.core.errors import TaskLockedError, TaskNotFoundError
from task_manager.models.tasks import Task, TaskCreateRequest, TaskStatus, TaskUpdateRequest
from task_manager.persistence.store import TaskStore
from task_manager.services.task_validator import TaskValidator

logger = logging.getLogger(__name__)


class TaskService:
    """Service for managing task records.

    Validation and lookup failures are raised before anything is written, so a
    failed call never leaves a partial change behind.
    """

    def __init__(self, store: TaskStore, validator: TaskValidator | None = None) -> None:
        """Initialize task service.

        Args:
            store: Backing task store
            validator: Validator to use; defaults to one over ``store``
        """
        self._store = store
        self._validator = validator or TaskValidator(store)

    def retrieve_all(self) -> list[Task]:
        """List every task."""
        tasks = self._store.find_all()
        logger.debug("Retrieved %d tasks", len(tasks))
        return tasks

    def create(self, payload: TaskCreateRequest) -> Task:
        """Create a new task in the BACKLOG status.

        Raises:
            DuplicateTitleError: If the title is already taken
            DueDateTooSoonError: If the due date is too close
        """
        self._validator.check_title_validity(payload.title, None)
        self._validator.check_due_date_validity(payload.due_date)

        task = Task(
            title=payload.title,
            description=payload.description,
            status=TaskStatus.BACKLOG,
            due_date=payload.due_date,
        )
        created = self._store.save(task)
        logger.info("Created task %s ('%s')", created.id, created.title)
        return created

    def retrieve(self, raw_id: str | None) -> Task:
        """Get a task by id.

        Raises:
            InvalidIdentifierError: If the id is malformed
            TaskNotFoundError: If no task has this id
        """
        task_id = self._validator.check_id_validity(raw_id)
        return self._load(task_id)

    def update(self, payload: TaskUpdateRequest) -> Task:
        """Apply a partial update to an existing task.

        A new due date must lie in the future but is not re-checked against
        the minimum lead; only creation enforces that.

        Raises:
            InvalidIdentifierError: If the id is malformed
            DuplicateTitleError: If the new title belongs to another task
            DueDateInPastError: If the new due date is not in the future
            TaskNotFoundError: If no task has this id
            TaskLockedError: If the task is COMPLETE
        """
        task_id = self._validator.check_id_validity(payload.id)
        if payload.title is not None:
            self._validator.check_title_validity(payload.title, task_id)
        if payload.due_date is not None:
            self._validator.check_due_date_in_future(payload.due_date)

        task = self._load(task_id)
        if task.status == TaskStatus.COMPLETE:
            raise TaskLockedError(task_id, task.status, "can not be updated further")

        if payload.title is not None:
            task.title = payload.title
        if payload.description is not None:
            task.description = payload.description
        if payload.status is not None:
            task.status = payload.status
        if payload.due_date is not None:
            task.due_date = payload.due_date

        updated = self._store.save(task)
        logger.info("Updated task %s (status=%s)", updated.id, updated.status.value)
        return updated

    def delete(self, raw_id: str | None) -> None:
        """Delete a task permanently.

        Raises:
            InvalidIdentifierError: If the id is malformed
            TaskNotFoundError: If no task has this id
            TaskLockedError: If the task is ARCHIVED
        """
        task_id = self._validator.check_id_validity(raw_id)
        task = self._load(task_id)
        if task.status == TaskStatus.ARCHIVED:
            raise TaskLockedError(task_id, task.status, "can not be deleted")

        self._store.delete_by_id(task_id)
        logger.info("Deleted task %s", task_id)

    def _load(self, task_id: uuid.UUID) -> Task:
        task = self._store.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
