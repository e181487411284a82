"""Stateless rule checks for task input."""

from __future__ import annotations

import math
import re
import uuid
from datetime import datetime

from task_manager.core.config import settings
from task_manager.core.errors import (
    DueDateInPastError,
    DueDateTooSoonError,
    DuplicateTitleError,
    InvalidIdentifierError,
)
from task_manager.models.tasks import ensure_utc
from task_manager.persistence.store import Clock, TaskStore, utc_now

# Canonical 8-4-4-4-12 form
_UUID_PATTERN = re.compile(r"[0-9a-fA-F]{8}-(?:[0-9a-fA-F]{4}-){3}[0-9a-fA-F]{12}")


class TaskValidator:
    """Validate task identifiers, titles and due dates.

    Holds no state beyond the store it reads for title lookups. Every check
    raises on the first violation and returns quietly otherwise.
    """

    def __init__(
        self,
        store: TaskStore,
        clock: Clock = utc_now,
        min_lead_hours: int | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._min_lead_hours = (
            settings.MIN_DUE_DATE_LEAD_HOURS if min_lead_hours is None else min_lead_hours
        )

    def check_id_validity(self, raw_id: str | None) -> uuid.UUID:
        """Parse ``raw_id`` as a UUID.

        Raises:
            InvalidIdentifierError: If the id is missing, blank or malformed
        """
        if raw_id is None or not raw_id.strip():
            raise InvalidIdentifierError("Task ID must not be empty")
        if not _UUID_PATTERN.fullmatch(raw_id):
            raise InvalidIdentifierError("Task ID must be a UUID")
        return uuid.UUID(raw_id)

    def check_title_validity(self, title: str, exclude_id: uuid.UUID | None = None) -> None:
        """Ensure no other task already uses ``title``.

        ``exclude_id`` is the id of the task being updated, so a task may keep
        its own title. Pass ``None`` when validating a new task.

        Raises:
            DuplicateTitleError: If another task has the same title
        """
        found = self._store.find_by_title(title)
        if found is None:
            return
        if exclude_id is None or found.id != exclude_id:
            raise DuplicateTitleError(title)

    def check_due_date_validity(self, due_date: datetime) -> None:
        """Ensure ``due_date`` lies at least the minimum lead in whole hours ahead.

        Raises:
            DueDateTooSoonError: If fewer whole hours remain than required
        """
        whole_hours = _whole_hours_until(due_date, self._clock())
        if whole_hours < self._min_lead_hours:
            raise DueDateTooSoonError(due_date, self._min_lead_hours)

    def check_due_date_in_future(self, due_date: datetime) -> None:
        """Ensure ``due_date`` lies strictly after the current time.

        Raises:
            DueDateInPastError: If the due date is now or in the past
        """
        if ensure_utc(due_date) <= self._clock():
            raise DueDateInPastError(due_date)


def _whole_hours_until(due_date: datetime, now: datetime) -> int:
    # Whole seconds first, then hours truncated toward zero
    seconds = math.floor((ensure_utc(due_date) - now).total_seconds())
    return int(seconds / 3600)
