"""Task record and request models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 2000


class TaskStatus(str, Enum):
    """Lifecycle status of a task."""

    BACKLOG = "BACKLOG"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"
    ARCHIVED = "ARCHIVED"

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``In Progress``."""
        return self.value.replace("_", " ").title()


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _reject_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("Task title must not be blank")
    return value


class TaskModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(TaskModel):
    """A persisted task record.

    ``id``, ``created_at`` and ``updated_at`` stay unset until the record is
    first saved to a store.
    """

    id: UUID | None = Field(default=None, description="Store-generated identifier")
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = Field(default=TaskStatus.BACKLOG)
    due_date: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class TaskCreateRequest(TaskModel):
    """Payload for creating a task."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    due_date: datetime = Field(description="Must be at least 12 hours in the future")

    @field_validator("title")
    @classmethod
    def check_title_not_blank(cls, value: str | None) -> str | None:
        return _reject_blank(value)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class TaskUpdateRequest(TaskModel):
    """Partial update payload.

    Only ``id`` is required. Fields left out (or sent as null) keep the
    stored value.
    """

    id: str = Field(description="Identifier of the task to update (UUID string)")
    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus | None = None
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def check_title_not_blank(cls, value: str | None) -> str | None:
        return _reject_blank(value)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None
