"""Task stores: the persistence seam used by the validator and service."""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from functools import lru_cache
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from task_manager.core.config import settings
from task_manager.core.errors import StoreError
from task_manager.models.tasks import Task
from task_manager.persistence.db import SessionLocal, get_session, init_db
from task_manager.persistence.models import TaskRecord

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore(Protocol):
    """Keyed store of task records."""

    def find_by_id(self, task_id: uuid.UUID) -> Task | None: ...

    def find_by_title(self, title: str) -> Task | None: ...

    def save(self, task: Task) -> Task:
        """Insert ``task`` if new, else update it.

        Assigns ``id`` and ``created_at`` on first insert and refreshes
        ``updated_at`` on every save.
        """
        ...

    def delete_by_id(self, task_id: uuid.UUID) -> None: ...

    def find_all(self) -> list[Task]: ...


class InMemoryTaskStore:
    """Process-local task store backed by a dict (insertion ordered)."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._tasks: dict[uuid.UUID, Task] = {}
        self._lock = threading.Lock()

    def find_by_id(self, task_id: uuid.UUID) -> Task | None:
        with self._lock:
            task = self._tasks.get(task_id)
            return task.model_copy(deep=True) if task else None

    def find_by_title(self, title: str) -> Task | None:
        with self._lock:
            for task in self._tasks.values():
                if task.title == title:
                    return task.model_copy(deep=True)
        return None

    def save(self, task: Task) -> Task:
        now = self._clock()
        with self._lock:
            existing = self._tasks.get(task.id) if task.id is not None else None
            stored = task.model_copy(
                update={
                    "id": task.id or uuid.uuid4(),
                    "created_at": existing.created_at if existing else now,
                    "updated_at": now,
                },
                deep=True,
            )
            self._tasks[stored.id] = stored
            return stored.model_copy(deep=True)

    def delete_by_id(self, task_id: uuid.UUID) -> None:
        with self._lock:
            self._tasks.pop(task_id, None)

    def find_all(self) -> list[Task]:
        with self._lock:
            return [task.model_copy(deep=True) for task in self._tasks.values()]


class SqlTaskStore:
    """Task store over the ``tasks`` table via SQLAlchemy.

    Each call runs in its own session. Driver and ORM failures surface as
    ``StoreError``.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._session_factory = session_factory or SessionLocal
        self._clock = clock

    def find_by_id(self, task_id: uuid.UUID) -> Task | None:
        try:
            with get_session(self._session_factory) as session:
                record = session.get(TaskRecord, task_id)
                return _to_task(record) if record else None
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to load task {task_id}") from exc

    def find_by_title(self, title: str) -> Task | None:
        try:
            with get_session(self._session_factory) as session:
                stmt = select(TaskRecord).where(TaskRecord.title == title).limit(1)
                record = session.execute(stmt).scalars().first()
                return _to_task(record) if record else None
        except SQLAlchemyError as exc:
            raise StoreError("Failed to look up task by title") from exc

    def save(self, task: Task) -> Task:
        now = self._clock()
        try:
            with get_session(self._session_factory) as session:
                record = session.get(TaskRecord, task.id) if task.id is not None else None
                if record is None:
                    record = TaskRecord(id=task.id or uuid.uuid4(), created_at=now)
                    session.add(record)
                record.title = task.title
                record.description = task.description
                record.status = task.status
                record.due_date = task.due_date
                record.updated_at = now
                session.flush()
                return _to_task(record)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to save task '{task.title}'") from exc

    def delete_by_id(self, task_id: uuid.UUID) -> None:
        try:
            with get_session(self._session_factory) as session:
                record = session.get(TaskRecord, task_id)
                if record is not None:
                    session.delete(record)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to delete task {task_id}") from exc

    def find_all(self) -> list[Task]:
        try:
            with get_session(self._session_factory) as session:
                stmt = select(TaskRecord).order_by(TaskRecord.created_at)
                return [_to_task(record) for record in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            raise StoreError("Failed to list tasks") from exc


def _to_task(record: TaskRecord) -> Task:
    # SQLite hands back naive datetimes; Task normalizes them to UTC
    return Task(
        id=record.id,
        title=record.title,
        description=record.description,
        status=record.status,
        due_date=record.due_date,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@lru_cache(maxsize=1)
def get_task_store() -> TaskStore:
    """Return the process-wide store selected by ``STORAGE_BACKEND``."""
    if settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory task store")
        return InMemoryTaskStore()

    logger.info("Using SQL task store at %s", settings.DATABASE_URL)
    try:
        init_db()
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to initialize database at {settings.DATABASE_URL}") from exc
    return SqlTaskStore()
