"""Shared pytest fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from task_manager.persistence.db import build_engine, build_session_factory, init_db
from task_manager.persistence.store import InMemoryTaskStore, SqlTaskStore
from task_manager.services.task_service import TaskService
from task_manager.services.task_validator import TaskValidator

FIXED_NOW = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


class TickingClock:
    """Clock that advances by one second on every call."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore(clock=TickingClock())


@pytest.fixture
def sql_store() -> SqlTaskStore:
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    return SqlTaskStore(build_session_factory(engine), clock=TickingClock())


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest, memory_store: InMemoryTaskStore, sql_store: SqlTaskStore):
    """Every store implementation in turn."""
    return memory_store if request.param == "memory" else sql_store


@pytest.fixture
def validator(memory_store: InMemoryTaskStore) -> TaskValidator:
    return TaskValidator(memory_store, clock=lambda: FIXED_NOW, min_lead_hours=12)


@pytest.fixture
def service(memory_store: InMemoryTaskStore, validator: TaskValidator) -> TaskService:
    return TaskService(memory_store, validator)


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """Test client whose task routes use a fresh in-memory store."""
    from task_manager.api import tasks as tasks_api
    from task_manager.main import app

    api_service = TaskService(InMemoryTaskStore())
    monkeypatch.setattr(tasks_api, "_get_task_service", lambda: api_service)
    yield TestClient(app)
