"""Task endpoints."""

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from task_manager.core.errors import (
    DueDateInPastError,
    DueDateTooSoonError,
    DuplicateTitleError,
    InvalidIdentifierError,
    StoreError,
    TaskLockedError,
    TaskNotFoundError,
)
from task_manager.models.tasks import Task, TaskCreateRequest, TaskUpdateRequest
from task_manager.persistence.store import get_task_store
from task_manager.services.task_service import TaskService

router = APIRouter()

_STORE_FAILURE_DETAIL = "Task store is unavailable"


def _get_task_service() -> TaskService:
    """Get task service over the configured store."""
    try:
        return TaskService(get_task_store())
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_STORE_FAILURE_DETAIL,
        ) from exc


@router.get("/", response_model=list[Task])
async def list_tasks() -> list[Task]:
    """List all tasks."""
    service = _get_task_service()
    try:
        return await run_in_threadpool(service.retrieve_all)
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_STORE_FAILURE_DETAIL
        ) from exc


@router.post("/", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreateRequest) -> Task:
    """Create a new task."""
    service = _get_task_service()
    try:
        return await run_in_threadpool(service.create, payload)
    except (DuplicateTitleError, DueDateTooSoonError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_STORE_FAILURE_DETAIL
        ) from exc


@router.put("/", response_model=Task)
async def update_task(payload: TaskUpdateRequest) -> Task:
    """Apply a partial update to a task identified by ``id`` in the body."""
    service = _get_task_service()
    try:
        return await run_in_threadpool(service.update, payload)
    except (InvalidIdentifierError, DuplicateTitleError, DueDateInPastError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except TaskNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except TaskLockedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_STORE_FAILURE_DETAIL
        ) from exc


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str) -> Task:
    """Get task details."""
    service = _get_task_service()
    try:
        return await run_in_threadpool(service.retrieve, task_id)
    except InvalidIdentifierError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except TaskNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_STORE_FAILURE_DETAIL
        ) from exc


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str) -> None:
    """Delete task permanently."""
    service = _get_task_service()
    try:
        await run_in_threadpool(service.delete, task_id)
    except InvalidIdentifierError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except TaskNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except TaskLockedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_STORE_FAILURE_DETAIL
        ) from exc
