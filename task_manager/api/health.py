"""Health check endpoints."""

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from task_manager.core.errors import StoreError
from task_manager.persistence.store import get_task_store

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint: the task store must answer a listing."""
    try:
        store = get_task_store()
        await run_in_threadpool(store.find_all)
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Task store is unavailable"
        ) from exc
    return {"status": "ready"}
