"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from task_manager.api import health, tasks
from task_manager.core.config import settings
from task_manager.core.logging_setup import configure_logging
from task_manager.persistence.store import get_task_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    configure_logging()
    logger.info("Starting %s (storage backend: %s)...", settings.PROJECT_NAME, settings.STORAGE_BACKEND)
    # Build the store up front so schema creation happens before the first request
    get_task_store()
    yield
    logger.info("Shutting down %s...", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Create, read, update and delete task records",
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.API_V1_PREFIX, tags=["health"])
app.include_router(tasks.router, prefix=f"{settings.API_V1_PREFIX}/tasks", tags=["tasks"])


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {"message": settings.PROJECT_NAME, "version": settings.VERSION}
