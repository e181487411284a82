"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
    )

    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Task Manager API"
    VERSION: str = "0.1.0"
    DEBUG: bool = Field(default=True, description="Debug mode (defaults to True for development)")

    # CORS
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description=(
            "Allowed CORS origins. "
            "Override in production via environment variables, "
            "e.g. CORS_ORIGINS='[\"https://tasks.example.com\"]'"
        ),
    )

    # Storage
    STORAGE_BACKEND: Literal["sql", "memory"] = Field(
        default="sql",
        description="Task store implementation: 'sql' (SQLAlchemy) or 'memory' (process-local)",
    )
    DATABASE_URL: str = Field(
        default="sqlite:///./tasks.db",
        description="Database connection URL used by the 'sql' storage backend",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    # Task rules
    MIN_DUE_DATE_LEAD_HOURS: int = Field(
        default=12,
        ge=0,
        description="Whole hours a new task's due date must lie ahead of the current time",
    )


settings = Settings()
