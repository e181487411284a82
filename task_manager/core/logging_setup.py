"""Logging setup for the API process."""

from __future__ import annotations

import logging

from task_manager.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the server process.

    Args:
        level: Log level name; falls back to ``settings.LOG_LEVEL``
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level_name}'")

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    # SQLAlchemy echoes every statement at INFO; keep it quiet unless debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if numeric_level <= logging.DEBUG else logging.WARNING
    )
