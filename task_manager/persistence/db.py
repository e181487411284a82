from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Engine, create_engine, pool
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from task_manager.core.config import settings


class Base(DeclarativeBase):
    pass


def _engine_options(database_url: str) -> dict[str, Any]:
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # A private in-memory database only lives as long as its connection
        return {
            "poolclass": pool.StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    options: dict[str, Any] = {
        "poolclass": pool.QueuePool,
        "pool_size": 10,  # Minimum number of connections to keep in pool
        "max_overflow": 20,  # Additional connections beyond pool_size
        "pool_pre_ping": True,  # Verify connections before using
        "pool_recycle": 3600,  # Recycle connections after 1 hour
    }
    if database_url.startswith("sqlite"):
        # Starlette runs sync handlers in a threadpool
        options["connect_args"] = {"check_same_thread": False}
    return options


def build_engine(database_url: str) -> Engine:
    return create_engine(database_url, future=True, **_engine_options(database_url))


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    # expire_on_commit=False lets stores read attributes after the session closes;
    # always re-fetch rather than caching ORM instances across requests.
    return sessionmaker(
        bind=bind,
        autoflush=False,
        autocommit=False,
        future=True,
        expire_on_commit=False,
    )


engine = build_engine(settings.DATABASE_URL)
SessionLocal = build_session_factory(engine)


def init_db(bind: Engine | None = None) -> None:
    from .models import TaskRecord  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def get_session(session_factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    session: Session = (session_factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:  # noqa: BLE001 - Re-raise all exceptions after rollback
        session.rollback()
        raise
    finally:
        session.close()
