"""Engine/session helpers for the SQL users store."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from users_api.core.config import get_settings

Base = declarative_base()


class DatabaseNotConfigured(RuntimeError):
    """Raised when the SQL store is used without DATABASE_URL."""


@lru_cache
def get_engine():
    url = (get_settings().database_url or "").strip()
    if not url:
        raise DatabaseNotConfigured("DATABASE_URL must be set when STORAGE_BACKEND=sql.")
    options = {}
    if url.startswith("sqlite"):
        # sync routes run in FastAPI's threadpool
        options["connect_args"] = {"check_same_thread": False}
    return create_engine(url, future=True, pool_pre_ping=True, **options)


@lru_cache
def _get_sessionmaker():
    return sessionmaker(bind=get_engine(), autoflush=False, future=True)


def reset_engine() -> None:
    """Dispose the cached engine so the next use re-reads DATABASE_URL."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()
    _get_sessionmaker.cache_clear()


@contextmanager
def get_session() -> Session:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()
