"""Database helpers (engine/session export)."""

from .session import Base, DatabaseNotConfigured, get_engine, get_session, reset_engine

__all__ = ["Base", "DatabaseNotConfigured", "get_engine", "get_session", "reset_engine"]
