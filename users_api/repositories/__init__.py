"""
Persistence adapters.

Services depend on the load/save contract, never on the JSON file or the SQL
session directly. build_store() picks the adapter configured in Settings.
"""

from __future__ import annotations

from users_api.core.config import Settings, get_settings
from users_api.repositories.base import StorageError, StoreReadError, StoreWriteError, UserStore
from users_api.repositories.json_storage import JsonUserStore


def build_store(settings: Settings | None = None) -> UserStore:
    settings = settings or get_settings()
    if settings.storage_backend == "sql":
        from users_api.repositories.sql_repository import SQLUserStore

        return SQLUserStore()
    if settings.storage_backend != "json":
        raise RuntimeError(f"Unknown STORAGE_BACKEND: {settings.storage_backend!r}")
    return JsonUserStore(settings.users_file)


__all__ = [
    "JsonUserStore",
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
    "UserStore",
    "build_store",
]
