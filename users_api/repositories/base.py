"""Store contract shared by the persistence adapters."""
from __future__ import annotations

from typing import Protocol


class StorageError(Exception):
    """Base class for persistence faults."""


class StoreReadError(StorageError):
    """Raised when the collection cannot be loaded."""


class StoreWriteError(StorageError):
    """Raised when the collection cannot be saved."""


class UserStore(Protocol):
    def load(self) -> list:
        ...

    def save(self, users: list) -> None:
        ...
