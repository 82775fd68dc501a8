"""
User management use cases.

Each call is one request-scoped unit: load the whole collection, run the
record operation, save the whole collection when it changed. Storage faults
are caught here and nowhere else, and come back as read_fault/write_fault
results like any other rejection.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from users_api.domain import records
from users_api.domain.errors import ErrorKind, OperationError
from users_api.domain.records import OperationResult
from users_api.domain.validations import UserUpdate
from users_api.repositories.base import StoreReadError, StoreWriteError, UserStore

logger = logging.getLogger(__name__)

READ_FAULT_ERROR = "Error reading users data"
WRITE_FAULT_ERROR = "Error saving users data"


class UserService:
    """Runs record operations against an injected store."""

    def __init__(self, store: UserStore) -> None:
        self.store = store

    # -------------------------------------- helpers --------------------------------------
    def _fault(self, kind: ErrorKind, message: str) -> OperationResult:
        return OperationResult(users=[], error=OperationError(kind, message))

    def _run(self, action: str, operation: Callable[[list], OperationResult]) -> OperationResult:
        try:
            users = self.store.load()
        except StoreReadError:
            logger.exception("Failed to load users", extra={"error_code": ErrorKind.READ_FAULT.value})
            return self._fault(ErrorKind.READ_FAULT, READ_FAULT_ERROR)

        result = operation(users)
        if not result.ok:
            logger.warning(
                "%s rejected: %s",
                action,
                result.error.message,
                extra={"error_code": result.error.kind.value},
            )
            return result
        if not result.mutated:
            return result

        try:
            self.store.save(result.users)
        except StoreWriteError:
            logger.exception("Failed to save users", extra={"error_code": ErrorKind.WRITE_FAULT.value})
            return self._fault(ErrorKind.WRITE_FAULT, WRITE_FAULT_ERROR)
        logger.info("%s succeeded", action, extra={"user_id": (result.user or {}).get("id"), "count": len(result.users)})
        return result

    # -------------------------------------- use cases --------------------------------------
    def list_users(self) -> OperationResult:
        return self._run("list", records.list_users)

    def get_user(self, user_id: Any) -> OperationResult:
        return self._run("get", lambda users: records.get_user(users, user_id))

    def create_user(self, payload: Any) -> OperationResult:
        return self._run("create", lambda users: records.create_user(users, payload))

    def update_user(self, user_id: Any, changes: UserUpdate | Mapping[str, Any]) -> OperationResult:
        return self._run("update", lambda users: records.update_user(users, user_id, changes))

    def delete_user(self, user_id: Any) -> OperationResult:
        return self._run("delete", lambda users: records.delete_user(users, user_id))
