"""Record operations over an already-loaded collection of users.

These functions never touch storage and never mutate their inputs: each one
returns an OperationResult holding either the new collection (and the record
it produced) or an OperationError. Callers persist ``result.users`` when the
operation mutated the collection.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from users_api.domain.errors import ErrorKind, OperationError
from users_api.domain.validations import (
    UserUpdate,
    ValidationResult,
    is_number,
    to_number,
    validate_user_for_creation,
    validate_user_for_update,
    validate_user_id,
    validate_users_data,
)

DUPLICATE_USER_ERROR = "User with this id or email already exists"
EMAIL_IN_USE_ERROR = "Email already in use by another user"
NOT_FOUND_ERROR = "User not found"


@dataclass(frozen=True)
class ExistenceResult:
    exists: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class OperationResult:
    users: list
    user: Optional[dict] = None
    error: Optional[OperationError] = None
    mutated: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def _reject(users: list, kind: ErrorKind, message: Optional[str]) -> OperationResult:
    return OperationResult(users=users, error=OperationError(kind, message or ""))


def _rejected_validation(users: list, validation: ValidationResult) -> OperationResult:
    return _reject(users, validation.kind or ErrorKind.INVALID_INPUT, validation.error)


_SCALARS = (str, int, float, type(None))


def _same_value(left: Any, right: Any) -> bool:
    """Equality without type coercion: "1" != 1, True != 1, and containers only match themselves."""
    if not isinstance(left, _SCALARS) or not isinstance(right, _SCALARS):
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def _field(record: Any, key: str) -> Any:
    return record.get(key) if isinstance(record, Mapping) else None


def check_user_exists(users: list, user_id: Any, email: Any) -> ExistenceResult:
    for record in users:
        if _same_value(_field(record, "id"), user_id) or _same_value(_field(record, "email"), email):
            return ExistenceResult(True, DUPLICATE_USER_ERROR)
    return ExistenceResult(False)


def check_email_in_use(users: list, email: Any, exclude_index: int) -> ExistenceResult:
    for idx, record in enumerate(users):
        if idx != exclude_index and _same_value(_field(record, "email"), email):
            return ExistenceResult(True, EMAIL_IN_USE_ERROR)
    return ExistenceResult(False)


def find_user_index(users: list, user_id: Any) -> Optional[int]:
    """Locate a record by numeric value of its id; NaN never matches."""
    wanted = to_number(user_id)
    if math.isnan(wanted):
        return None
    for idx, record in enumerate(users):
        if not isinstance(record, Mapping) or "id" not in record:
            continue
        if to_number(record["id"]) == wanted:
            return idx
    return None


def create_user(users: list, candidate: Any) -> OperationResult:
    validation = validate_user_for_creation(candidate)
    if not validation.is_valid:
        return _rejected_validation(users, validation)
    existing = check_user_exists(users, candidate["id"], candidate["email"])
    if existing.exists:
        return _reject(users, ErrorKind.DUPLICATE_IDENTIFIER, existing.error)
    record = {
        "id": candidate["id"],
        "name": candidate["name"],
        "email": candidate["email"],
        "age": candidate["age"],
    }
    return OperationResult(users=[*users, record], user=dict(record), mutated=True)


def update_user(users: list, user_id: Any, changes: UserUpdate | Mapping[str, Any]) -> OperationResult:
    if isinstance(changes, Mapping):
        changes = UserUpdate.from_payload(changes)
    validation = validate_user_for_update(changes)
    if not validation.is_valid:
        return _rejected_validation(users, validation)
    index = find_user_index(users, user_id)
    if index is None:
        return _reject(users, ErrorKind.NOT_FOUND, NOT_FOUND_ERROR)
    supplied = changes.supplied()
    if "email" in supplied:
        in_use = check_email_in_use(users, supplied["email"], index)
        if in_use.exists:
            return _reject(users, ErrorKind.DUPLICATE_EMAIL, in_use.error)
    updated = {**users[index], **supplied}
    new_users = list(users)
    new_users[index] = updated
    return OperationResult(users=new_users, user=dict(updated), mutated=True)


def delete_user(users: list, user_id: Any) -> OperationResult:
    validation = validate_user_id(user_id)
    if not validation.is_valid:
        return _rejected_validation(users, validation)
    index = find_user_index(users, user_id)
    if index is None:
        return _reject(users, ErrorKind.NOT_FOUND, NOT_FOUND_ERROR)
    removed = users[index]
    reduced = {"id": removed.get("id"), "name": removed.get("name"), "email": removed.get("email")}
    return OperationResult(users=users[:index] + users[index + 1:], user=reduced, mutated=True)


def get_user(users: list, user_id: Any) -> OperationResult:
    validation = validate_user_id(user_id)
    if not validation.is_valid:
        return _rejected_validation(users, validation)
    index = find_user_index(users, user_id)
    if index is None:
        return _reject(users, ErrorKind.NOT_FOUND, NOT_FOUND_ERROR)
    return OperationResult(users=users, user=dict(users[index]))


def list_users(users: Any) -> OperationResult:
    validation = validate_users_data(users)
    if not validation.is_valid:
        return _rejected_validation(users if isinstance(users, list) else [], validation)
    return OperationResult(users=users)
