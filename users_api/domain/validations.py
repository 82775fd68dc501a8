"""Validation rules for user records.

Every check returns a ValidationResult instead of raising: a rejected value is
an expected outcome, not a fault. Composite checks run their steps in a fixed
order and stop at the first failure.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional

from users_api.domain.errors import ErrorKind

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
REQUIRED_FIELDS = ("id", "name", "email", "age")

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_RADIX_LITERALS = (
    (re.compile(r"0[xX][0-9a-fA-F]+"), 16),
    (re.compile(r"0[oO][0-7]+"), 8),
    (re.compile(r"0[bB][01]+"), 2),
)

MISSING_FIELDS_ERROR = "Missing or invalid fields. Required: id, name, email, age (number)"
NAME_ERROR = "Name must be at least 2 characters long"
AGE_ERROR = "Age must be a positive number"
EMAIL_ERROR = "Invalid email format"
USER_ID_TYPE_ERROR = "User ID is required and must be a string or number"
USER_ID_VALUE_ERROR = "User ID must be a valid positive number"
EMPTY_COLLECTION_ERROR = "No users found"
MALFORMED_RECORD_ERROR = "Invalid user data detected"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    kind: Optional[ErrorKind] = field(default=None, compare=False)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind = ErrorKind.INVALID_INPUT) -> "ValidationResult":
        return cls(False, error, kind)


class _Unset:
    """Marker for a partial-update field that was not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class UserUpdate:
    """Partial record for updates; fields left at UNSET are not touched."""

    name: Any = UNSET
    email: Any = UNSET
    age: Any = UNSET

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UserUpdate":
        return cls(**{key: payload[key] for key in ("name", "email", "age") if key in payload})

    def supplied(self) -> dict:
        """Return only the supplied fields, in name/email/age order."""
        return {
            key: value
            for key, value in (("name", self.name), ("email", self.email), ("age", self.age))
            if value is not UNSET
        }


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """Only None, False, zero, NaN and the empty string are falsy; empty containers are not."""
    if value is None or value is False or (isinstance(value, str) and not value):
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    return True


def to_number(value: Any) -> float:
    """Numeric coercion used for id comparisons; NaN when not convertible."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if value is None:
        return 0.0
    if not isinstance(value, str):
        return math.nan
    text = value.strip()
    if not text:
        return 0.0
    if _DECIMAL_LITERAL.fullmatch(text):
        return float(text.replace("Infinity", "inf"))
    for pattern, base in _RADIX_LITERALS:
        if pattern.fullmatch(text):
            return float(int(text[2:], base))
    return math.nan


def validate_required_fields(candidate: Any) -> ValidationResult:
    if not isinstance(candidate, Mapping):
        return ValidationResult.fail(MISSING_FIELDS_ERROR)
    if not (
        is_truthy(candidate.get("id"))
        and is_truthy(candidate.get("name"))
        and is_truthy(candidate.get("email"))
        and is_number(candidate.get("age"))
    ):
        return ValidationResult.fail(MISSING_FIELDS_ERROR)
    return ValidationResult.ok()


def validate_name(name: Any) -> ValidationResult:
    if not isinstance(name, str) or len(name.strip()) < 2:
        return ValidationResult.fail(NAME_ERROR)
    return ValidationResult.ok()


def validate_age(age: Any) -> ValidationResult:
    if not is_number(age) or age <= 0:
        return ValidationResult.fail(AGE_ERROR)
    return ValidationResult.ok()


def validate_email(email: Any) -> ValidationResult:
    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        return ValidationResult.fail(EMAIL_ERROR)
    return ValidationResult.ok()


def validate_user_id(user_id: Any) -> ValidationResult:
    """Ids must coerce to a positive number, even though creation accepts any truthy id."""
    if not is_truthy(user_id) or not (isinstance(user_id, str) or is_number(user_id)):
        return ValidationResult.fail(USER_ID_TYPE_ERROR)
    numeric_id = to_number(user_id)
    if math.isnan(numeric_id) or numeric_id <= 0:
        return ValidationResult.fail(USER_ID_VALUE_ERROR)
    return ValidationResult.ok()


def _first_failure(checks: Iterable[Callable[[], ValidationResult]]) -> ValidationResult:
    for check in checks:
        result = check()
        if not result.is_valid:
            return result
    return ValidationResult.ok()


def validate_user_for_creation(candidate: Any) -> ValidationResult:
    required = validate_required_fields(candidate)
    if not required.is_valid:
        return required
    return _first_failure((
        lambda: validate_name(candidate["name"]),
        lambda: validate_age(candidate["age"]),
        lambda: validate_email(candidate["email"]),
    ))


_UPDATE_VALIDATORS = (
    ("name", validate_name),
    ("email", validate_email),
    ("age", validate_age),
)


def validate_user_for_update(partial: UserUpdate | Mapping[str, Any]) -> ValidationResult:
    if isinstance(partial, Mapping):
        partial = UserUpdate.from_payload(partial)
    supplied = partial.supplied()
    return _first_failure(
        (lambda v=validator, value=supplied[key]: v(value))
        for key, validator in _UPDATE_VALIDATORS
        if key in supplied
    )


def validate_users_data(collection: Any, required_fields: Iterable[str] = REQUIRED_FIELDS) -> ValidationResult:
    """Reject an empty collection, or one holding a record without a required field."""
    if not isinstance(collection, list) or not collection:
        return ValidationResult.fail(EMPTY_COLLECTION_ERROR, ErrorKind.EMPTY_COLLECTION)
    fields = tuple(required_fields)
    for record in collection:
        if not isinstance(record, Mapping) or any(record.get(name) is None for name in fields):
            return ValidationResult.fail(MALFORMED_RECORD_ERROR, ErrorKind.MALFORMED_RECORD)
    return ValidationResult.ok()
