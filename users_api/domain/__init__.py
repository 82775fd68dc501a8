"""Domain rules for user records: validation and collection operations."""

from .errors import ErrorKind, OperationError
from .records import OperationResult, create_user, delete_user, get_user, list_users, update_user
from .validations import UNSET, UserUpdate, ValidationResult

__all__ = [
    "ErrorKind",
    "OperationError",
    "OperationResult",
    "UNSET",
    "UserUpdate",
    "ValidationResult",
    "create_user",
    "delete_user",
    "get_user",
    "list_users",
    "update_user",
]
