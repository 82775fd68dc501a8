"""Error taxonomy shared by validators, record operations and the HTTP layer."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    MALFORMED_INPUT = "malformed_input"
    EMPTY_COLLECTION = "empty_collection"
    MALFORMED_RECORD = "malformed_record"
    NOT_FOUND = "not_found"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    DUPLICATE_EMAIL = "duplicate_email"
    READ_FAULT = "read_fault"
    WRITE_FAULT = "write_fault"


@dataclass(frozen=True)
class OperationError:
    kind: ErrorKind
    message: str

    def to_response(self) -> dict:
        return {"ok": False, "error": self.kind.value, "message": self.message}
