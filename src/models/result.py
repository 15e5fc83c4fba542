"""
Typed result values for entry store operations.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """
    Non-fatal error kinds surfaced by the engine as values.
    """
    INVALID_DATE = "invalid_date"
    OUT_OF_RANGE_VALUE = "out_of_range_value"
    FUTURE_DATE = "future_date"
    NOT_FOUND = "not_found"


class OperationResult(BaseModel):
    """
    Outcome of an entry store operation.

    ``error`` is None on success. ``replaced`` tells an upsert that
    overwrote an existing date apart from a fresh insert.
    """
    ok: bool
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    replaced: bool = False

    @classmethod
    def success(cls, replaced: bool = False) -> "OperationResult":
        return cls(ok=True, replaced=replaced)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "OperationResult":
        return cls(ok=False, error=error, message=message)
