"""Result wrapper returned by every LocalStore operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from fieldreport.domain.shared import ErrorCode, StorageError

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Value-or-error outcome of a store call.

    A failed result still carries the operation's empty default in
    ``value`` (``[]``, ``0`` or ``None``), so code that only reads the
    value sees an empty answer. ``ok`` and ``error`` tell "nothing found"
    apart from "the store failed".
    """

    value: T
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> StoreResult[T]:
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        error: str,
        default: T,
        code: ErrorCode = ErrorCode.STORAGE_ERROR,
    ) -> StoreResult[T]:
        return cls(value=default, error=error, error_code=code)

    def unwrap(self) -> T:
        """Return the value, raising StorageError for a failed result."""
        if not self.ok:
            raise StorageError(
                self.error or "Storage operation failed",
                code=self.error_code or ErrorCode.STORAGE_ERROR,
            )
        return self.value
