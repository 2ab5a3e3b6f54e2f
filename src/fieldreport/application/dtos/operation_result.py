"""DTO for user-facing operation outcomes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OperationResult:
    """Success flag plus a message that can be shown to the user."""

    success: bool
    message: str

    @classmethod
    def ok(cls, message: str) -> OperationResult:
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str) -> OperationResult:
        return cls(success=False, message=message)

    def __iter__(self):
        # Allows ``success, message = await session.login(...)``
        yield self.success
        yield self.message
