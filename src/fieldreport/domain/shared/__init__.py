"""Shared domain components.

This module exports shared exceptions and time helpers used across
domain boundaries.
"""

from fieldreport.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    ErrorCode,
    StorageError,
    ValidationError,
)
from fieldreport.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "BusinessRuleViolation",
    "ConflictError",
    "StorageError",
    # Utilities
    "ensure_tz_aware",
    "utc_now",
]
