"""Security infrastructure (password hashing)."""

from fieldreport.infrastructure.security.password_service import (
    PasswordHashingService,
)

__all__ = ["PasswordHashingService"]
