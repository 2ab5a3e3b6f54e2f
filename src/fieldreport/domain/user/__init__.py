"""User domain - field worker identity.

Design notes:
- User id is an integer assigned by the store on insert
- Username is unique and matched case-sensitively
- Only a password hash is ever held by the aggregate
"""

from fieldreport.domain.user.exceptions import UsernameAlreadyExistsError
from fieldreport.domain.user.repository import UserRepository
from fieldreport.domain.user.user import (
    PROFILE_FIELD_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    User,
)

__all__ = [
    "PROFILE_FIELD_MAX_LENGTH",
    "USERNAME_MAX_LENGTH",
    "User",
    "UserRepository",
    "UsernameAlreadyExistsError",
]
