"""User aggregate."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fieldreport.domain.shared import ValidationError, utc_now

USERNAME_MAX_LENGTH = 50
PROFILE_FIELD_MAX_LENGTH = 100


class User:
    """
    User aggregate root.

    A field worker account. The integer id is assigned by the store on
    first insert; until then it is ``None``. Users are never deleted and
    only the profile (full name, email) changes after registration.
    """

    def __init__(  # NOQA: PLR0913
        self,
        username: str,
        password_hash: str,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ):
        self._username = self._validate_username(username)
        self._password_hash = password_hash
        self._full_name = self._validate_profile_field("full_name", full_name)
        self._email = self._validate_profile_field("email", email)
        self._id = id
        self._created_at = created_at or utc_now()

    @classmethod
    def create(
        cls,
        username: str,
        password_hash: str,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        return cls(
            username=username,
            password_hash=password_hash,
            full_name=full_name or None,
            email=email or None,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        username: str,
        password_hash: str,
        full_name: Optional[str],
        email: Optional[str],
        created_at: datetime,
    ) -> User:
        return cls(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            email=email,
            id=id,
            created_at=created_at,
        )

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def full_name(self) -> Optional[str]:
        return self._full_name

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_persisted(self) -> bool:
        return bool(self._id)

    @property
    def display_name(self) -> str:
        return self._full_name or self._username

    def assign_id(self, user_id: Optional[int]) -> None:
        """Record the id handed out by the store after insert."""
        self._id = user_id

    def update_profile(
        self,
        full_name: Optional[str],
        email: Optional[str],
    ) -> None:
        self._full_name = self._validate_profile_field("full_name", full_name or None)
        self._email = self._validate_profile_field("email", email or None)

    @staticmethod
    def _validate_username(username: str) -> str:
        if not username or not username.strip():
            msg = "Username cannot be empty"
            raise ValidationError(msg)
        if len(username) > USERNAME_MAX_LENGTH:
            msg = f"Username cannot exceed {USERNAME_MAX_LENGTH} characters"
            raise ValidationError(msg, details={"length": len(username)})
        return username

    @staticmethod
    def _validate_profile_field(name: str, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) > PROFILE_FIELD_MAX_LENGTH:
            msg = f"{name} cannot exceed {PROFILE_FIELD_MAX_LENGTH} characters"
            raise ValidationError(msg, details={"field": name})
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return False
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash((User, self._id)) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"User(id={self._id}, username={self._username!r})"
