"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from fieldreport.domain.user.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by id, None if absent."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """
        Find a user by username.

        The match is exact and case-sensitive, as stored.
        """

    @abstractmethod
    async def save(self, user: User) -> int:
        """
        Insert or update a user.

        Inserts when the user has no id yet (and assigns the new id onto
        the aggregate), otherwise updates the row with that id.

        Returns
        -------
        Number of rows affected (0 when updating an unknown id)

        Raises
        ------
        UsernameAlreadyExistsError
            If the username is already taken by another row
        """

    @abstractmethod
    async def count(self) -> int:
        """Total number of users."""
