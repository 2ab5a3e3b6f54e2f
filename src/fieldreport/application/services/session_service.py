"""Session and identity for the running application."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from fieldreport.application.dtos import OperationResult
from fieldreport.domain.shared import ErrorCode, ValidationError
from fieldreport.domain.user import User

if TYPE_CHECKING:
    from fieldreport.infrastructure.persistence import LocalStore
    from fieldreport.infrastructure.security import PasswordHashingService

logger = logging.getLogger(__name__)

ANONYMOUS_USER_ID = 0
FALLBACK_DISPLAY_NAME = "User"

MSG_USERNAME_REQUIRED = "Username is required"
MSG_PASSWORD_REQUIRED = "Password is required"
MSG_INVALID_CREDENTIALS = "Invalid username or password"
MSG_LOGIN_OK = "Login successful"
MSG_LOGIN_FAILED = "Could not sign in, please try again"
MSG_USERNAME_TAKEN = "Username already in use"
MSG_REGISTER_OK = "User registered successfully"
MSG_REGISTER_FAILED = "Could not register the user"
MSG_NOT_AUTHENTICATED = "You must be signed in"
MSG_PROFILE_OK = "Profile updated"
MSG_PROFILE_FAILED = "Could not update the profile"


class SessionService:
    """
    Holds who is signed in.

    One instance per running application, owned by the composition root
    and handed to every controller. Anonymous until ``login`` succeeds;
    ``logout`` returns to anonymous. Nothing is persisted and sessions
    never expire.
    """

    def __init__(self, store: LocalStore, password_service: PasswordHashingService):
        self._store = store
        self._password_service = password_service
        self._current_user: Optional[User] = None

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def current_user_id(self) -> int:
        if self._current_user is None or self._current_user.id is None:
            return ANONYMOUS_USER_ID
        return self._current_user.id

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    @property
    def current_user_full_name(self) -> str:
        if self._current_user is None:
            return FALLBACK_DISPLAY_NAME
        return self._current_user.display_name or FALLBACK_DISPLAY_NAME

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    async def login(self, username: str, password: str) -> OperationResult:
        if not username or not username.strip():
            return OperationResult.fail(MSG_USERNAME_REQUIRED)
        if not password or not password.strip():
            return OperationResult.fail(MSG_PASSWORD_REQUIRED)

        result = await self._store.validate_user(username, password)
        if not result.ok:
            return OperationResult.fail(MSG_LOGIN_FAILED)
        if result.value is None:
            logger.info("Failed login for %s", username)
            return OperationResult.fail(MSG_INVALID_CREDENTIALS)

        self._current_user = result.value
        logger.info("User logged in: %s", username)
        return OperationResult.ok(MSG_LOGIN_OK)

    async def register(
        self,
        username: str,
        password: str,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> OperationResult:
        """Create a new account. Does not sign the new user in."""
        if not username or not username.strip():
            return OperationResult.fail(MSG_USERNAME_REQUIRED)
        try:
            self._password_service.validate_strength(password)
        except ValidationError as e:
            return OperationResult.fail(e.message)

        existing = await self._store.get_user_by_username(username)
        if not existing.ok:
            return OperationResult.fail(MSG_REGISTER_FAILED)
        if existing.value is not None:
            return OperationResult.fail(MSG_USERNAME_TAKEN)

        try:
            user = User.create(
                username=username,
                password_hash=self._password_service.hash(password),
                full_name=full_name,
                email=email,
            )
        except ValidationError as e:
            return OperationResult.fail(e.message)

        saved = await self._store.save_user(user)
        if saved.error_code == ErrorCode.USERNAME_TAKEN:
            return OperationResult.fail(MSG_USERNAME_TAKEN)
        if not saved.ok:
            return OperationResult.fail(MSG_REGISTER_FAILED)

        logger.info("User registered: %s", username)
        return OperationResult.ok(MSG_REGISTER_OK)

    def logout(self) -> None:
        if self._current_user is None:
            return
        logger.info("User logged out: %s", self._current_user.username)
        self._current_user = None

    async def update_profile(
        self,
        full_name: Optional[str],
        email: Optional[str],
    ) -> OperationResult:
        """Change the signed-in user's full name and email."""
        user = self._current_user
        if user is None:
            return OperationResult.fail(MSG_NOT_AUTHENTICATED)

        previous = (user.full_name, user.email)
        try:
            user.update_profile(full_name=full_name, email=email)
        except ValidationError as e:
            return OperationResult.fail(e.message)

        saved = await self._store.save_user(user)
        if not saved.ok:
            user.update_profile(*previous)
            return OperationResult.fail(MSG_PROFILE_FAILED)
        return OperationResult.ok(MSG_PROFILE_OK)
