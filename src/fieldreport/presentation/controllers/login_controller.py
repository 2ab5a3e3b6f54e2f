"""Login screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldreport.application.services import SessionService


class LoginController:
    def __init__(self, session: SessionService):
        self._session = session
        self.username = ""
        self.password = ""
        self.error_message = ""
        self.is_loading = False

    async def login(self) -> bool:
        """Sign in with the entered credentials.

        The password field is cleared after a failed attempt.
        """
        self.error_message = ""
        self.username = self.username.strip()

        if not self.username:
            self.error_message = "Username is required"
            return False
        if not self.password.strip():
            self.error_message = "Password is required"
            return False

        self.is_loading = True
        try:
            result = await self._session.login(self.username, self.password)
        finally:
            self.is_loading = False

        if not result.success:
            self.error_message = result.message
            self.password = ""
            return False
        self.password = ""
        return True

    def clear_form(self) -> None:
        self.username = ""
        self.password = ""
        self.error_message = ""
