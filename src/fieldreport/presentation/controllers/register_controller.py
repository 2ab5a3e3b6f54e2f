"""Registration screen."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from fieldreport.application.services import SessionService


class RegisterController:
    def __init__(self, session: SessionService):
        self._session = session
        self.error_message = ""
        self.success_message = ""
        self.is_loading = False

    async def register(
        self,
        username: str,
        password: str,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> bool:
        self.error_message = ""
        self.success_message = ""

        self.is_loading = True
        try:
            result = await self._session.register(
                username=(username or "").strip(),
                password=password or "",
                full_name=(full_name or "").strip() or None,
                email=(email or "").strip() or None,
            )
        finally:
            self.is_loading = False

        if result.success:
            self.success_message = result.message
        else:
            self.error_message = result.message
        return result.success
