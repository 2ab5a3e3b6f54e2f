"""User domain exceptions."""

from fieldreport.domain.shared.exceptions import ConflictError, ErrorCode


class UsernameAlreadyExistsError(ConflictError):
    """Username already registered."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(
            f"Username already registered: {username}",
            code=ErrorCode.USERNAME_TAKEN,
            details={"username": username},
        )
