"""Password hashing service using bcrypt.

Provides password hashing and verification plus the minimum-strength
check applied at registration.
"""

import bcrypt

from fieldreport.domain.shared import ValidationError


class PasswordHashingService:
    """Service for password hashing and verification.

    Uses bcrypt with a configurable work factor.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("secret1")
    >>> service.verify("secret1", hashed)
    True
    >>> service.verify("wrong", hashed)
    False
    """

    # Password requirements for new registrations
    MIN_LENGTH = 6
    # bcrypt only looks at the first 72 bytes
    MAX_LENGTH = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Tests use the
            minimum of 4 to stay fast.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Strength is not checked here: the bootstrap account predates the
        registration rules. Call ``validate_strength`` for user input.

        Returns
        -------
        The bcrypt hash as a string
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8")[: self.MAX_LENGTH], salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8")[: self.MAX_LENGTH],
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets the registration requirements.

        Raises
        ------
        ValidationError
            If the password is blank or shorter than MIN_LENGTH
        """
        if not password or not password.strip():
            msg = "Password is required"
            raise ValidationError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise ValidationError(msg)
