"""Unit tests for PasswordHashingService."""

import pytest

from fieldreport.domain.shared import ValidationError
from fieldreport.infrastructure.security import PasswordHashingService


class TestPasswordHashingService:
    """Test bcrypt hashing and the registration strength rule."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    def test_hash_and_verify(self):
        hashed = self.service.hash("secret1")

        assert hashed != "secret1"
        assert hashed.startswith("$2")
        assert self.service.verify("secret1", hashed) is True
        assert self.service.verify("wrong", hashed) is False

    def test_hashes_are_salted(self):
        assert self.service.hash("secret1") != self.service.hash("secret1")

    def test_verify_with_garbage_hash(self):
        assert self.service.verify("secret1", "not-a-hash") is False

    def test_short_bootstrap_password_can_be_hashed(self):
        hashed = self.service.hash("user")

        assert self.service.verify("user", hashed) is True

    @pytest.mark.parametrize(
        ("password", "message"),
        [
            ("", "Password is required"),
            ("   ", "Password is required"),
            ("abc", "Password must be at least 6 characters"),
        ],
    )
    def test_validate_strength_rejects(self, password, message):
        with pytest.raises(ValidationError, match=message):
            self.service.validate_strength(password)

    def test_validate_strength_accepts(self):
        self.service.validate_strength("secret1")
