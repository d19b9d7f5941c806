"""Password hashing domain service."""

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHash, VerifyMismatchError

from jwtauth.config import AuthSettings

from .base import Service


class PasswordService(Service):
    """Argon2id password hashing."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self._hasher = PasswordHasher(
            time_cost=auth_settings.password_time_cost,
            memory_cost=auth_settings.password_memory_cost,
            type=Type.ID,
        )

    def hash(self, raw: str) -> str:
        return self._hasher.hash(raw)

    def matches(self, raw: str, digest: str) -> bool:
        """Check a password against a stored digest.

        Unparseable digests count as a mismatch.
        """
        try:
            return self._hasher.verify(digest, raw)
        except (InvalidHash, VerifyMismatchError):
            return False
