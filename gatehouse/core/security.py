"""Password hashing with Argon2id."""

import argon2
from argon2.exceptions import InvalidHashError, VerificationError

from gatehouse.core.config import Settings


class PasswordHasher:
    """
    One-way salted password hashing and verification.

    Wraps argon2-cffi so the cost parameters come from settings and so callers
    only ever see True/False from verify().
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._ph = argon2.PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
        )
        # Verified against when the account does not exist, so unknown emails
        # cost the same as wrong passwords.
        self._dummy_hash = self._ph.hash("gatehouse-dummy-password")

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(
            time_cost=settings.ARGON2_TIME_COST,
            memory_cost=settings.ARGON2_MEMORY_COST,
            parallelism=settings.ARGON2_PARALLELISM,
        )

    def hash(self, password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        return self._ph.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Verify a plain password against a stored hash (constant time)."""
        try:
            return self._ph.verify(password_hash or self._dummy_hash, password) and bool(
                password_hash
            )
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True if the hash was produced with different cost parameters."""
        try:
            return self._ph.check_needs_rehash(password_hash)
        except InvalidHashError:
            return True
