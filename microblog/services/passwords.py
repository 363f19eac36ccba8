"""Password hashing with Argon2id."""

import logging

from argon2 import PasswordHasher as Argon2Hasher
from argon2 import exceptions as argon2_errors

from microblog.core.config import Settings
from microblog.services.errors import HashingError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted one-way password hashing and constant-time verification.

    Hashes are self-contained Argon2id strings: the random salt and the cost
    parameters travel inside the encoded value, so verification needs nothing
    but the stored string.
    """

    def __init__(self, settings: Settings):
        self._ph = Argon2Hasher(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
            hash_len=32,
            salt_len=16,
        )
        # Used to equalize timing when there is no real hash to check against
        self._dummy_hash = self._ph.hash("dummy-password-for-timing")

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt."""
        try:
            return self._ph.hash(password)
        except argon2_errors.HashingError as e:
            raise HashingError("Password hashing failed") from e

    def verify(self, password_hash: str, password: str) -> bool:
        """Verify a password against its hash using constant-time comparison."""
        try:
            return self._ph.verify(password_hash, password)
        except argon2_errors.VerifyMismatchError:
            return False
        except (argon2_errors.VerificationError, argon2_errors.InvalidHashError) as e:
            logger.error("Stored password hash could not be verified: %s", type(e).__name__)
            raise HashingError("Password verification failed") from e

    def burn(self, password: str) -> None:
        """Spend the cost of one verification without a real account."""
        self.verify(self._dummy_hash, password)
