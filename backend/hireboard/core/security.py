"""
Security utilities for credential storage.

Provides bcrypt password hashing and verification. The hashing
algorithm is isolated behind CredentialStore so the rest of the package
only ever sees opaque stored hashes.
"""

import asyncio
from typing import Optional

from passlib.context import CryptContext

from hireboard.core.config import settings
from hireboard.core.exceptions import ComparisonError, HashingError
from hireboard.core.log import get_logger

logger = get_logger("credential_store", "CREDENTIALS")

# bcrypt only looks at the first 72 bytes of the secret
BCRYPT_MAX_SECRET_BYTES = 72


class CredentialStore:
    """
    One-way salted password hashing with a fixed work factor.

    Both operations run bcrypt on a worker thread, so awaiting them never
    blocks the event loop. Instances hold no mutable state and can be
    shared between concurrent callers.
    """

    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds if rounds is not None else settings.BCRYPT_ROUNDS

        # Password hashing context using bcrypt
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__default_rounds=self.rounds,
            bcrypt__min_rounds=self.rounds,
        )

    async def hash_password(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: The plain text password to hash

        Returns:
            The hashed password string (fresh salt on every call)

        Raises:
            HashingError: If the password cannot be hashed
        """
        if isinstance(password, str) and len(password.encode("utf-8")) > BCRYPT_MAX_SECRET_BYTES:
            raise HashingError(
                f"Failed to hash password: longer than {BCRYPT_MAX_SECRET_BYTES} bytes"
            )

        try:
            return await asyncio.to_thread(self._context.hash, password)
        except Exception as e:
            logger.error(f"Password hashing failed: {type(e).__name__}")
            raise HashingError("Failed to hash password") from e

    async def compare_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain password against a hashed password.

        Args:
            plain_password: The plain text password to verify
            hashed_password: The stored hash to compare against

        Returns:
            True if password matches, False otherwise (including a
            malformed or unrecognised hash)

        Raises:
            ComparisonError: If the verification itself fails
        """
        if not isinstance(hashed_password, str) or not self._context.identify(hashed_password):
            return False

        try:
            return await asyncio.to_thread(self._context.verify, plain_password, hashed_password)
        except ValueError:
            # Recognised prefix but malformed body
            return False
        except Exception as e:
            logger.error(f"Password comparison failed: {type(e).__name__}")
            raise ComparisonError("Failed to compare passwords") from e

    def needs_rehash(self, hashed_password: str) -> bool:
        """Return True if the stored hash uses a lower cost than configured."""
        try:
            return self._context.needs_update(hashed_password)
        except ValueError:
            return False


# Shared store using the configured cost factor
credential_store = CredentialStore()


async def hash_password(password: str) -> str:
    """Hash a password with the default credential store."""
    return await credential_store.hash_password(password)


async def compare_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password with the default credential store."""
    return await credential_store.compare_password(plain_password, hashed_password)
