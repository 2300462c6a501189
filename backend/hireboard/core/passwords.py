"""
Password policy utilities.

Strength rule, secure password generation and stored-hash detection.
Policy parameters come from a PasswordPolicy object instead of module
constants so callers (and tests) can pass their own.
"""

import re
import secrets
import string
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hireboard.core.breach import BreachChecker, NullBreachChecker
from hireboard.core.config import settings

# bcrypt hashes start with $2a$, $2b$, $2x$ or $2y$ followed by the cost
HASHED_PASSWORD_PATTERN = re.compile(r"^\$2[abxy]\$\d+\$")

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits


class PasswordPolicy(BaseModel):
    """Length bounds and special-character set for user passwords."""

    model_config = ConfigDict(frozen=True)

    min_length: int = Field(default=8, ge=1)
    max_length: int = Field(default=128, ge=1)
    special_characters: str = Field(default="@$!%*?&", min_length=1)

    @classmethod
    def from_settings(cls) -> "PasswordPolicy":
        return cls(
            min_length=settings.PASSWORD_MIN_LENGTH,
            max_length=settings.PASSWORD_MAX_LENGTH,
            special_characters=settings.PASSWORD_SPECIAL_CHARACTERS,
        )

    @property
    def alphabet(self) -> str:
        return UPPERCASE + LOWERCASE + DIGITS + self.special_characters


def validate_password_strength(password: str, policy: Optional[PasswordPolicy] = None) -> bool:
    """
    Check a plain text password against the strength rule.

    The password must be at least ``policy.min_length`` long and contain a
    lowercase letter, an uppercase letter, a digit and one of the policy's
    special characters. The upper bound is enforced by the request schemas.

    Args:
        password: Plain text password to check
        policy: Policy to apply (defaults to the configured one)

    Returns:
        True if the password meets the requirements
    """
    policy = policy or PasswordPolicy.from_settings()

    if len(password) < policy.min_length:
        return False

    return (
        any(c in LOWERCASE for c in password)
        and any(c in UPPERCASE for c in password)
        and any(c in DIGITS for c in password)
        and any(c in policy.special_characters for c in password)
    )


def generate_secure_password(length: int = 12, policy: Optional[PasswordPolicy] = None) -> str:
    """
    Generate a random password containing every required character class.

    One uppercase, one lowercase, one digit and one special character are
    drawn first, the rest is filled from the full alphabet, then the
    result is shuffled.

    Args:
        length: Password length (default: 12, minimum: 4)
        policy: Supplies the special-character set

    Returns:
        The generated password

    Raises:
        ValueError: If length is below 4
    """
    if length < 4:
        raise ValueError("Password length must be at least 4 to fit every character class")

    policy = policy or PasswordPolicy.from_settings()
    rng = secrets.SystemRandom()

    chars = [
        secrets.choice(UPPERCASE),
        secrets.choice(LOWERCASE),
        secrets.choice(DIGITS),
        secrets.choice(policy.special_characters),
    ]
    alphabet = policy.alphabet
    chars.extend(secrets.choice(alphabet) for _ in range(length - 4))

    rng.shuffle(chars)
    return "".join(chars)


def is_password_hashed(value: str) -> bool:
    """Return True if the value already looks like a bcrypt hash."""
    return bool(HASHED_PASSWORD_PATTERN.match(value or ""))


async def check_password_breach(password: str, checker: Optional[BreachChecker] = None) -> bool:
    """
    Ask the breach checker whether this password is known to be leaked.

    Without a checker the no-op default is used, which always answers False.
    """
    checker = checker or NullBreachChecker()
    return await checker.is_breached(password)
