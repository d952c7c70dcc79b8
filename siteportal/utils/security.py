"""Security utilities for password hashing and verification.

Hashing uses bcrypt through passlib: every hash gets a fresh random salt and
the configured work factor, and verification is a constant-time comparison
that never reconstructs the plaintext.
"""

from functools import lru_cache

from passlib.context import CryptContext

from siteportal.core.config.settings import settings


@lru_cache(maxsize=None)
def get_pwd_context(rounds: int = settings.BCRYPT_WORK_FACTOR) -> CryptContext:
    """Returns the bcrypt context for the given work factor.

    Contexts are cached per work factor so that policies built with a
    non-default cost (tests, migrations) do not rebuild one on every call.
    """
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, rounds: int = settings.BCRYPT_WORK_FACTOR) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash
        rounds: bcrypt work factor (log2 of the iteration count)

    Returns:
        str: Bcrypt-hashed password
    """
    return get_pwd_context(rounds).hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    The work factor is read from the hash itself, so any context can verify
    any bcrypt hash.

    Raises:
        ValueError: If `hashed_password` is not a recognised bcrypt hash.
    """
    return get_pwd_context().verify(password, hashed_password)
