import re
from dataclasses import dataclass
from typing import Optional

import structlog

from siteportal.core.config.settings import settings
from siteportal.core.exceptions import (
    EmptyPasswordError,
    FatalEnvironmentFault,
    PasswordTooLongError,
    PasswordTooShortError,
    PasswordTooWeakError,
    PasswordValidationError,
)
from siteportal.utils.security import hash_password, verify_password

logger = structlog.get_logger(__name__)

_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking a candidate password without raising."""

    error: Optional[PasswordValidationError] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


class PasswordPolicy:
    """Validates passwords against the portal policy and derives their hashes.

    The policy requires a password that is not blank, is between
    `min_length` and `max_length` characters long (inclusive), and contains at
    least one uppercase letter, one lowercase letter and one digit.

    The policy holds no state beyond its configuration; the only randomness it
    uses is the per-hash salt.
    """

    def __init__(
        self,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        work_factor: Optional[int] = None,
    ):
        self.min_length = settings.PASSWORD_MIN_LENGTH if min_length is None else min_length
        self.max_length = settings.PASSWORD_MAX_LENGTH if max_length is None else max_length
        self.work_factor = settings.BCRYPT_WORK_FACTOR if work_factor is None else work_factor
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")

    def validate(self, candidate: str) -> None:
        """Validates the given password against the policy.

        Args:
            candidate (str): The password to validate.

        Raises:
            EmptyPasswordError: If the password is empty or whitespace only.
            PasswordTooShortError: If it is shorter than `min_length`.
            PasswordTooLongError: If it is longer than `max_length`.
            PasswordTooWeakError: If a required character class is missing.
        """
        if not candidate or not candidate.strip():
            raise EmptyPasswordError()

        if len(candidate) < self.min_length:
            raise PasswordTooShortError(min_length=self.min_length)

        if len(candidate) > self.max_length:
            raise PasswordTooLongError(max_length=self.max_length)

        if not (
            _UPPERCASE.search(candidate)
            and _LOWERCASE.search(candidate)
            and _DIGIT.search(candidate)
        ):
            raise PasswordTooWeakError()

    def check(self, candidate: str) -> ValidationResult:
        """Same rules as `validate`, reported as a value instead of raised."""
        try:
            self.validate(candidate)
        except PasswordValidationError as exc:
            return ValidationResult(error=exc)
        return ValidationResult()

    def hash(self, plaintext: str) -> str:
        """Derives a salted bcrypt hash of `plaintext`.

        Raises:
            FatalEnvironmentFault: If the hashing primitive itself fails.
        """
        try:
            return hash_password(plaintext, rounds=self.work_factor)
        except Exception as exc:
            logger.critical(
                "Password hashing primitive failed",
                error_type=type(exc).__name__,
                work_factor=self.work_factor,
            )
            raise FatalEnvironmentFault() from exc

    def verify(self, hashed: str, plaintext: str) -> bool:
        """Checks `plaintext` against a stored hash in constant time.

        Returns False for a malformed or missing hash rather than raising.
        """
        if not hashed:
            return False
        try:
            return verify_password(plaintext, hashed)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False
