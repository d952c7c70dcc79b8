"""Credential and permission policy settings.
"""

import logging
from typing import Set, Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class AuthSettings(BaseSettings):
    """Defines the password policy bounds, hashing cost and protected accounts.

    Security Note:
        - BCRYPT_WORK_FACTOR below 10 is only acceptable in test environments.
        - PROTECTED_ACCOUNT_NAMES lists accounts that can never lose
          site-portal access, so an operator cannot lock every administrator
          out of the portal.
    """

    BCRYPT_WORK_FACTOR: int = Field(ge=4, le=31, default=12)
    PASSWORD_MIN_LENGTH: int = Field(ge=1, default=8)
    PASSWORD_MAX_LENGTH: int = Field(ge=1, default=20)
    PROTECTED_ACCOUNT_NAMES: Union[str, Set[str]] = {"Admin"}

    @field_validator("PROTECTED_ACCOUNT_NAMES", mode="before")
    @classmethod
    def split_account_names(cls, v: Union[str, Set[str]]) -> Set[str]:
        """Accepts a comma-separated string as well as a collection of names."""
        if isinstance(v, str):
            return {name.strip() for name in v.split(",") if name.strip()}
        return set(v)

    @model_validator(mode="after")
    def _validate_password_bounds(self) -> "AuthSettings":
        """Rejects a password length window that no password could satisfy.

        Returns:
            Self instance once the bounds are consistent.
        """
        if self.PASSWORD_MIN_LENGTH > self.PASSWORD_MAX_LENGTH:
            error_msg = (
                f"PASSWORD_MIN_LENGTH ({self.PASSWORD_MIN_LENGTH}) must not exceed "
                f"PASSWORD_MAX_LENGTH ({self.PASSWORD_MAX_LENGTH})"
            )
            logger.error(error_msg)
            raise ValueError(error_msg)
        if self.BCRYPT_WORK_FACTOR < 10:
            logger.warning("BCRYPT_WORK_FACTOR below 10; use only for tests")
        return self
