"""Centralized, structured exception hierarchy for the site portal core.

Every failure the core reports is a distinct class carrying a machine-readable
`code` for programmatic handling and a human-readable `message` for logging
and user feedback, so a caller can tell "wrong current password" apart from
"password too weak" apart from "server error".

The hierarchy is designed to:
- Keep validation, policy, lookup and storage failures in separate branches.
- Support internationalization (i18n) for user-facing messages.
- Map cleanly to HTTP status codes in whatever transport layer embeds it.

Validation and policy errors are deterministic for a given input and are
never retried. `PersistenceError` is surfaced as-is; retry policy belongs to
the caller or the storage implementation. `FatalEnvironmentFault` sits
outside the `SitePortalError` tree on purpose.
"""

from __future__ import annotations

from typing import Final, Optional

from siteportal.utils.i18n import get_translated_message

__all__: Final = [
    "SitePortalError",
    "ValidationError",
    "PasswordValidationError",
    "EmptyPasswordError",
    "PasswordTooShortError",
    "PasswordTooLongError",
    "PasswordTooWeakError",
    "PasswordUnchangedError",
    "InvalidCredentialError",
    "PolicyViolationError",
    "AdminLockoutViolationError",
    "AccessDeniedError",
    "NotFoundError",
    "UserNotFoundError",
    "FederationNotFoundError",
    "DuplicateIdentifierError",
    "PersistenceError",
    "FatalEnvironmentFault",
]


class SitePortalError(Exception):
    """Base exception class for all recoverable errors raised by the core.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
                       This message can be translated.
        code (str): A unique, machine-readable error code for identifying
                    the type of error programmatically.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Validation errors (typically map to 400 Bad Request)
# ---------------------------------------------------------------------------


class ValidationError(SitePortalError):
    """Raised for input that fails a deterministic validation rule."""

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(message, code)


class PasswordValidationError(ValidationError):
    """Base exception for password validation failures."""

    def __init__(self, message: str, code: str = "password_validation_error"):
        super().__init__(message, code)


class EmptyPasswordError(PasswordValidationError):
    """Raised when the candidate password is empty or only whitespace."""

    def __init__(self, message: Optional[str] = None, code: str = "password_empty"):
        super().__init__(message or get_translated_message("password_empty"), code)


class PasswordTooShortError(PasswordValidationError):
    """Raised when the candidate password is below the minimum length."""

    def __init__(self, min_length: int = 8, message: Optional[str] = None, code: str = "password_too_short"):
        self.min_length = min_length
        if message is None:
            message = get_translated_message("password_too_short").format(min_length=min_length)
        super().__init__(message, code)


class PasswordTooLongError(PasswordValidationError):
    """Raised when the candidate password exceeds the maximum length."""

    def __init__(self, max_length: int = 20, message: Optional[str] = None, code: str = "password_too_long"):
        self.max_length = max_length
        if message is None:
            message = get_translated_message("password_too_long").format(max_length=max_length)
        super().__init__(message, code)


class PasswordTooWeakError(PasswordValidationError):
    """Raised when the password lacks an uppercase letter, a lowercase letter or a digit."""

    def __init__(self, message: Optional[str] = None, code: str = "password_too_weak"):
        super().__init__(message or get_translated_message("password_too_weak"), code)


class PasswordUnchangedError(PasswordValidationError):
    """Raised when the new password equals the current one."""

    def __init__(self, message: Optional[str] = None, code: str = "password_unchanged"):
        super().__init__(message or get_translated_message("password_unchanged"), code)


class InvalidCredentialError(PasswordValidationError):
    """Raised when the supplied current password does not match the stored hash.

    Only the legitimate user can change their password; no persistence call is
    made after this error.
    """

    def __init__(self, message: Optional[str] = None, code: str = "invalid_current_password"):
        super().__init__(message or get_translated_message("invalid_current_password"), code)


# ---------------------------------------------------------------------------
# Policy violations (typically map to 403 Forbidden)
# ---------------------------------------------------------------------------


class PolicyViolationError(SitePortalError):
    """Raised when a request breaks an authorization or account-protection rule."""

    def __init__(self, message: str, code: str = "policy_violation"):
        super().__init__(message, code)


class AdminLockoutViolationError(PolicyViolationError):
    """Raised when a protected account would lose site-portal access."""

    def __init__(self, name: str, message: Optional[str] = None, code: str = "admin_lockout_violation"):
        self.name = name
        if message is None:
            message = get_translated_message("admin_lockout_violation").format(name=name)
        super().__init__(message, code)


class AccessDeniedError(PolicyViolationError):
    """Raised when a user does not hold the requested capability."""

    def __init__(
        self,
        name: str,
        capability: str,
        message: Optional[str] = None,
        code: str = "access_denied",
    ):
        self.name = name
        self.capability = capability
        if message is None:
            message = get_translated_message("access_denied").format(name=name, capability=capability)
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Lookup and identity errors (404 Not Found / 409 Conflict)
# ---------------------------------------------------------------------------


class NotFoundError(SitePortalError):
    """Raised when a record addressed by identifier does not exist."""

    def __init__(self, message: str, code: str = "not_found"):
        super().__init__(message, code)


class UserNotFoundError(NotFoundError):
    """Raised when a requested user is not found in the store."""

    def __init__(self, message: Optional[str] = None, code: str = "user_not_found"):
        super().__init__(message or get_translated_message("user_not_found"), code)


class FederationNotFoundError(NotFoundError):
    """Raised when no live federation record has the requested uuid."""

    def __init__(self, uuid: str, message: Optional[str] = None, code: str = "federation_not_found"):
        self.uuid = uuid
        if message is None:
            message = get_translated_message("federation_not_found").format(uuid=uuid)
        super().__init__(message, code)


class DuplicateIdentifierError(SitePortalError):
    """Raised when creating a record whose unique identifier is already taken."""

    def __init__(self, identifier: str, message: Optional[str] = None, code: str = "duplicate_identifier"):
        self.identifier = identifier
        if message is None:
            message = get_translated_message("duplicate_identifier").format(identifier=identifier)
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Storage errors (500 Internal Server Error)
# ---------------------------------------------------------------------------


class PersistenceError(SitePortalError):
    """Wraps an underlying storage fault.

    The original driver exception is kept as `__cause__` by raising with
    ``raise PersistenceError(...) from exc``.
    """

    def __init__(self, message: Optional[str] = None, code: str = "persistence_error"):
        super().__init__(message or get_translated_message("persistence_error"), code)


# ---------------------------------------------------------------------------
# Environment faults
# ---------------------------------------------------------------------------


class FatalEnvironmentFault(Exception):
    """Raised when a cryptographic primitive itself fails.

    This is not a validation outcome and is not recoverable within the core:
    the current operation is aborted before anything is persisted. It does
    not derive from `SitePortalError`, so handlers for ordinary domain errors
    do not catch it by accident.
    """

    code: str = "fatal_environment_fault"

    def __init__(self, message: Optional[str] = None):
        self.message = message or get_translated_message("password_hashing_failed")
        super().__init__(self.message)
