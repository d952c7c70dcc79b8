"""Unit tests for the exception taxonomy."""

import pytest

from siteportal.core.exceptions import (
    AccessDeniedError,
    AdminLockoutViolationError,
    DuplicateIdentifierError,
    EmptyPasswordError,
    FatalEnvironmentFault,
    FederationNotFoundError,
    InvalidCredentialError,
    NotFoundError,
    PasswordTooLongError,
    PasswordTooShortError,
    PasswordTooWeakError,
    PasswordUnchangedError,
    PasswordValidationError,
    PersistenceError,
    PolicyViolationError,
    SitePortalError,
    UserNotFoundError,
    ValidationError,
)

ALL_RECOVERABLE = [
    EmptyPasswordError(),
    PasswordTooShortError(min_length=8),
    PasswordTooLongError(max_length=20),
    PasswordTooWeakError(),
    PasswordUnchangedError(),
    InvalidCredentialError(),
    AdminLockoutViolationError("Admin"),
    AccessDeniedError("alice", "notebook_access"),
    UserNotFoundError(),
    FederationNotFoundError("f-1"),
    DuplicateIdentifierError("f-1"),
    PersistenceError(),
]


@pytest.mark.unit
def test_every_failure_kind_has_a_distinct_code():
    codes = [error.code for error in ALL_RECOVERABLE]
    assert len(codes) == len(set(codes))


@pytest.mark.unit
@pytest.mark.parametrize("error", ALL_RECOVERABLE, ids=lambda e: type(e).__name__)
def test_messages_are_translated(error):
    assert error.message
    assert error.message != error.code
    assert str(error) == error.message


@pytest.mark.unit
def test_password_failures_are_validation_errors():
    for error in ALL_RECOVERABLE[:6]:
        assert isinstance(error, PasswordValidationError)
        assert isinstance(error, ValidationError)


@pytest.mark.unit
def test_policy_and_lookup_branches():
    assert isinstance(AdminLockoutViolationError("Admin"), PolicyViolationError)
    assert isinstance(AccessDeniedError("a", "b"), PolicyViolationError)
    assert isinstance(UserNotFoundError(), NotFoundError)
    assert isinstance(FederationNotFoundError("x"), NotFoundError)
    assert not isinstance(PersistenceError(), (ValidationError, PolicyViolationError, NotFoundError))


@pytest.mark.unit
def test_formatted_messages():
    assert PasswordTooShortError(min_length=8).message == "Password must be at least 8 characters long"
    assert PasswordTooLongError(max_length=20).message == "Password must not exceed 20 characters"
    assert "Admin" in AdminLockoutViolationError("Admin").message
    assert "f-1" in FederationNotFoundError("f-1").message
    assert "f-1" in DuplicateIdentifierError("f-1").message


@pytest.mark.unit
def test_explicit_message_overrides_catalogue():
    error = UserNotFoundError("No user with id 5")
    assert error.message == "No user with id 5"
    assert error.code == "user_not_found"


@pytest.mark.unit
def test_fatal_fault_is_outside_the_recoverable_tree():
    fault = FatalEnvironmentFault()

    assert not isinstance(fault, SitePortalError)
    assert fault.code == "fatal_environment_fault"
    assert fault.message == "The password hashing primitive failed"
