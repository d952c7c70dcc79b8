"""Feature tests: an account holder changing their password end to end.

The account lives in a real SQL store; the store is wrapped in a spy so the
journey can assert exactly when it was written to.
"""

import pytest

from siteportal.core.exceptions import (
    AdminLockoutViolationError,
    InvalidCredentialError,
    PasswordTooShortError,
    PasswordUnchangedError,
)
from siteportal.domain.entities.user import User, UserData
from siteportal.domain.value_objects.permission_info import PermissionInfo
from siteportal.infrastructure.repositories.user_repository import UserRepository
from tests.factories.user import CURRENT_PASSWORD


@pytest.fixture
def repository(db_session):
    return UserRepository(db_session)


@pytest.fixture
def alice(repository, password_policy, current_password_hash):
    data = repository.create(
        UserData(
            name="alice",
            hashed_password=current_password_hash,
            permission_info=PermissionInfo(site_portal_access=True),
        )
    )
    return User.load(repository, data.id, password_policy=password_policy)


@pytest.mark.feature
def test_alice_changes_her_password(alice, repository, password_policy, current_password_hash, mocker):
    store_password = mocker.spy(repository, "update_password_by_id")

    with pytest.raises(InvalidCredentialError):
        alice.change_password("wrong", "NewPass1")
    store_password.assert_not_called()

    with pytest.raises(PasswordTooShortError):
        alice.change_password(CURRENT_PASSWORD, "weak")
    store_password.assert_not_called()

    with pytest.raises(PasswordUnchangedError):
        alice.change_password(CURRENT_PASSWORD, CURRENT_PASSWORD)
    store_password.assert_not_called()

    alice.change_password(CURRENT_PASSWORD, "GoodPass1")

    store_password.assert_called_once()
    user_id, new_hash = store_password.call_args.args
    assert user_id == alice.id
    assert new_hash != current_password_hash

    stored = repository.load_by_id(alice.id)
    assert stored.hashed_password == new_hash
    assert password_policy.verify(stored.hashed_password, "GoodPass1")
    assert not password_policy.verify(stored.hashed_password, CURRENT_PASSWORD)

    # The old password no longer unlocks the account.
    with pytest.raises(InvalidCredentialError):
        alice.change_password(CURRENT_PASSWORD, "OtherPass2")


@pytest.mark.feature
def test_admin_keeps_portal_access_across_reloads(repository, password_policy, current_password_hash, mocker):
    data = repository.create(
        UserData(name="Admin", hashed_password=current_password_hash,
                 permission_info=PermissionInfo.full_access())
    )
    store_permissions = mocker.spy(repository, "update_permission_info_by_id")
    admin = User.load(repository, data.id, password_policy=password_policy,
                      protected_account_names={"Admin"})

    for revoked in (PermissionInfo(), PermissionInfo(fateboard_access=True, notebook_access=True)):
        with pytest.raises(AdminLockoutViolationError):
            admin.update_permission_info(revoked)

    store_permissions.assert_not_called()
    admin.load_by_id()
    admin.check_site_portal_access()
    assert admin.permission_info == PermissionInfo.full_access()
