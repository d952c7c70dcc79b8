"""Unit tests for the settings classes."""

import pytest
from pydantic import ValidationError

from siteportal.core.config.auth import AuthSettings
from siteportal.core.config.settings import Settings, settings


@pytest.mark.unit
def test_default_policy_bounds():
    auth = AuthSettings()
    assert auth.PASSWORD_MIN_LENGTH == 8
    assert auth.PASSWORD_MAX_LENGTH == 20


@pytest.mark.unit
def test_protected_account_names_default():
    assert AuthSettings().PROTECTED_ACCOUNT_NAMES == {"Admin"}


@pytest.mark.unit
def test_protected_account_names_from_comma_separated_string():
    auth = AuthSettings(PROTECTED_ACCOUNT_NAMES="Admin, root ,")
    assert auth.PROTECTED_ACCOUNT_NAMES == {"Admin", "root"}


@pytest.mark.unit
def test_protected_account_names_from_environment(monkeypatch):
    monkeypatch.setenv("PROTECTED_ACCOUNT_NAMES", "Admin,ops")
    assert Settings().PROTECTED_ACCOUNT_NAMES == {"Admin", "ops"}


@pytest.mark.unit
def test_inconsistent_password_bounds_rejected():
    with pytest.raises(ValidationError, match="must not exceed"):
        AuthSettings(PASSWORD_MIN_LENGTH=21, PASSWORD_MAX_LENGTH=20)


@pytest.mark.unit
@pytest.mark.parametrize("work_factor", [3, 32])
def test_work_factor_range(work_factor):
    with pytest.raises(ValidationError):
        AuthSettings(BCRYPT_WORK_FACTOR=work_factor)


@pytest.mark.unit
def test_test_environment_uses_cheap_hashing():
    assert settings.APP_ENV == "test"
    assert settings.BCRYPT_WORK_FACTOR == 4
    assert settings.DATABASE_URL == "sqlite://"


@pytest.mark.unit
def test_supported_languages_split():
    assert Settings(SUPPORTED_LANGUAGES="en, fa").SUPPORTED_LANGUAGES == ["en", "fa"]
