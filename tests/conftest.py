import os

# Cheap bcrypt and the test environment for every settings object built below.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")

import pytest
from sqlmodel import Session

from siteportal.core.logging import configure_logging
from siteportal.domain.interfaces.repositories import IUserRepository
from siteportal.domain.services.auth.password_policy import PasswordPolicy
from siteportal.infrastructure.database.database import create_db_and_tables, create_db_engine

from tests.factories.user import CURRENT_PASSWORD


@pytest.fixture(scope="session", autouse=True)
def logging_setup():
    configure_logging(log_level="DEBUG", json_logs=False)


@pytest.fixture(scope="session")
def password_policy():
    """A policy with the production rules and a low bcrypt cost."""
    return PasswordPolicy(min_length=8, max_length=20, work_factor=4)


@pytest.fixture(scope="session")
def current_password_hash(password_policy):
    return password_policy.hash(CURRENT_PASSWORD)


@pytest.fixture
def user_repository(mocker):
    """A mocked IUserRepository with the port's exact signatures."""
    return mocker.create_autospec(IUserRepository, instance=True)


@pytest.fixture
def engine():
    """A fresh private in-memory SQLite database per test."""
    engine = create_db_engine("sqlite://", echo=False)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session
