"""
Database Connection Module

This module manages database connections using SQLModel and SQLAlchemy for the
account and federation stores. It provides engine construction, session
management, table creation and a retried health check.

**Security Note**: DATABASE_URL may embed credentials. It is never logged;
only the dialect name is.

Key Components:
    - create_db_engine: Builds an engine for a URL, with a shared connection
      for in-memory SQLite so every session sees the same database.
    - get_engine: The process-wide engine built from settings.
    - get_db_session: A context manager for sessions with rollback on error.
    - create_db_and_tables: Creates the portal tables.
    - check_database_health: Verifies connectivity, retrying transient faults.
"""

import time
from contextlib import contextmanager
from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import text
from sqlmodel import Session, SQLModel, create_engine
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from siteportal.core.config.settings import settings
from siteportal.core.logging import logger

# Register the table models on SQLModel.metadata.
from siteportal.infrastructure.database import models  # noqa: F401


def create_db_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Creates an engine for `url` (defaults to settings.DATABASE_URL).

    In-memory SQLite gets a single shared connection; every other backend
    gets a pre-pinged connection pool.
    """
    url = url or settings.DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo
    parsed = make_url(url)

    if parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, echo=echo, pool_pre_ping=True)

    logger.debug("database_engine_created", dialect=parsed.get_backend_name())
    return engine


@lru_cache(maxsize=None)
def get_engine() -> Engine:
    """The process-wide engine built from settings."""
    return create_db_engine()


@contextmanager
def get_db_session(engine: Optional[Engine] = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Rolls back on any exception raised inside the block, then re-raises it.

    Yields:
        Session: A database session
    """
    session = Session(engine or get_engine())
    start_time = time.time()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        logger.debug("database_session_closed", execution_time=time.time() - start_time)


def create_db_and_tables(engine: Optional[Engine] = None) -> None:
    """
    Creates database tables with logging.
    """
    start_time = time.time()
    SQLModel.metadata.create_all(engine or get_engine())
    logger.info(
        "database_tables_created",
        execution_time=time.time() - start_time,
        tables=list(SQLModel.metadata.tables.keys()),
    )


def check_database_health(engine: Optional[Engine] = None, attempts: Optional[int] = None) -> bool:
    """
    Performs a health check on the database connection.

    Transient connection faults (OperationalError) are retried with
    exponential backoff up to `attempts` times (settings.DATABASE_CONNECT_RETRIES
    by default).

    Returns:
        bool: True if the database answered, False otherwise.
    """
    start_time = time.time()
    retrying = Retrying(
        stop=stop_after_attempt(attempts or settings.DATABASE_CONNECT_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(OperationalError),
        reraise=True,
    )
    try:
        for attempt in retrying:
            with attempt:
                with get_db_session(engine) as session:
                    session.connection().execute(text("SELECT 1"))
    except OperationalError as e:
        logger.error(
            "database_health_check_failed",
            error_type=type(e).__name__,
            execution_time=time.time() - start_time,
        )
        return False

    logger.info("database_health_check_success", execution_time=time.time() - start_time)
    return True
