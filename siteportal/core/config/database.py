"""
Database connection settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Defines settings for the database backing the account and federation stores.

    Any SQLAlchemy URL is accepted. The default is a private in-memory SQLite
    database, which is what the test-suite and local experiments use; a
    deployment points DATABASE_URL at its PostgreSQL or MySQL instance.

    Security Note:
        - DATABASE_URL may embed credentials and must never be logged.
    """
    DATABASE_URL: str = "sqlite://"
    DATABASE_ECHO: bool = False
    DATABASE_CONNECT_RETRIES: int = Field(ge=1, default=3)
