"""SQLModel table definitions for the portal stores.

The tables hold exactly the field sets the domain records must round-trip:
identity, name, credential hash and the flattened permission set for users;
identity plus a JSON payload of variant-specific fields for federations.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlmodel import Column, Field, SQLModel

from siteportal.domain.entities.audit import utcnow


class UserTable(SQLModel, table=True):
    """Row layout of the users table."""

    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    uuid: str = Field(sa_column=Column(String(36), unique=True, index=True, nullable=False))
    name: str = Field(sa_column=Column(String(255), unique=True, nullable=False))
    password: str = Field(sa_column=Column(String(255), nullable=False))
    site_portal_access: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    fateboard_access: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    notebook_access: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))


class FederationTable(SQLModel, table=True):
    """Row layout of the federations table.

    `type` names the variant; `payload` carries the fields that variant adds
    on top of the common federation columns.
    """

    __tablename__ = "federations"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    uuid: str = Field(sa_column=Column(String(36), unique=True, index=True, nullable=False))
    name: str = Field(sa_column=Column(String(255), nullable=False))
    description: str = Field(default="", sa_column=Column(String, nullable=False, default=""))
    type: str = Field(sa_column=Column(String(32), index=True, nullable=False))
    payload: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))
