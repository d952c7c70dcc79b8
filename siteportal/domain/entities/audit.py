"""Audit timestamps shared by every persisted record."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form every store round-trips."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuditFields(BaseModel):
    """Explicit creation, modification and deletion timestamps.

    Attributes:
        created_at: When the record was created.
        updated_at: When the record was last modified, if ever.
        deleted_at: When the record was soft-deleted. A record with a
            `deleted_at` is invisible to lookups but keeps its identifier.
    """

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at", "deleted_at")
    @classmethod
    def normalize_to_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Converts aware datetimes to naive UTC so stored values compare equal."""
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
