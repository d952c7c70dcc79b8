"""Federation Repository implementation using SQLModel.

One `FederationRepository` is bound to one federation variant (for example
`FederationRepository(session, FATEFederation)`); it only sees rows of that
variant. Common fields are stored as columns and the variant's own fields
as a JSON payload, so a record comes back exactly as it was created.

Deletion is a soft delete: `deleted_at` is set, the row disappears from
`get_by_uuid`, `list` and `delete_by_uuid`, and its uuid stays reserved.
"""

from typing import List, NoReturn, Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select
from structlog import get_logger

from siteportal.core.exceptions import (
    DuplicateIdentifierError,
    FederationNotFoundError,
    PersistenceError,
)
from siteportal.domain.entities.audit import utcnow
from siteportal.domain.entities.federation import Federation, parse_federation
from siteportal.domain.interfaces.repositories import FederationT, IFederationRepository
from siteportal.infrastructure.database.models import FederationTable

logger = get_logger(__name__)


def _row_fields(row: FederationTable) -> dict:
    return {
        **row.payload,
        "uuid": row.uuid,
        "name": row.name,
        "description": row.description,
        "type": row.type,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
        "deleted_at": row.deleted_at,
    }


class FederationRepository(IFederationRepository[FederationT]):
    """SQLModel implementation of IFederationRepository for one variant."""

    def __init__(self, db_session: Session, variant: Type[FederationT]):
        self.db_session = db_session
        self.variant = variant
        self.federation_type: str = variant.model_fields["type"].default
        self._log = logger.bind(federation_type=self.federation_type)

    def create(self, federation: FederationT) -> None:
        if not isinstance(federation, self.variant):
            raise TypeError(
                f"{type(federation).__name__} cannot be stored in a "
                f"{self.variant.__name__} repository"
            )
        if federation.is_deleted:
            raise ValueError(f"Federation {federation.uuid} is marked deleted and cannot be created")
        try:
            taken = self.db_session.exec(
                select(FederationTable.id).where(FederationTable.uuid == federation.identifier())
            ).first()
            if taken is not None:
                self._log.warning("Federation identifier already taken", uuid=federation.uuid)
                raise DuplicateIdentifierError(federation.identifier())

            self.db_session.add(
                FederationTable(
                    uuid=federation.uuid,
                    name=federation.name,
                    description=federation.description,
                    type=federation.type,
                    payload=federation.variant_fields(),
                    created_at=federation.created_at,
                    updated_at=federation.updated_at,
                    deleted_at=federation.deleted_at,
                )
            )
            self.db_session.commit()
        except IntegrityError as e:
            self.db_session.rollback()
            raise DuplicateIdentifierError(federation.identifier()) from e
        except SQLAlchemyError as e:
            self._fail("create", e)
        self._log.info("Federation created", uuid=federation.uuid)

    def list(self) -> List[FederationT]:
        try:
            rows = self.db_session.exec(
                select(FederationTable).where(
                    FederationTable.type == self.federation_type,
                    FederationTable.deleted_at.is_(None),
                )
            ).all()
        except SQLAlchemyError as e:
            self._fail("list", e)
        return [self.variant.model_validate(_row_fields(row)) for row in rows]

    def list_all(self) -> List[Federation]:
        """Returns live federations of every variant, each as its own type."""
        try:
            rows = self.db_session.exec(
                select(FederationTable).where(FederationTable.deleted_at.is_(None))
            ).all()
        except SQLAlchemyError as e:
            self._fail("list_all", e)
        return [parse_federation(_row_fields(row)) for row in rows]

    def delete_by_uuid(self, uuid: str) -> None:
        row = self._get_live_row(uuid, operation="delete_by_uuid")
        try:
            row.deleted_at = utcnow()
            self.db_session.add(row)
            self.db_session.commit()
        except SQLAlchemyError as e:
            self._fail("delete_by_uuid", e)
        self._log.info("Federation deleted", uuid=uuid)

    def get_by_uuid(self, uuid: str) -> FederationT:
        row = self._get_live_row(uuid, operation="get_by_uuid")
        return self.variant.model_validate(_row_fields(row))

    def _get_live_row(self, uuid: str, operation: str) -> FederationTable:
        row: Optional[FederationTable] = None
        try:
            row = self.db_session.exec(
                select(FederationTable).where(
                    FederationTable.uuid == uuid,
                    FederationTable.type == self.federation_type,
                    FederationTable.deleted_at.is_(None),
                )
            ).first()
        except SQLAlchemyError as e:
            self._fail(operation, e)
        if row is None:
            self._log.debug("Federation lookup missed", uuid=uuid, operation=operation)
            raise FederationNotFoundError(uuid)
        return row

    def _fail(self, operation: str, error: SQLAlchemyError) -> NoReturn:
        self.db_session.rollback()
        self._log.error(
            "Federation repository operation failed",
            operation=operation,
            error_type=type(error).__name__,
        )
        raise PersistenceError() from error
