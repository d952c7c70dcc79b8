"""User Repository implementation using SQLModel.

This module provides the SQL adapter behind `IUserRepository`. Each write
runs in its own transaction against a row fetched with a row lock, so one
update to a user id never interleaves with another update to the same id.

Storage faults surface as `PersistenceError` with the driver exception kept
as the cause; nothing here retries.
"""

from datetime import datetime
from typing import NoReturn, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select
from structlog import get_logger

from siteportal.core.exceptions import DuplicateIdentifierError, PersistenceError, UserNotFoundError
from siteportal.domain.entities.audit import utcnow
from siteportal.domain.entities.user import UserData
from siteportal.domain.interfaces.repositories import IUserRepository
from siteportal.domain.value_objects.permission_info import PermissionInfo
from siteportal.infrastructure.database.models import UserTable

logger = get_logger(__name__)


def _to_data(row: UserTable) -> UserData:
    return UserData(
        id=row.id,
        uuid=row.uuid,
        name=row.name,
        hashed_password=row.password,
        permission_info=PermissionInfo(
            site_portal_access=row.site_portal_access,
            fateboard_access=row.fateboard_access,
            notebook_access=row.notebook_access,
        ),
        created_at=row.created_at,
        updated_at=row.updated_at,
        deleted_at=row.deleted_at,
    )


class UserRepository(IUserRepository):
    """SQLModel implementation of IUserRepository.

    The repository depends on an injected `Session`; it commits each write
    itself and rolls the session back when a write fails.
    """

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def load_by_id(self, user_id: int) -> UserData:
        row = self._get_row(user_id, operation="load_by_id")
        return _to_data(row)

    def get_by_name(self, name: str) -> UserData:
        try:
            row = self.db_session.exec(select(UserTable).where(UserTable.name == name)).first()
        except SQLAlchemyError as e:
            self._fail("get_by_name", e)
        if row is None:
            logger.debug("User lookup by name missed", operation="get_by_name")
            raise UserNotFoundError()
        return _to_data(row)

    def create(self, data: UserData) -> UserData:
        try:
            existing = self._find_taken(data)
            if existing is not None:
                identifier = data.name if existing.name == data.name else data.uuid
                logger.warning("User identifier already taken", operation="create")
                raise DuplicateIdentifierError(identifier)

            row = UserTable(
                uuid=data.uuid,
                name=data.name,
                password=data.hashed_password,
                created_at=data.created_at,
                updated_at=data.updated_at,
                deleted_at=data.deleted_at,
                **data.permission_info.as_dict(),
            )
            self.db_session.add(row)
            self.db_session.commit()
            self.db_session.refresh(row)
        except IntegrityError as e:
            # A concurrent writer took the name or uuid after the check above.
            self.db_session.rollback()
            raise DuplicateIdentifierError(self._collided_identifier(data)) from e
        except SQLAlchemyError as e:
            self._fail("create", e)

        logger.info("User created", user_id=row.id, operation="create")
        return _to_data(row)

    def update_permission_info_by_id(
        self, user_id: int, info: PermissionInfo, updated_at: Optional[datetime] = None
    ) -> None:
        row = self._get_row(user_id, operation="update_permission_info_by_id", for_update=True)
        try:
            row.site_portal_access = info.site_portal_access
            row.fateboard_access = info.fateboard_access
            row.notebook_access = info.notebook_access
            row.updated_at = updated_at or utcnow()
            self.db_session.add(row)
            self.db_session.commit()
        except SQLAlchemyError as e:
            self._fail("update_permission_info_by_id", e)
        logger.debug("User permissions stored", user_id=user_id)

    def update_password_by_id(
        self, user_id: int, hashed_password: str, updated_at: Optional[datetime] = None
    ) -> None:
        row = self._get_row(user_id, operation="update_password_by_id", for_update=True)
        try:
            row.password = hashed_password
            row.updated_at = updated_at or utcnow()
            self.db_session.add(row)
            self.db_session.commit()
        except SQLAlchemyError as e:
            self._fail("update_password_by_id", e)
        logger.debug("User password stored", user_id=user_id)

    def _find_taken(self, data: UserData) -> Optional[UserTable]:
        return self.db_session.exec(
            select(UserTable).where(or_(UserTable.name == data.name, UserTable.uuid == data.uuid))
        ).first()

    def _collided_identifier(self, data: UserData) -> str:
        try:
            name_taken = self.db_session.exec(
                select(UserTable.id).where(UserTable.name == data.name)
            ).first()
        except SQLAlchemyError as e:
            self._fail("create", e)
        return data.name if name_taken is not None else data.uuid

    def _get_row(self, user_id: int, operation: str, for_update: bool = False) -> UserTable:
        try:
            row = self.db_session.get(UserTable, user_id, with_for_update=for_update)
        except SQLAlchemyError as e:
            self._fail(operation, e)
        if row is None:
            logger.debug("User lookup by ID missed", user_id=user_id, operation=operation)
            raise UserNotFoundError()
        return row

    def _fail(self, operation: str, error: SQLAlchemyError) -> NoReturn:
        self.db_session.rollback()
        logger.error(
            "User repository operation failed",
            operation=operation,
            error_type=type(error).__name__,
        )
        raise PersistenceError() from error
