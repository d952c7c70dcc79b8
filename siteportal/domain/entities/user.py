"""The User aggregate and the record its repository stores.

`User` is the consistency boundary for an account: every change to its
permissions or password goes through a method here, is checked against the
account invariants, and reaches the store only when the checks pass. The
in-memory view is updated after the store accepted the change, so the two
never disagree about the outcome of a call.
"""

from datetime import datetime
from typing import TYPE_CHECKING, AbstractSet, Optional, Union
from uuid import uuid4

import structlog
from pydantic import ConfigDict, Field, field_validator

from siteportal.core.config.settings import settings
from siteportal.core.exceptions import (
    AccessDeniedError,
    AdminLockoutViolationError,
    InvalidCredentialError,
    PasswordUnchangedError,
    PersistenceError,
    SitePortalError,
)
from siteportal.domain.services.auth.password_policy import PasswordPolicy
from siteportal.domain.value_objects.password import HashedPassword
from siteportal.domain.value_objects.permission_info import Capability, PermissionInfo

from .audit import AuditFields, utcnow

if TYPE_CHECKING:
    from siteportal.domain.interfaces.repositories import IUserRepository

logger = structlog.get_logger(__name__)


class UserData(AuditFields):
    """The persisted field set of a user.

    Attributes:
        id: Store-assigned identifier; None until the record is created.
        uuid: Unique external reference, immutable after creation.
        name: Unique, non-empty login and display name, immutable.
        hashed_password: bcrypt hash of the current password.
        permission_info: The capabilities the user holds.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    uuid: str = Field(default_factory=lambda: str(uuid4()), min_length=1, max_length=36)
    name: str = Field(min_length=1, max_length=255)
    hashed_password: str
    permission_info: PermissionInfo = Field(default_factory=PermissionInfo)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("User name cannot be blank")
        return value

    @field_validator("hashed_password")
    @classmethod
    def validate_hashed_password(cls, value: str) -> str:
        """Refuses anything that is not a bcrypt hash, plaintext included."""
        return HashedPassword(value).value

    def __repr__(self) -> str:
        return f"UserData(id={self.id!r}, uuid={self.uuid!r}, name={self.name!r})"


class User:
    """Represents a user of the site and acts as an Aggregate Root.

    The aggregate holds the user's identity, credential hash and permissions,
    and delegates durable reads and writes to an injected `IUserRepository`.

    Invariant: a user whose name is one of `protected_account_names` can
    never have site-portal access revoked.
    """

    def __init__(
        self,
        repository: "IUserRepository",
        data: Optional[UserData] = None,
        password_policy: Optional[PasswordPolicy] = None,
        protected_account_names: Optional[AbstractSet[str]] = None,
    ):
        self._repository = repository
        self._data = data
        self._password_policy = password_policy or PasswordPolicy()
        if protected_account_names is None:
            protected_account_names = settings.PROTECTED_ACCOUNT_NAMES
        self._protected_account_names = frozenset(protected_account_names)

    @classmethod
    def load(cls, repository: "IUserRepository", user_id: int, **kwargs) -> "User":
        """Builds a user from the record stored under `user_id`.

        Raises:
            UserNotFoundError: If no user has this id.
        """
        user = cls(repository, **kwargs)
        user.load_by_id(user_id)
        return user

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def data(self) -> UserData:
        if self._data is None:
            raise RuntimeError("User has not been loaded")
        return self._data

    @property
    def id(self) -> Optional[int]:
        return self.data.id

    @property
    def uuid(self) -> str:
        return self.data.uuid

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def hashed_password(self) -> str:
        return self.data.hashed_password

    @property
    def permission_info(self) -> PermissionInfo:
        return self.data.permission_info

    @property
    def created_at(self) -> datetime:
        return self.data.created_at

    @property
    def updated_at(self) -> Optional[datetime]:
        return self.data.updated_at

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self.data.deleted_at

    @property
    def is_protected(self) -> bool:
        return self.name in self._protected_account_names

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load_by_id(self, user_id: Optional[int] = None) -> None:
        """Reads the user's fields from the repository.

        Args:
            user_id: The id to load; defaults to the id already held.

        Raises:
            UserNotFoundError: If no user has this id.
            PersistenceError: On any storage fault.
        """
        if user_id is None:
            user_id = self.id
        self._data = self._call_repository(self._repository.load_by_id, user_id)
        logger.debug("User loaded", user_id=user_id)

    def update_permission_info(self, info: PermissionInfo) -> None:
        """Replaces the user's permissions with `info` as a whole.

        Raises:
            AdminLockoutViolationError: If the user is protected and `info`
                revokes site-portal access. Nothing is changed or stored.
            PersistenceError: If the repository fails. The in-memory
                permissions keep their previous value.
        """
        if self.is_protected and not info.site_portal_access:
            logger.warning(
                "Refused to revoke site portal access of protected account",
                user_id=self.id,
                user_name=self.name,
            )
            raise AdminLockoutViolationError(self.name)

        updated_at = utcnow()
        self._call_repository(
            self._repository.update_permission_info_by_id, self.id, info, updated_at=updated_at
        )
        self._data = self.data.model_copy(update={"permission_info": info, "updated_at": updated_at})
        logger.info("User permissions updated", user_id=self.id, **info.as_dict())

    def check_access(self, capability: Union[Capability, str] = Capability.SITE_PORTAL) -> None:
        """Raises AccessDeniedError unless `capability` is granted.

        A capability name that is not a known `Capability` is never granted.
        """
        try:
            granted = self.permission_info.grants(capability)
        except ValueError:
            logger.warning(
                "Access check for unknown capability",
                user_id=self.id,
                capability=str(capability),
            )
            raise AccessDeniedError(self.name, str(capability)) from None
        if not granted:
            raise AccessDeniedError(self.name, Capability(capability).value)

    def check_site_portal_access(self) -> None:
        self.check_access(Capability.SITE_PORTAL)

    def update_password(self, current_password: str, new_password: str) -> None:
        """Changes the user's password.

        The current password is verified first, then the new one is compared
        with it and validated against the password policy, then hashed and
        stored.

        Raises:
            InvalidCredentialError: If `current_password` is wrong. The
                repository is not called.
            PasswordUnchangedError: If the new password equals the current one.
            PasswordValidationError: Whatever the password policy reports.
            FatalEnvironmentFault: If the hashing primitive fails.
            PersistenceError: If the repository fails.
        """
        request_logger = logger.bind(user_id=self.id, operation="password_change")

        if not self._password_policy.verify(self.hashed_password, current_password):
            request_logger.warning("Password change rejected: current password mismatch")
            raise InvalidCredentialError()

        if new_password == current_password:
            raise PasswordUnchangedError()

        self._password_policy.validate(new_password)

        hashed_password = self._password_policy.hash(new_password)

        updated_at = utcnow()
        self._call_repository(
            self._repository.update_password_by_id, self.id, hashed_password, updated_at=updated_at
        )
        self._data = self.data.model_copy(
            update={"hashed_password": hashed_password, "updated_at": updated_at}
        )
        request_logger.info("Password changed")

    change_password = update_password

    def _call_repository(self, operation, *args, **kwargs):
        """Runs a repository call, surfacing foreign faults as PersistenceError."""
        try:
            return operation(*args, **kwargs)
        except SitePortalError:
            raise
        except Exception as exc:
            logger.error(
                "User repository call failed",
                operation=getattr(operation, "__name__", repr(operation)),
                error_type=type(exc).__name__,
            )
            raise PersistenceError() from exc

    def __repr__(self) -> str:
        if self._data is None:
            return "User(<not loaded>)"
        return f"User(id={self.id!r}, name={self.name!r})"
