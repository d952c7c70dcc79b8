"""Repository interfaces for abstracting data persistence in the domain layer.

This module defines the abstract base classes (interfaces) for repositories,
which act as "ports" in the context of Hexagonal Architecture. The domain
layer uses these interfaces to interact with persistence mechanisms without
being coupled to any specific technology.

The concrete implementations reside in the `infrastructure` layer, acting as
"adapters" that translate the domain's requests into database queries.

Every implementation must make each single-record write atomic: two writes
to the same id never interleave into a value that is neither the old nor the
new one. No implementation is required to isolate a sequence of calls.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from siteportal.domain.entities.federation import Federation
from siteportal.domain.entities.user import UserData
from siteportal.domain.value_objects.permission_info import PermissionInfo

FederationT = TypeVar("FederationT", bound=Federation)


class IUserRepository(ABC):
    """An interface defining the contract for user persistence operations.

    All operations that touch an existing user are keyed by its immutable
    integer id, never by name.
    """

    @abstractmethod
    def load_by_id(self, user_id: int) -> UserData:
        """Retrieves a user by their unique identifier.

        Raises:
            UserNotFoundError: If no user has this id.
            PersistenceError: On any storage fault.
        """
        raise NotImplementedError

    @abstractmethod
    def update_permission_info_by_id(
        self, user_id: int, info: PermissionInfo, updated_at: Optional[datetime] = None
    ) -> None:
        """Replaces the stored permission set of a user.

        `updated_at` is stored as the modification time when given, so the
        caller and the store agree on it.

        Raises:
            UserNotFoundError: If no user has this id.
            PersistenceError: On any storage fault.
        """
        raise NotImplementedError

    @abstractmethod
    def update_password_by_id(
        self, user_id: int, hashed_password: str, updated_at: Optional[datetime] = None
    ) -> None:
        """Replaces the stored credential hash of a user.

        `updated_at` has the same meaning as in `update_permission_info_by_id`.

        Raises:
            UserNotFoundError: If no user has this id.
            PersistenceError: On any storage fault.
        """
        raise NotImplementedError

    @abstractmethod
    def create(self, data: UserData) -> UserData:
        """Stores a new user, used by provisioning flows.

        Returns:
            The stored record, with its assigned id.

        Raises:
            DuplicateIdentifierError: If the name or uuid is already taken.
            PersistenceError: On any storage fault.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_name(self, name: str) -> UserData:
        """Retrieves a user by their unique name.

        Raises:
            UserNotFoundError: If no user has this name.
            PersistenceError: On any storage fault.
        """
        raise NotImplementedError


class IFederationRepository(ABC, Generic[FederationT]):
    """An interface for identifier-keyed storage of federation descriptors.

    A repository is bound to one federation variant. It does not interpret
    variant-specific fields; it only guarantees that whatever was stored under
    an identifier is returned unchanged. There is no update operation: a
    configuration change is a delete followed by a create.
    """

    @abstractmethod
    def create(self, federation: FederationT) -> None:
        """Stores a new federation with its full field set.

        Raises:
            DuplicateIdentifierError: If the identifier already exists; the
                existing record is left unchanged.
            ValueError: If the descriptor is already marked deleted.
            PersistenceError: On any storage fault.
        """
        raise NotImplementedError

    @abstractmethod
    def list(self) -> List[FederationT]:
        """Returns every stored federation of this repository's variant.

        The order is unspecified. An empty list is returned when there are
        none.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_by_uuid(self, uuid: str) -> None:
        """Removes the federation with this identifier.

        Deletion is not idempotent: deleting an already deleted identifier
        fails again.

        Raises:
            FederationNotFoundError: If no live record has this identifier.
            PersistenceError: On any storage fault.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> FederationT:
        """Retrieves the federation with this identifier.

        Raises:
            FederationNotFoundError: If no live record has this identifier.
            PersistenceError: On any storage fault.
        """
        raise NotImplementedError
