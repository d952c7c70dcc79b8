"""Permission value object describing what a user may access."""

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Union


class Capability(str, Enum):
    """A capability a user account can be granted.

    Attributes:
        SITE_PORTAL: Access to the site portal itself.
        FATEBOARD: Access to the FATE board of the site.
        NOTEBOOK: Access to the hosted notebook environment.
    """

    SITE_PORTAL = "site_portal_access"
    FATEBOARD = "fateboard_access"
    NOTEBOOK = "notebook_access"


@dataclass(frozen=True)
class PermissionInfo:
    """Immutable set of grants held by a user.

    A user's permissions are always replaced wholesale with a new
    `PermissionInfo`; they are never patched field by field. That lets the
    aggregate check the entire new set against its invariants at once.

    Attributes:
        site_portal_access: Whether the user may log in to the site portal.
        fateboard_access: Whether the user may open the FATE board.
        notebook_access: Whether the user may open the notebook environment.
    """

    site_portal_access: bool = False
    fateboard_access: bool = False
    notebook_access: bool = False

    def __post_init__(self) -> None:
        for field in fields(self):
            if not isinstance(getattr(self, field.name), bool):
                raise ValueError(f"{field.name} must be a bool")

    def grants(self, capability: Union[Capability, str]) -> bool:
        """Returns whether `capability` is granted.

        Raises:
            ValueError: If `capability` does not name a known capability.
        """
        return getattr(self, Capability(capability).value)

    def with_grant(self, capability: Union[Capability, str], granted: bool) -> "PermissionInfo":
        """Returns a copy with a single capability set to `granted`."""
        return replace(self, **{Capability(capability).value: granted})

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PermissionInfo":
        """Builds a value object from a mapping keyed by capability name.

        Missing capabilities default to not granted.

        Raises:
            ValueError: If the mapping holds an unknown capability name.
        """
        unknown = set(data) - {c.value for c in Capability}
        if unknown:
            raise ValueError(f"Unknown capabilities: {', '.join(sorted(unknown))}")
        return cls(**dict(data))

    @classmethod
    def full_access(cls) -> "PermissionInfo":
        return cls(site_portal_access=True, fateboard_access=True, notebook_access=True)
