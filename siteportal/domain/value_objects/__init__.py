"""Domain value objects.

Value objects are immutable objects that describe domain concepts by their
attributes rather than their identity.
"""

from .password import HashedPassword
from .permission_info import Capability, PermissionInfo

__all__ = [
    "Capability",
    "HashedPassword",
    "PermissionInfo",
]
