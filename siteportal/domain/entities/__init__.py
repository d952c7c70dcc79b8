"""Export domain entities for use across the package."""

from .audit import AuditFields, utcnow
from .federation import (
    FATEFederation,
    Federation,
    FederationDescriptor,
    FederationType,
    OpenFLFederation,
    ShardDescriptorConfig,
    parse_federation,
)
from .user import User, UserData

__all__ = [
    "AuditFields",
    "FATEFederation",
    "Federation",
    "FederationDescriptor",
    "FederationType",
    "OpenFLFederation",
    "ShardDescriptorConfig",
    "User",
    "UserData",
    "parse_federation",
    "utcnow",
]
