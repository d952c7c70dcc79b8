"""Federation descriptors: a closed family of variants keyed by uuid.

Each concrete federation kind is its own model with its own fields. All of
them share the `Federation` base and are told apart by the `type`
discriminator, so a stored record can always be rebuilt as the exact
variant it was created as.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .audit import AuditFields


class FederationType(str, Enum):
    """The federation kinds the portal can manage."""

    FATE = "FATE"
    OPENFL = "OpenFL"


class Federation(AuditFields):
    """Common shape of every federation descriptor.

    Attributes:
        uuid: Stable identifier and the repository lookup key.
        name: Display name of the federation.
        description: Free-form description.
        type: Discriminator naming the concrete variant.
    """

    model_config = ConfigDict(frozen=True)

    uuid: str = Field(default_factory=lambda: str(uuid4()), min_length=1, max_length=36)
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    type: str

    def identifier(self) -> str:
        return self.uuid

    def variant_fields(self) -> Dict[str, Any]:
        """The fields this variant adds on top of `Federation`, JSON-ready."""
        return self.model_dump(mode="json", exclude=set(Federation.model_fields))


class FATEFederation(Federation):
    """A FATE federation.

    Attributes:
        domain: The DNS domain the federation's sites are addressed under.
    """

    type: Literal["FATE"] = FederationType.FATE.value
    domain: str = Field(min_length=1)


class ShardDescriptorConfig(BaseModel):
    """Customised OpenFL shard descriptor shipped to every envoy."""

    model_config = ConfigDict(frozen=True)

    sample_shape: List[str] = Field(default_factory=list)
    target_shape: List[str] = Field(default_factory=list)
    descriptor_python_files: Dict[str, str] = Field(default_factory=dict)
    envoy_config_yaml: str = ""


class OpenFLFederation(Federation):
    """An OpenFL federation.

    Attributes:
        domain: The DNS domain the federation's envoys are addressed under.
        use_customized_shard_descriptor: Whether `shard_descriptor_config`
            replaces the default shard descriptor.
        shard_descriptor_config: The customised descriptor, if any.
    """

    type: Literal["OpenFL"] = FederationType.OPENFL.value
    domain: str = Field(min_length=1)
    use_customized_shard_descriptor: bool = False
    shard_descriptor_config: Optional[ShardDescriptorConfig] = None


FederationDescriptor = Annotated[
    Union[FATEFederation, OpenFLFederation],
    Field(discriminator="type"),
]

_descriptor_adapter: TypeAdapter = TypeAdapter(FederationDescriptor)


def parse_federation(payload: Mapping[str, Any]) -> Federation:
    """Builds the concrete variant named by `payload["type"]`.

    Raises:
        pydantic.ValidationError: If the type is unknown or fields are invalid.
    """
    return _descriptor_adapter.validate_python(dict(payload))
