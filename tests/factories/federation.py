"""Factories for generating fake federation descriptors for testing."""

from typing import Optional

from faker import Faker

from siteportal.domain.entities.federation import (
    FATEFederation,
    OpenFLFederation,
    ShardDescriptorConfig,
)

fake = Faker()


def create_fake_fate_federation(uuid: Optional[str] = None, **overrides) -> FATEFederation:
    return FATEFederation(
        uuid=uuid if uuid is not None else fake.uuid4(),
        name=overrides.pop("name", f"fate-{fake.word()}"),
        description=overrides.pop("description", fake.sentence()),
        domain=overrides.pop("domain", fake.domain_name()),
        **overrides,
    )


def create_fake_openfl_federation(uuid: Optional[str] = None, customized: bool = True, **overrides) -> OpenFLFederation:
    shard_descriptor_config = None
    if customized:
        shard_descriptor_config = ShardDescriptorConfig(
            sample_shape=["784"],
            target_shape=["1"],
            descriptor_python_files={"mnist_shard_descriptor.py": "class MnistShardDescriptor: ...\n"},
            envoy_config_yaml="shard_descriptor:\n  template: mnist_shard_descriptor.MnistShardDescriptor\n",
        )
    return OpenFLFederation(
        uuid=uuid if uuid is not None else fake.uuid4(),
        name=overrides.pop("name", f"openfl-{fake.word()}"),
        description=overrides.pop("description", fake.sentence()),
        domain=overrides.pop("domain", fake.domain_name()),
        use_customized_shard_descriptor=customized,
        shard_descriptor_config=shard_descriptor_config,
        **overrides,
    )
