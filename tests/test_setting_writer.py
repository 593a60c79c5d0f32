"""Test writer configuration."""

import pytest
from schemas import channel_factory

from refseed import ConfigurationError, FactoryNotFoundError, InMemoryWriter, Seeder


@pytest.mark.asyncio
async def test_seed_without_writer_raises():
    """Test every entry point fails before resolution when writer is unset."""
    seeder = Seeder()

    with pytest.raises(ConfigurationError, match="Writer is not set"):
        await seeder.seed("user")
    with pytest.raises(ConfigurationError):
        await seeder.seed_object("user")
    with pytest.raises(ConfigurationError):
        await seeder.seed_many("user", count=2)
    with pytest.raises(ConfigurationError):
        await seeder.clean_up()


@pytest.mark.asyncio
async def test_writer_checked_before_factory_lookup():
    """Test a missing writer is reported even for unknown factories."""
    seeder = Seeder()
    seeder.register(channel_factory())

    with pytest.raises(ConfigurationError):
        await seeder.seed("unknown")


@pytest.mark.asyncio
async def test_set_writer():
    """Test a writer set later is used."""
    seeder = Seeder()
    writer = InMemoryWriter()
    seeder.set_writer(writer)

    assert seeder.writer is writer
    with pytest.raises(FactoryNotFoundError, match="Factory 'user' was not found"):
        await seeder.seed("user")
