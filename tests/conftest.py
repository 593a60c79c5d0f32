"""Pytest configuration and shared fixtures."""

import pytest
import pytest_asyncio
from schemas import channel_factory, user_factory

from refseed import InMemoryWriter, Seeder, run_seed_plans
from refseed.decorators import get_seed_plans


@pytest.fixture
def writer() -> InMemoryWriter:
    """Provide an empty in-memory writer."""
    return InMemoryWriter()


@pytest.fixture
def seeder(writer: InMemoryWriter) -> Seeder:
    """Provide a seeder with the channel/user schema registered."""
    seeder = Seeder(writer)
    seeder.register(user_factory(), channel_factory())
    return seeder


@pytest_asyncio.fixture
async def seeds(request, seeder: Seeder):
    """
    Fixture for seeded records - works with @seed_data() decorator.

    The decorator populates this fixture by reading _seed_plans from the test function.
    """
    plans = get_seed_plans(request.function)
    if plans:
        return await run_seed_plans(seeder, plans)

    # No decorator, return None (test should not use this fixture)
    return None
