"""
refseed - Dependency-aware test data seeding

Seeds interrelated records from a graph of named factories, reusing
dependencies already created in the same resolution tree.
"""

from refseed.decorators import run_seed_plans, seed_data
from refseed.exceptions import (
    ConfigurationError,
    DuplicateFactoryError,
    FactoryNotFoundError,
    InvalidForeignKeyError,
    RefSeedError,
)
from refseed.models import Deferred, Factory, Ref, SeedResult, SeedRow, Seeds, lazy, ref
from refseed.providers import FakerProvider
from refseed.seeder import Seeder
from refseed.writers import InMemoryWriter, PostgresWriter, Writer

__version__ = "0.1.0"

__all__ = [
    "Seeder",
    "Factory",
    "Ref",
    "ref",
    "SeedResult",
    "Seeds",
    "SeedRow",
    "Deferred",
    "lazy",
    "Writer",
    "InMemoryWriter",
    "PostgresWriter",
    "FakerProvider",
    "seed_data",
    "run_seed_plans",
    "RefSeedError",
    "ConfigurationError",
    "FactoryNotFoundError",
    "DuplicateFactoryError",
    "InvalidForeignKeyError",
]
