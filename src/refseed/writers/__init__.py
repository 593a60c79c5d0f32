"""Writer implementations for persisting seeded records."""

from refseed.writers.base import Writer
from refseed.writers.memory import InMemoryWriter
from refseed.writers.postgres import PostgresWriter

__all__ = ["Writer", "InMemoryWriter", "PostgresWriter"]
