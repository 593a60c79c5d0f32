"""In-memory writer for seeding without a database."""

from typing import Any


class InMemoryWriter:
    """
    In-memory writer for testing seed logic without a database.

    Simulates database behavior:
    - Generates primary keys (sequential ids per table starting from 1)
    - Stores rows in memory, in insertion order

    Use case: Fast unit tests, offline development, prototyping factories.
    """

    def __init__(self):
        """Initialize writer with empty state."""
        self.database: dict[str, list[dict[str, Any]]] = {}
        self._pk_sequences: dict[str, int] = {}

    async def insert(self, table_name: str, primary_key: str, record: dict[str, Any]) -> int:
        """
        Simulate a database insert (generate pk, store in memory).

        Returns:
            Generated primary key
        """
        record_id = self._pk_sequences.get(table_name, 0) + 1
        self._pk_sequences[table_name] = record_id

        self.database.setdefault(table_name, []).append({primary_key: record_id, **record})
        return record_id

    async def clean_up(self, tables: list[str] | None = None) -> None:
        """
        Clear tables and reset their sequences.

        Args:
            tables: Tables to clear (all tables if None)
        """
        if tables is None:
            self.clear()
            return

        for table in tables:
            self.database[table] = []
            self._pk_sequences.pop(table, None)

    def get_data(self, table_name: str) -> list[dict[str, Any]]:
        """
        Get in-memory rows for inspection.

        Args:
            table_name: Table name

        Returns:
            List of row dicts for the table
        """
        return self.database.get(table_name, [])

    def clear(self) -> None:
        """Clear all in-memory data and sequences."""
        self.database.clear()
        self._pk_sequences.clear()
