"""Writer interface."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Writer(Protocol):
    """
    Persistence collaborator used by the Seeder.

    Implement this to seed into any storage. Both methods may suspend.

    Example:
        >>> class ListWriter:
        ...     def __init__(self):
        ...         self.rows = []
        ...     async def insert(self, table_name, primary_key, record):
        ...         self.rows.append((table_name, record))
        ...         return len(self.rows)
        ...     async def clean_up(self, tables=None):
        ...         self.rows.clear()
    """

    async def insert(self, table_name: str, primary_key: str, record: dict[str, Any]) -> Any:
        """
        Persist one record.

        Args:
            table_name: Target table
            primary_key: Name of the primary key field to generate
            record: Field values (without the primary key)

        Returns:
            Generated id, unique within the table
        """
        ...

    async def clean_up(self, tables: list[str] | None = None) -> None:
        """Clear the named tables, or every table if ``tables`` is None."""
        ...
