"""PostgreSQL writer - executes INSERT ... RETURNING through psycopg."""

import asyncio
import logging
from typing import Any

from psycopg import AsyncConnection, sql

logger = logging.getLogger(__name__)


class PostgresWriter:
    """
    Persist seeded records with direct INSERT statements.

    Uses PostgreSQL's RETURNING clause to capture the generated primary key.
    Statements are serialised on the connection, and each insert is committed
    so rows stay in place even if a later seed in the same call fails.
    """

    def __init__(self, conn: AsyncConnection, schema: str = "public"):
        """
        Initialize writer.

        Args:
            conn: Async PostgreSQL connection
            schema: Schema name for qualified table names
        """
        self.conn = conn
        self.schema = schema
        self._lock = asyncio.Lock()

    async def insert(self, table_name: str, primary_key: str, record: dict[str, Any]) -> Any:
        """
        Insert one row and return its generated primary key.

        Args:
            table_name: Table name (unqualified)
            primary_key: Primary key column to return
            record: Column values; a None primary key is left to the database

        Returns:
            Primary key value from RETURNING
        """
        values = {k: v for k, v in record.items() if not (k == primary_key and v is None)}
        table = sql.Identifier(self.schema, table_name)

        if values:
            query = sql.SQL("INSERT INTO {} ({}) VALUES ({}) RETURNING {}").format(
                table,
                sql.SQL(", ").join(sql.Identifier(col) for col in values),
                sql.SQL(", ").join(sql.Placeholder() for _ in values),
                sql.Identifier(primary_key),
            )
        else:
            query = sql.SQL("INSERT INTO {} DEFAULT VALUES RETURNING {}").format(
                table, sql.Identifier(primary_key)
            )

        async with self._lock:
            async with self.conn.cursor() as cur:
                await cur.execute(query, list(values.values()) or None)
                row = await cur.fetchone()
            await self.conn.commit()

        return row[0]

    async def clean_up(self, tables: list[str] | None = None) -> None:
        """
        Truncate tables and restart their identity sequences.

        Args:
            tables: Tables to truncate (every base table in the schema if None)
        """
        async with self._lock:
            if tables is None:
                tables = await self._list_tables()
            if not tables:
                return

            query = sql.SQL("TRUNCATE {} RESTART IDENTITY CASCADE").format(
                sql.SQL(", ").join(sql.Identifier(self.schema, t) for t in tables)
            )
            logger.info("Truncating %s.%s", self.schema, tables)
            async with self.conn.cursor() as cur:
                await cur.execute(query)
            await self.conn.commit()

    async def _list_tables(self) -> list[str]:
        async with self.conn.cursor() as cur:
            await cur.execute(
                """
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = %s AND table_type = 'BASE TABLE'
                ORDER BY table_name
                """,
                (self.schema,),
            )
            rows = await cur.fetchall()
        return [row[0] for row in rows]
