"""Seeder: resolves factory refs recursively and persists records through a writer."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from refseed.exceptions import ConfigurationError, InvalidForeignKeyError
from refseed.models import (
    Context,
    Factory,
    Record,
    Ref,
    ResolvedRefs,
    SeedId,
    SeedResult,
    SeedRow,
    maybe_await,
    resolve_deferred,
)
from refseed.registry import FactoryRegistry
from refseed.writers.base import Writer

logger = logging.getLogger(__name__)


class Seeder:
    """
    Seed interrelated records from a graph of named factories.

    Each top-level call threads a context (factory name -> latest record) through
    the resolution tree so dependencies are reused instead of re-created.

    Example:
        >>> seeder = Seeder(InMemoryWriter())
        >>> seeder.register(channel_factory, user_factory)
        >>> user_id, user, context = await seeder.seed("user")
        >>> context["channel"]["channelID"] == user["channelID"]
        True
    """

    def __init__(self, writer: Writer | None = None):
        """
        Initialize Seeder.

        Args:
            writer: Persistence collaborator (can be set later with set_writer)
        """
        self._registry = FactoryRegistry()
        self._writer = writer

    @property
    def registry(self) -> FactoryRegistry:
        return self._registry

    @property
    def writer(self) -> Writer | None:
        return self._writer

    def set_writer(self, writer: Writer) -> None:
        self._writer = writer

    def register(self, *factories: Factory | Mapping[str, Any]) -> bool:
        """
        Register factories; refs may name factories registered later.

        Returns:
            False (and registers nothing) if any name is already taken
        """
        return self._registry.register(*factories)

    def get_factory(self, name: str) -> Factory:
        """
        Get a registered factory.

        Raises:
            FactoryNotFoundError: If no factory has this name
        """
        return self._registry.get(name)

    async def clean_up(self, *factory_names: str) -> None:
        """
        Clear the tables of the named factories, or of every registered factory.

        Raises:
            ConfigurationError: If no writer is set
        """
        writer = self._require_writer()

        factories = (
            self._registry.select(factory_names) if factory_names else list(self._registry)
        )
        tables = list(dict.fromkeys(f.table_name for f in factories))

        logger.info("Cleaning up tables: %s", tables)
        await writer.clean_up(tables)

    async def seed(
        self, factory_name: str, args: Mapping[str, Any] | None = None, reuse_refs: bool = True
    ) -> SeedResult:
        """
        Seed one record and everything it depends on.

        Args:
            factory_name: Factory to seed
            args: Caller args; values under a ref's foreign key supply that
                dependency (id, record, SeedResult, None for optional refs, or a
                zero-argument callable producing one of those)
            reuse_refs: Reuse dependencies already in context instead of
                creating new ones

        Returns:
            SeedResult (id, record, context)

        Raises:
            ConfigurationError: If no writer is set
            FactoryNotFoundError: If the factory or a referenced factory is unknown
            InvalidForeignKeyError: If a supplied foreign-key value is unsupported
        """
        [result] = await self.seed_many(factory_name, args=args, count=1, reuse_refs=reuse_refs)
        return result

    async def seed_object(
        self, factory_name: str, args: Mapping[str, Any] | None = None, reuse_refs: bool = True
    ) -> Record:
        """Seed one record and return only the record."""
        result = await self.seed(factory_name, args, reuse_refs)
        return result.record

    async def seed_many(
        self,
        factory_name: str,
        *,
        args: Mapping[str, Any] | None = None,
        count: int = 1,
        reuse_refs: bool = True,
    ) -> list[SeedResult]:
        """
        Seed ``count`` records of one factory.

        With ``reuse_refs`` the foreign keys are resolved once and shared by all
        records; without it every record resolves its own dependency chain.
        Records are created concurrently. A failure propagates to the caller and
        leaves already inserted rows in place.

        Returns:
            One SeedResult per record, in creation order
        """
        self._require_writer()
        factory = self.get_factory(factory_name)
        args = dict(args or {})

        foreign_keys: dict[str, SeedId] | None = None
        context: Context = {}
        if reuse_refs:
            foreign_keys, _, context = await self.resolve_foreign_keys(
                factory.refs, args, {}, reuse_refs
            )

        logger.debug(
            "Seeding %d x '%s' (reuse_refs=%s, shared_fks=%s)",
            count,
            factory.name,
            reuse_refs,
            foreign_keys,
        )
        results = await asyncio.gather(
            *(
                self._seed_factory(factory, args, foreign_keys, context, reuse_refs)
                for _ in range(count)
            )
        )
        return list(results)

    async def resolve_foreign_keys(
        self,
        refs: list[Ref],
        args: Mapping[str, Any],
        context: Context,
        reuse_refs: bool,
    ) -> ResolvedRefs:
        """
        Resolve refs in declaration order.

        Each ref sees the inherited context plus whatever the refs before it
        produced, so later refs can reuse earlier results.

        Returns:
            ResolvedRefs: foreign keys by field, objects by factory, merged context
        """
        context = dict(context)
        foreign_keys: dict[str, SeedId] = {}
        objects: dict[str, Record | None] = {}

        for ref in refs:
            foreign_key, obj, fragment = await self._process_foreign_key(
                ref, args, context, reuse_refs
            )
            foreign_keys[ref.foreign_key] = foreign_key
            objects[ref.factory_name] = obj
            context = {**context, **fragment}

        return ResolvedRefs(foreign_keys, objects, context)

    async def _process_foreign_key(
        self, ref: Ref, args: Mapping[str, Any], context: Context, reuse_refs: bool
    ) -> tuple[SeedId, Record | None, Context]:
        if ref.foreign_key in args:
            provided = await resolve_deferred(args[ref.foreign_key])

            if provided is None:
                if ref.optional:
                    return None, None, {}
                raise InvalidForeignKeyError(ref.foreign_key, provided)

            factory = self.get_factory(ref.factory_name)

            if isinstance(provided, SeedResult):
                provided = provided.record
            if isinstance(provided, SeedRow):
                provided = provided.to_dict()
            if isinstance(provided, Mapping):
                return provided.get(factory.primary_key), provided, {factory.name: provided}
            if isinstance(provided, (int, float)) and not isinstance(provided, bool):
                return provided, None, {}
            raise InvalidForeignKeyError(ref.foreign_key, provided)

        factory = self.get_factory(ref.factory_name)
        new_args = args

        if reuse_refs:
            if factory.name in context:
                obj = context[factory.name]
                logger.debug("Reusing '%s' from context for '%s'", factory.name, ref.foreign_key)
                return obj.get(factory.primary_key), obj, {factory.name: obj}

            # Link the new row to siblings already resolved in this ref list
            siblings = {
                inner.foreign_key: context[inner.factory_name]
                for inner in factory.refs
                if inner.factory_name in context
            }
            new_args = {**siblings, **args}

        result = await self._seed_factory(factory, new_args, None, context, reuse_refs)
        return result.id, result.record, result.context

    async def _seed_factory(
        self,
        factory: Factory,
        args: Mapping[str, Any],
        foreign_keys: dict[str, SeedId] | None,
        context: Context,
        reuse_refs: bool,
    ) -> SeedResult:
        writer = self._require_writer()

        if foreign_keys is None:
            foreign_keys, _, context = await self.resolve_foreign_keys(
                factory.refs, args, context, reuse_refs
            )

        args_with_fks = {**args, **foreign_keys}
        if factory.before is not None:
            await maybe_await(factory.before(args_with_fks, context, self))

        data = await maybe_await(factory.provider(args_with_fks, context))
        record: Record = {**(data or {}), **foreign_keys}

        record_id = await writer.insert(factory.table_name, factory.primary_key, dict(record))
        record[factory.primary_key] = record_id
        logger.debug(
            "Inserted '%s' into %s (%s=%s)",
            factory.name,
            factory.table_name,
            factory.primary_key,
            record_id,
        )

        new_context = {**context, factory.name: record}
        if factory.after is not None:
            await maybe_await(factory.after(args_with_fks, new_context, self))

        return SeedResult(record_id, record, new_context)

    def _require_writer(self) -> Writer:
        if self._writer is None:
            raise ConfigurationError()
        return self._writer
