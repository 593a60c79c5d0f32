"""CLI commands for refseed."""

import asyncio
import importlib
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any

import click
import psycopg

from refseed.config import RefSeedConfig, load_config
from refseed.exceptions import RefSeedError
from refseed.seeder import Seeder
from refseed.writers import InMemoryWriter, PostgresWriter


def load_seeder(target: str) -> Seeder:
    """
    Import a Seeder from a 'module:attribute' reference.

    The attribute may be a Seeder or a zero-argument callable returning one.
    """
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise click.BadParameter(f"Expected 'module:attribute', got '{target}'", param_hint="--target")

    module = importlib.import_module(module_name)
    try:
        obj = getattr(module, attr)
    except AttributeError:
        raise click.BadParameter(f"Module '{module_name}' has no attribute '{attr}'", param_hint="--target") from None

    if not isinstance(obj, Seeder) and callable(obj):
        obj = obj()
    if not isinstance(obj, Seeder):
        raise click.BadParameter(f"'{target}' is not a Seeder", param_hint="--target")
    return obj


def parse_arg(raw: str) -> tuple[str, Any]:
    """Parse 'key=value'; JSON values are decoded, anything else stays a string."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"Expected key=value, got '{raw}'", param_hint="--arg")
    try:
        return key, json.loads(value)
    except json.JSONDecodeError:
        return key, value


def run_with_writer(
    config: RefSeedConfig,
    seeder: Seeder,
    memory: bool,
    action: Callable[[Seeder], Awaitable[Any]],
) -> Any:
    """Attach a writer (in-memory or PostgreSQL), run ``action`` and return its result."""

    async def runner() -> Any:
        if memory:
            seeder.set_writer(InMemoryWriter())
            return await action(seeder)

        async with await psycopg.AsyncConnection.connect(config.database.url) as conn:
            seeder.set_writer(PostgresWriter(conn, schema=config.database.schema_name))
            return await action(seeder)

    return asyncio.run(runner())


def resolve_target(config: RefSeedConfig, target: str | None) -> str:
    target = target or config.seeding.target
    if not target:
        click.echo("Error: --target is required (or set [seeding] target in refseed.toml)", err=True)
        sys.exit(1)
    return target


@click.group()
@click.version_option(package_name="refseed")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to refseed.toml")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """refseed - seed interrelated records from a graph of factories."""
    config = load_config(config_path)
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.logging.level.upper(),
        format=config.logging.format,
    )
    ctx.obj = config


@cli.command()
@click.argument("factory")
@click.option("--target", help="Seeder to load, as module:attribute")
@click.option("--count", type=int, default=None, help="Number of records (default from config)")
@click.option("--reuse-refs/--no-reuse-refs", default=None, help="Share dependencies between records")
@click.option("--arg", "raw_args", multiple=True, help="Seed arg as key=value (repeatable)")
@click.option("--memory", is_flag=True, help="Use an in-memory writer instead of PostgreSQL")
@click.pass_obj
def seed(
    config: RefSeedConfig,
    factory: str,
    target: str | None,
    count: int | None,
    reuse_refs: bool | None,
    raw_args: tuple[str, ...],
    memory: bool,
) -> None:
    """Seed FACTORY and print the created records as JSON."""
    seeder = load_seeder(resolve_target(config, target))
    args = dict(parse_arg(raw) for raw in raw_args)

    async def action(s: Seeder) -> Any:
        return await s.seed_many(
            factory,
            args=args,
            count=config.seeding.count if count is None else count,
            reuse_refs=config.seeding.reuse_refs if reuse_refs is None else reuse_refs,
        )

    try:
        results = run_with_writer(config, seeder, memory, action)
    except RefSeedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps([r.record for r in results], indent=2, default=str))


@cli.command()
@click.argument("names", nargs=-1)
@click.option("--target", help="Seeder to load, as module:attribute")
@click.option("--memory", is_flag=True, help="Use an in-memory writer instead of PostgreSQL")
@click.pass_obj
def clean(config: RefSeedConfig, names: tuple[str, ...], target: str | None, memory: bool) -> None:
    """Clear the tables of the named factories (all factories if none given)."""
    seeder = load_seeder(resolve_target(config, target))

    try:
        run_with_writer(config, seeder, memory, lambda s: s.clean_up(*names))
    except RefSeedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Cleaned {', '.join(names) if names else 'all factories'}")


@cli.command()
@click.option("--target", help="Seeder to load, as module:attribute")
@click.pass_obj
def factories(config: RefSeedConfig, target: str | None) -> None:
    """List registered factories with their refs."""
    seeder = load_seeder(resolve_target(config, target))

    for factory in seeder.registry:
        click.echo(f"{factory.name} (table={factory.table_name}, pk={factory.primary_key})")
        for r in factory.refs:
            optional = " [optional]" if r.optional else ""
            click.echo(f"  {r.foreign_key} -> {r.factory_name}{optional}")


if __name__ == "__main__":
    cli()
