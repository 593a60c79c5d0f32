"""Data models and type definitions."""

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple, Union

if TYPE_CHECKING:
    from refseed.seeder import Seeder

SeedId = Union[int, float, None]
Record = dict[str, Any]
Context = dict[str, Record]

Provider = Callable[[dict[str, Any], Context], Union[Mapping[str, Any], Awaitable[Mapping[str, Any]]]]
Hook = Callable[[dict[str, Any], Context, "Seeder"], Union[None, Awaitable[None]]]


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass(frozen=True)
class Ref:
    """
    Declared dependency of one factory on another.

    Attributes:
        factory_name: Name of the referenced factory
        foreign_key: Field that receives the referenced primary key
        optional: Whether an explicit None skips creating the referenced row
    """

    factory_name: str
    foreign_key: str
    optional: bool = False

    @classmethod
    def from_mapping(cls, data: "Ref | Mapping[str, Any]") -> "Ref":
        if isinstance(data, Ref):
            return data
        return cls(
            factory_name=data["factory_name"],
            foreign_key=data["foreign_key"],
            optional=bool(data.get("optional", False)),
        )


def ref(*, factory_name: str, foreign_key: str, optional: bool = False) -> Ref:
    """Declare a ref (keyword-only helper for factory definitions)."""
    return Ref(factory_name, foreign_key, bool(optional))


@dataclass
class Factory:
    """
    Named template for producing and persisting one kind of record.

    Attributes:
        name: Unique factory name (also the context key for its records)
        table_name: Table the writer persists records into
        primary_key: Field that receives the id returned by the writer
        provider: ``(args, context) -> fields``, sync or async
        refs: Dependencies, resolved in declaration order
        before: Optional ``(args, context, seeder)`` hook run before the provider
        after: Optional ``(args, context, seeder)`` hook run after the insert
    """

    name: str
    table_name: str
    primary_key: str
    provider: Provider
    refs: list[Ref] = field(default_factory=list)
    before: Hook | None = None
    after: Hook | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Factory":
        """
        Build a factory from a plain mapping definition.

        Args:
            data: Mapping with name, table_name, primary_key, provider and
                optional refs (Ref or mappings), before, after

        Returns:
            Factory instance
        """
        return cls(
            name=data["name"],
            table_name=data["table_name"],
            primary_key=data["primary_key"],
            provider=data["provider"],
            refs=[Ref.from_mapping(r) for r in data.get("refs") or []],
            before=data.get("before"),
            after=data.get("after"),
        )


class SeedResult(NamedTuple):
    """Outcome of seeding one record: generated id, final record, context."""

    id: SeedId
    record: Record
    context: Context


class ResolvedRefs(NamedTuple):
    """Outcome of resolving a factory's refs."""

    foreign_keys: dict[str, SeedId]
    objects: dict[str, Record | None]
    context: Context


class Deferred:
    """
    Memoized zero-argument computation used as a foreign-key value.

    The wrapped function runs on first resolution only; later resolutions,
    including concurrent ones, share its result.

    Example:
        >>> owner = lazy(lambda: seeder.seed_object("user"))
        >>> await seeder.seed_many("channel", args={"ownerID": owner}, count=3,
        ...                        reuse_refs=False)
    """

    def __init__(self, func: Callable[[], Any]):
        self._func = func
        self._task: asyncio.Future | None = None

    async def resolve(self) -> Any:
        if self._task is None:
            self._task = asyncio.ensure_future(maybe_await(self._func()))
        return await self._task

    def __repr__(self) -> str:
        return f"Deferred({self._func!r})"


def lazy(func: Callable[[], Any]) -> Deferred:
    """Wrap ``func`` so it is evaluated once, when a seed first needs it."""
    return Deferred(func)


async def resolve_deferred(value: Any) -> Any:
    """Resolve Deferred values and call plain zero-argument callables."""
    if isinstance(value, Deferred):
        return await value.resolve()
    if callable(value):
        return await maybe_await(value())
    return value


@dataclass
class SeedPlan:
    """
    Plan for seeding a single factory.

    Attributes:
        factory: Factory name
        count: Number of records to seed
        args: Caller args passed to every record
        reuse_refs: Whether dependencies are shared and reused from context
    """

    factory: str
    count: int = 1
    args: dict[str, Any] = field(default_factory=dict)
    reuse_refs: bool = True


@dataclass
class SeedRow:
    """
    A single seeded record with attribute access.

    Allows accessing fields as attributes:
        row.userID     # Primary key
        row.channelID  # Foreign key

    Attributes:
        _data: Raw record dict
    """

    _data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        if name in self._data:
            return self._data[name]
        raise AttributeError(f"No field '{name}' in seeded record")

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


class Seeds:
    """
    Container for seeded records with attribute access.

    Allows accessing factories as attributes:
        seeds.user     # List of SeedRow objects
        seeds.channel  # List of SeedRow objects
    """

    def __init__(self):
        self._factories: dict[str, list[SeedRow]] = {}

    def add(self, factory_name: str, records: list[Record]) -> None:
        """
        Add seeded records for a factory (appends to earlier ones).

        Args:
            factory_name: Factory name
            records: Seeded records
        """
        rows = self._factories.setdefault(factory_name, [])
        rows.extend(SeedRow(_data=record) for record in records)

    def __getattr__(self, name: str) -> list[SeedRow]:
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        if name in self._factories:
            return self._factories[name]
        raise AttributeError(f"No factory '{name}' in seeds")

    def __contains__(self, name: str) -> bool:
        return name in self._factories
