"""Custom exceptions with helpful error messages."""

from typing import Any


class RefSeedError(Exception):
    """Base exception for refseed errors."""

    pass


class ConfigurationError(RefSeedError):
    """Seeder is missing a collaborator it needs (usually the writer)."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or (
                "Writer is not set on this seeder.\n\n"
                "Suggestions:\n"
                "1. Pass a writer when building the seeder: Seeder(writer)\n"
                "2. Or call seeder.set_writer(writer) before seeding or cleaning up\n"
                "3. For tests, InMemoryWriter needs no database"
            )
        )


class FactoryNotFoundError(RefSeedError):
    """No factory registered under the requested name."""

    def __init__(self, factory_name: str):
        self.factory_name = factory_name
        super().__init__(
            f"Factory '{factory_name}' was not found.\n\n"
            f"Suggestions:\n"
            f"1. Check factory name spelling (in seed() calls and in ref() declarations)\n"
            f"2. Ensure the factory is registered: seeder.register(...)\n"
            f"3. Refs may point to factories registered later, "
            f"but they must exist before seeding"
        )


class DuplicateFactoryError(RefSeedError):
    """One or more factory names are already registered."""

    def __init__(self, names: list[str]):
        self.names = names
        names_str = ", ".join(sorted(set(names)))
        super().__init__(
            f"Factory name(s) already registered: {names_str}\n\n"
            f"Suggestions:\n"
            f"1. Give each factory a unique name\n"
            f"2. Use a separate Seeder instance for an independent set of factories"
        )


class InvalidForeignKeyError(RefSeedError):
    """A value supplied for a foreign key has an unsupported type."""

    def __init__(self, foreign_key: str, value: Any):
        self.foreign_key = foreign_key
        self.value = value
        super().__init__(
            f"The foreign key '{foreign_key}' must be a number or a mapping, "
            f"got {type(value).__name__}: {value!r}\n\n"
            f"Suggestions:\n"
            f"1. Pass the referenced id: seed('...', {{'{foreign_key}': 42}})\n"
            f"2. Pass the referenced record (or the SeedResult of an earlier seed)\n"
            f"3. Pass None only when the ref is declared optional"
        )
