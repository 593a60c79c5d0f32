"""Factory registry owned by a Seeder instance."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from refseed.exceptions import DuplicateFactoryError, FactoryNotFoundError
from refseed.models import Factory

logger = logging.getLogger(__name__)


class FactoryRegistry:
    """Registry of factories keyed by unique name."""

    def __init__(self):
        self._factories: dict[str, Factory] = {}

    def register(self, *factories: Factory | Mapping[str, Any]) -> bool:
        """
        Register a batch of factories atomically.

        Args:
            *factories: Factory instances or mapping definitions

        Returns:
            True if registered, False if any name collides (nothing is added)
        """
        try:
            self.add(*factories)
        except DuplicateFactoryError as e:
            logger.warning("Rejected factory batch, duplicate names: %s", e.names)
            return False
        return True

    def add(self, *factories: Factory | Mapping[str, Any]) -> None:
        """
        Register a batch of factories atomically.

        Raises:
            DuplicateFactoryError: If any name is already registered or
                repeated within the batch
        """
        incoming = [
            f if isinstance(f, Factory) else Factory.from_mapping(f) for f in factories
        ]

        seen: set[str] = set()
        duplicates = []
        for factory in incoming:
            if factory.name in self._factories or factory.name in seen:
                duplicates.append(factory.name)
            seen.add(factory.name)
        if duplicates:
            raise DuplicateFactoryError(duplicates)

        for factory in incoming:
            self._factories[factory.name] = factory
            logger.debug(
                "Registered factory '%s' (table=%s, refs=%s)",
                factory.name,
                factory.table_name,
                [r.factory_name for r in factory.refs],
            )

    def get(self, name: str) -> Factory:
        """
        Get factory by name.

        Raises:
            FactoryNotFoundError: If no factory has this name
        """
        factory = self._factories.get(name)
        if factory is None:
            raise FactoryNotFoundError(name)
        return factory

    def select(self, names: Iterable[str]) -> list[Factory]:
        """Registered factories whose name is in ``names``, in registration order."""
        wanted = set(names)
        return [f for f in self._factories.values() if f.name in wanted]

    def names(self) -> list[str]:
        return list(self._factories)

    def clear(self) -> None:
        """Clear all registered factories (for testing)."""
        self._factories.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[Factory]:
        return iter(list(self._factories.values()))

    def __len__(self) -> int:
        return len(self._factories)
