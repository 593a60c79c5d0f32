"""Faker-based record provider."""

from collections.abc import Mapping, Sequence
from typing import Any

from faker import Faker

fake = Faker()


class FakerProvider:
    """
    Provider that fills fields with realistic data using Faker.

    Fields are described by name (and optionally a type). Values present in the
    seed args override generated ones; callable overrides are invoked.

    Example:
        >>> seeder.register(Factory(
        ...     name="user",
        ...     table_name="users",
        ...     primary_key="userID",
        ...     provider=FakerProvider({"name": "text", "email": "text", "age": "smallint"}),
        ... ))
        >>> await seeder.seed("user", {"name": "Ada"})
    """

    # Field name → Faker method mapping
    FIELD_MAPPINGS = {
        "email": lambda: fake.email(),
        "first_name": lambda: fake.first_name(),
        "last_name": lambda: fake.last_name(),
        "full_name": lambda: fake.name(),
        "name": lambda: fake.name(),
        "company": lambda: fake.company(),
        "phone": lambda: fake.phone_number(),
        "phone_number": lambda: fake.phone_number(),
        "address": lambda: fake.address(),
        "street": lambda: fake.street_address(),
        "city": lambda: fake.city(),
        "country": lambda: fake.country(),
        "zipcode": lambda: fake.zipcode(),
        "url": lambda: fake.url(),
        "currency_code": lambda: fake.currency_code(),
        "description": lambda: fake.text(max_nb_chars=200),
    }

    # Type-based fallbacks
    TYPE_FALLBACKS = {
        "text": lambda: fake.text(max_nb_chars=50),
        "word": lambda: fake.word(),
        "integer": lambda: fake.random_int(min=1, max=1000),
        "smallint": lambda: fake.random_int(min=1, max=100),
        "numeric": lambda: fake.pyfloat(min_value=0, max_value=10000),
        "boolean": lambda: fake.boolean(),
        "timestamp": lambda: fake.date_time_this_year(),
        "date": lambda: fake.date_this_year(),
    }

    def __init__(self, fields: Mapping[str, str] | Sequence[str]):
        """
        Initialize provider.

        Args:
            fields: Field names, or a mapping of field name to type name
        """
        if isinstance(fields, Mapping):
            self.fields = dict(fields)
        else:
            self.fields = dict.fromkeys(fields, "text")

    def __call__(self, args: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        record = {}
        for name, field_type in self.fields.items():
            if name in args:
                override = args[name]
                record[name] = override() if callable(override) else override
            else:
                record[name] = self.generate(name, field_type)
        return record

    def generate(self, field_name: str, field_type: str = "text") -> Any:
        """Generate data for a field based on name and type."""
        if field_name in self.FIELD_MAPPINGS:
            return self.FIELD_MAPPINGS[field_name]()

        if field_type in self.TYPE_FALLBACKS:
            return self.TYPE_FALLBACKS[field_type]()

        return fake.text(max_nb_chars=50)
