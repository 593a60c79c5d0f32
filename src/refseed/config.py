"""
Configuration management for refseed.

Loads and validates configuration from refseed.toml files and REFSEED_*
environment variables using Pydantic.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = "refseed.toml"


class DatabaseConfig(BaseSettings):
    """Database connection configuration."""

    model_config = SettingsConfigDict(env_prefix="REFSEED_DATABASE_")

    url: str = Field(
        default="postgresql://localhost/refseed_local",
        description="PostgreSQL connection URL",
    )
    schema_name: str = Field(default="public", description="Schema the tables live in")


class SeedingConfig(BaseSettings):
    """Seeding defaults."""

    model_config = SettingsConfigDict(env_prefix="REFSEED_SEEDING_")

    target: Optional[str] = Field(
        default=None,
        description="Seeder to load, as 'module:attribute'",
    )
    reuse_refs: bool = Field(
        default=True, description="Reuse dependencies already in context"
    )
    count: int = Field(default=1, ge=0, description="Default number of records per seed")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="REFSEED_LOGGING_")

    level: str = Field(default="WARNING", description="Root log level")
    format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="logging format string",
    )


class RefSeedConfig(BaseSettings):
    """Main configuration for refseed."""

    model_config = SettingsConfigDict(env_prefix="REFSEED_")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    seeding: SeedingConfig = Field(default_factory=SeedingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> RefSeedConfig:
        """
        Load configuration from TOML file.

        Args:
            path: Path to refseed.toml file

        Returns:
            RefSeedConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(**data)

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> RefSeedConfig:
        """
        Find and load configuration from refseed.toml.

        Searches for refseed.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories."
        )

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write refseed.toml
        """
        target = f'target = "{self.seeding.target}"\n' if self.seeding.target else ""
        toml_content = f"""# refseed configuration

[database]
url = "{self.database.url}"
schema_name = "{self.database.schema_name}"

[seeding]
{target}reuse_refs = {str(self.seeding.reuse_refs).lower()}
count = {self.seeding.count}

[logging]
level = "{self.logging.level}"
"""
        Path(path).write_text(toml_content)


def load_config(path: Path | str | None = None) -> RefSeedConfig:
    """Load config from ``path``, else the nearest refseed.toml, else defaults."""
    if path is not None:
        return RefSeedConfig.from_toml(path)
    try:
        return RefSeedConfig.find_and_load()
    except FileNotFoundError:
        return RefSeedConfig()
