"""Tests for configuration loading."""

import pytest

from refseed.config import RefSeedConfig, load_config


class TestRefSeedConfig:
    """Tests for RefSeedConfig."""

    def test_defaults(self):
        config = RefSeedConfig()

        assert config.database.schema_name == "public"
        assert config.seeding.reuse_refs is True
        assert config.seeding.count == 1
        assert config.seeding.target is None
        assert config.logging.level == "WARNING"

    def test_from_toml(self, tmp_path):
        """Test values are read from a TOML file."""
        path = tmp_path / "refseed.toml"
        path.write_text(
            '[database]\nurl = "postgresql://db/app"\nschema_name = "app"\n\n'
            '[seeding]\ntarget = "myapp.seeds:seeder"\nreuse_refs = false\ncount = 4\n'
        )

        config = RefSeedConfig.from_toml(path)

        assert config.database.url == "postgresql://db/app"
        assert config.database.schema_name == "app"
        assert config.seeding.target == "myapp.seeds:seeder"
        assert config.seeding.reuse_refs is False
        assert config.seeding.count == 4

    def test_from_toml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RefSeedConfig.from_toml(tmp_path / "missing.toml")

    def test_find_and_load_walks_up(self, tmp_path):
        """Test refseed.toml is found in a parent directory."""
        (tmp_path / "refseed.toml").write_text('[logging]\nlevel = "DEBUG"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        config = RefSeedConfig.find_and_load(nested)

        assert config.logging.level == "DEBUG"

    def test_to_toml_round_trip(self, tmp_path):
        path = tmp_path / "refseed.toml"
        config = RefSeedConfig.from_toml(self._write(tmp_path))

        config.to_toml(path)
        reloaded = RefSeedConfig.from_toml(path)

        assert reloaded.seeding.target == "schemas:build_seeder"
        assert reloaded.seeding.count == 2
        assert reloaded.database.schema_name == config.database.schema_name

    def test_env_override(self, monkeypatch):
        """Test REFSEED_* environment variables override defaults."""
        monkeypatch.setenv("REFSEED_DATABASE_URL", "postgresql://env/db")
        monkeypatch.setenv("REFSEED_SEEDING_COUNT", "7")

        config = RefSeedConfig()

        assert config.database.url == "postgresql://env/db"
        assert config.seeding.count == 7

    def test_load_config_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.seeding.reuse_refs is True

    @staticmethod
    def _write(tmp_path):
        source = tmp_path / "source.toml"
        source.write_text('[seeding]\ntarget = "schemas:build_seeder"\ncount = 2\n')
        return source
