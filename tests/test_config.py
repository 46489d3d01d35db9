"""Tests for configuration loading."""

import pytest

from synthdb.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "SYNTHDB_DATABASE_URL",
        "SYNTHDB_DATABASE_SCHEMA_NAME",
        "SYNTHDB_GENERATION_ROWS",
        "SYNTHDB_GENERATION_SEED",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config()

    assert config.database.url is None
    assert config.database.schema_name == "public"
    assert config.database.sample_limit == 20
    assert config.generation.rows == 100
    assert config.generation.seed is None
    assert config.generation.locale == "en_US"
    assert config.generation.strict_cycles is False
    assert config.generation.output == "dump.sql"


def test_from_toml(tmp_path):
    path = tmp_path / "synthdb.toml"
    path.write_text(
        """
[database]
url = "postgresql://localhost/shop"
schema_name = "sales"

[generation]
rows = 25
seed = 7
"""
    )

    config = Config.from_toml(path)

    assert config.database.url == "postgresql://localhost/shop"
    assert config.database.schema_name == "sales"
    assert config.generation.rows == 25
    assert config.generation.seed == 7
    assert config.generation.output == "dump.sql"


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "synthdb.toml"
    path.write_text("[generation]\nrows = 25\n")
    monkeypatch.setenv("SYNTHDB_GENERATION_ROWS", "3")
    monkeypatch.setenv("SYNTHDB_DATABASE_URL", "postgresql://env/db")

    config = Config.from_toml(path)

    assert config.generation.rows == 3
    assert config.database.url == "postgresql://env/db"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.from_toml(tmp_path / "nope.toml")


def test_invalid_values_raise(tmp_path):
    path = tmp_path / "synthdb.toml"
    path.write_text("[generation]\nrows = -1\n")

    with pytest.raises(ValueError):
        Config.from_toml(path)


def test_invalid_toml_raises(tmp_path):
    path = tmp_path / "synthdb.toml"
    path.write_text("[generation\nrows = 1\n")

    with pytest.raises(ValueError, match="Invalid TOML"):
        Config.from_toml(path)


def test_find_and_load_walks_up(tmp_path):
    (tmp_path / "synthdb.toml").write_text("[generation]\nrows = 12\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert Config.find_and_load(nested).generation.rows == 12


def test_to_toml_round_trip(tmp_path):
    config = Config()
    config.database.url = "postgresql://localhost/app"
    config.generation.seed = 99
    config.generation.strict_cycles = True

    path = tmp_path / "synthdb.toml"
    config.to_toml(path)
    loaded = Config.from_toml(path)

    assert loaded.database.url == "postgresql://localhost/app"
    assert loaded.generation.seed == 99
    assert loaded.generation.strict_cycles is True
    assert loaded.generation.rows == 100


def test_to_toml_without_optional_values(tmp_path):
    path = tmp_path / "synthdb.toml"
    Config().to_toml(path)

    text = path.read_text()
    assert "# url = " in text
    assert "# seed = " in text
    assert Config.from_toml(path).generation.seed is None
