"""
Configuration management for synthdb.

Loads and validates configuration from synthdb.toml files using Pydantic.
Environment variables prefixed with ``SYNTHDB_DATABASE_`` and
``SYNTHDB_GENERATION_`` override file values.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

CONFIG_FILENAME = "synthdb.toml"


class _Section(BaseSettings):
    """Settings section where environment variables win over file values."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings


class DatabaseConfig(_Section):
    """Database connection and introspection configuration."""

    model_config = SettingsConfigDict(env_prefix="SYNTHDB_DATABASE_")

    url: str | None = Field(default=None, description="PostgreSQL connection URL")
    schema_name: str = Field(default="public", description="Schema to introspect")
    sample_limit: int = Field(
        default=20, ge=0, description="Distinct values sampled per text column"
    )


class GenerationConfig(_Section):
    """Data generation configuration."""

    model_config = SettingsConfigDict(env_prefix="SYNTHDB_GENERATION_")

    rows: int = Field(default=100, ge=0, description="Rows generated per table")
    seed: int | None = Field(default=None, description="Random seed for reproducible output")
    locale: str = Field(default="en_US", description="Faker locale")
    strict_cycles: bool = Field(
        default=False, description="Fail on circular foreign keys instead of falling back"
    )
    output: str = Field(default="dump.sql", description="SQL dump destination")


class Config(BaseSettings):
    """Main configuration for synthdb."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to synthdb.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

        return cls(
            database=DatabaseConfig(**data.get("database", {})),
            generation=GenerationConfig(**data.get("generation", {})),
        )

    @classmethod
    def find_and_load(cls, start_dir: Path | None = None) -> Config:
        """
        Find and load configuration from synthdb.toml.

        Searches from start_dir up through parent directories. Returns the
        defaults (plus environment overrides) when no file is found.

        Args:
            start_dir: Directory to start search (defaults to current directory)
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

        return cls()

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write synthdb.toml
        """
        config_path = Path(path)

        url_line = f'url = "{self.database.url}"' if self.database.url else '# url = "postgresql://localhost/mydb"'
        seed_line = f"seed = {self.generation.seed}" if self.generation.seed is not None else "# seed = 42"

        toml_content = f"""# SynthDB Configuration

[database]
{url_line}
schema_name = "{self.database.schema_name}"
sample_limit = {self.database.sample_limit}

[generation]
rows = {self.generation.rows}
{seed_line}
locale = "{self.generation.locale}"
strict_cycles = {str(self.generation.strict_cycles).lower()}
output = "{self.generation.output}"
"""

        config_path.write_text(toml_content)
