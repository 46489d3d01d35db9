"""Command line interface for synthdb."""

import functools
import logging
import sys
import time
from pathlib import Path

import click
import psycopg

from synthdb.builder import SeedBuilder
from synthdb.config import Config
from synthdb.exceptions import SynthDBError
from synthdb.introspection import SchemaIntrospector
from synthdb.schema import SchemaModel
from synthdb.writer import SqlDumpWriter

logger = logging.getLogger(__name__)


def schema_options(func):
    """Options shared by every command that needs a schema."""

    @click.option("--url", help="PostgreSQL connection URL to introspect")
    @click.option(
        "--schema-file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="YAML or JSON schema description (instead of --url)",
    )
    @click.option("--schema", "schema_name", help="Database schema (default: public)")
    @click.option("--strict", is_flag=True, help="Fail on circular foreign keys")
    @click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Path to synthdb.toml (default: search upwards from cwd)",
    )
    @click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Path | None) -> Config:
    if config_path is not None:
        return Config.from_toml(config_path)
    return Config.find_and_load()


def _load_schema(config: Config, url: str | None, schema_file: Path | None) -> tuple[SchemaModel, str]:
    """Acquire the schema model and a description of where it came from."""
    if url and schema_file:
        raise click.UsageError("--url and --schema-file are mutually exclusive")

    if schema_file is not None:
        return SchemaModel.from_file(schema_file), str(schema_file)

    url = url or config.database.url
    if not url:
        raise click.UsageError(
            "Either --url or --schema-file is required (or set [database] url in synthdb.toml)"
        )
    schema = SchemaIntrospector.connect(
        url,
        schema=config.database.schema_name,
        sample_limit=config.database.sample_limit,
    )
    return schema, f"database schema '{config.database.schema_name}'"


def _fail(error: Exception) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="synthdb")
def cli() -> None:
    """synthdb - dependency-ordered, semantics-aware synthetic SQL data."""
    pass


@cli.command()
@schema_options
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="SQL dump path (default: dump.sql)")
@click.option("--rows", type=click.IntRange(min=0), help="Rows per table (default: 100)")
@click.option("--seed", type=int, help="Random seed for reproducible output")
def clone(
    url: str | None,
    schema_file: Path | None,
    schema_name: str | None,
    strict: bool,
    config_path: Path | None,
    verbose: bool,
    output: Path | None,
    rows: int | None,
    seed: int | None,
) -> None:
    """Generate a synthetic SQL dump for a schema."""
    _setup_logging(verbose)
    started = time.perf_counter()

    try:
        config = _load_config(config_path)
        if schema_name:
            config.database.schema_name = schema_name
        generation = config.generation
        if rows is not None:
            generation.rows = rows
        if seed is not None:
            generation.seed = seed
        if strict:
            generation.strict_cycles = True
        output = output or Path(generation.output)

        schema, source = _load_schema(config, url, schema_file)
        click.echo(f"Loaded {len(schema)} tables from {source}")

        builder = SeedBuilder(
            schema,
            rows=generation.rows,
            seed=generation.seed,
            locale=generation.locale,
            strict=generation.strict_cycles,
        )
        seeds = builder.execute()

        header = [f"Source: {source}", f"Rows per table: {generation.rows}"]
        if generation.seed is not None:
            header.append(f"Seed: {generation.seed}")
        SqlDumpWriter(header_lines=header).dump(seeds, output)
    except (SynthDBError, psycopg.Error, FileNotFoundError, ValueError) as e:
        _fail(e)

    total = sum(len(seeds.rows(name)) for name in seeds.table_names())
    elapsed = time.perf_counter() - started
    click.echo(
        f"✓ Wrote {total} rows for {len(seeds.table_names())} tables to {output} "
        f"in {elapsed:.2f}s"
    )


@cli.command()
@schema_options
def classify(
    url: str | None,
    schema_file: Path | None,
    schema_name: str | None,
    strict: bool,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Show the generation order and each column's semantic category."""
    _setup_logging(verbose)

    try:
        config = _load_config(config_path)
        if schema_name:
            config.database.schema_name = schema_name
        if strict:
            config.generation.strict_cycles = True

        schema, _ = _load_schema(config, url, schema_file)
        builder = SeedBuilder(schema, strict=config.generation.strict_cycles)
        plans = builder.plans()
    except (SynthDBError, psycopg.Error, FileNotFoundError, ValueError) as e:
        _fail(e)

    click.echo("Generation order:")
    for i, plan in enumerate(plans, 1):
        click.echo(f"  {i}. {plan.name}")

    for plan in plans:
        click.echo(f"\n{plan.name}")
        width = max((len(c.name) for c in plan.columns), default=0)
        for column in plan.columns:
            category = column.category
            label = category.type.value
            if category.referenced_table:
                label += f" -> {category.referenced_table}"
            click.echo(f"  {column.name.ljust(width)}  {label} ({category.priority})")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
