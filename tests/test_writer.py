"""Tests for SQL dump rendering."""

import io
import re
import uuid
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from synthdb import SeedBuilder
from synthdb.models import ColumnInfo, DataType, Seeds, TableInfo
from synthdb.writer import SqlDumpWriter, quote_identifier, render_literal


def _unquote(literal: str) -> str:
    assert literal.startswith("'") and literal.endswith("'")
    return literal[1:-1].replace("''", "'")


def _render(seeds: Seeds, **kwargs) -> str:
    stream = io.StringIO()
    SqlDumpWriter(**kwargs).write(seeds, stream)
    return stream.getvalue()


@pytest.fixture
def people_seeds() -> Seeds:
    table = TableInfo(
        name="people",
        columns=[
            ColumnInfo(name="id", pg_type="integer"),
            ColumnInfo(name="name", pg_type="text"),
            ColumnInfo(name="active", pg_type="boolean"),
        ],
    )
    seeds = Seeds()
    seeds.add_table(
        table,
        [
            {"id": 1, "name": "Ada", "active": True},
            {"id": 2, "name": "O'Brien", "active": False},
            {"id": 3, "name": None, "active": None},
        ],
    )
    return seeds


def test_dump_structure(people_seeds):
    """One INSERT per table; commas between tuples, semicolon after the last."""
    output = _render(people_seeds)

    assert output.splitlines() == [
        "-- SynthDB Generated Dump",
        "BEGIN;",
        "SET CONSTRAINTS ALL DEFERRED;",
        "",
        "-- Data for people",
        "INSERT INTO people (id, name, active) VALUES",
        "(1, 'Ada', true),",
        "(2, 'O''Brien', false),",
        "(3, NULL, NULL);",
        "",
        "COMMIT;",
    ]


def test_header_lines(people_seeds):
    output = _render(people_seeds, header_lines=["Seed: 42"])
    assert output.startswith("-- SynthDB Generated Dump\n-- Seed: 42\nBEGIN;\n")


def test_empty_table_gets_comment_only():
    seeds = Seeds()
    seeds.add_table(TableInfo(name="empty", columns=[ColumnInfo(name="id", pg_type="integer")]), [])
    seeds.add_table(TableInfo(name="no_columns", columns=[]), [{}])

    output = _render(seeds)
    assert "-- Data for empty\n" in output
    assert "-- Data for no_columns\n" in output
    assert "INSERT" not in output


@pytest.mark.parametrize(
    "text",
    ["O'Brien", "''", "it's a 'quoted' string", "back\\slash", "semi;colon", ""],
)
def test_escaping_round_trip(text):
    """Quotes are doubled and re-parsing recovers the original text."""
    literal = render_literal(text, DataType.TEXT)
    assert _unquote(literal) == text
    assert "'" not in literal[1:-1].replace("''", "")


@pytest.mark.parametrize(
    "value, data_type, expected",
    [
        (None, DataType.TEXT, "NULL"),
        (True, DataType.BOOLEAN, "true"),
        (False, DataType.TEXT, "false"),
        (42, DataType.INTEGER, "42"),
        (Decimal("12.50"), DataType.DECIMAL, "12.50"),
        ("17", DataType.INTEGER, "17"),
        ("3.5e2", DataType.FLOAT, "3.5e2"),
        ("abc", DataType.INTEGER, "'abc'"),
        (42, DataType.TEXT, "'42'"),
        (date(2024, 1, 31), DataType.DATE, "'2024-01-31'"),
        (datetime(2024, 1, 31, 8, 5, 3), DataType.TIMESTAMP, "'2024-01-31 08:05:03'"),
        (time(8, 5, 3), DataType.TIME, "'08:05:03'"),
        (
            uuid.UUID("12345678-1234-4234-8234-123456789abc"),
            DataType.UUID,
            "'12345678-1234-4234-8234-123456789abc'",
        ),
        ({"generated": True, "tag": "x"}, DataType.JSON, '\'{"generated": true, "tag": "x"}\''),
        (["a", "b"], DataType.ARRAY, "'{\"a\",\"b\"}'"),
        (['say "hi"', None], DataType.ARRAY, "'{\"say \\\"hi\\\"\",NULL}'"),
        (["a"], DataType.JSON, "'[\"a\"]'"),
    ],
)
def test_render_literal(value, data_type, expected):
    assert render_literal(value, data_type) == expected


def test_quote_identifier():
    assert quote_identifier("employees") == "employees"
    assert quote_identifier("order") == '"order"'
    assert quote_identifier("CamelCase") == '"CamelCase"'
    assert quote_identifier('we"ird') == '"we""ird"'


def test_generated_dump_tuple_count(scenario_schema, now):
    """A table with three rows yields exactly three tuples."""
    seeds = SeedBuilder(scenario_schema, rows=3, seed=8, now=now).execute()
    output = _render(seeds)

    block = output.split("-- Data for employees\n")[1].split("\n\n")[0]
    lines = block.splitlines()
    assert lines[0] == "INSERT INTO employees (id, company_id, email) VALUES"
    tuples = lines[1:]
    assert len(tuples) == 3
    assert tuples[0].endswith("),") and tuples[1].endswith("),")
    assert tuples[2].endswith(");")
    assert all(re.match(r"^\(\d+, [123], '.+@.+'\)[,;]$", t) for t in tuples)

    # Parents come first
    assert output.index("-- Data for companies") < output.index("-- Data for employees")
    assert output.rstrip().endswith("COMMIT;")


def test_dump_to_file(people_seeds, tmp_path):
    path = tmp_path / "out.sql"
    SqlDumpWriter().dump(people_seeds, path)

    assert "INSERT INTO people" in path.read_text()
