"""SQL dump writer."""

import json
import logging
import re
from collections.abc import Iterable
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from typing import Any, TextIO

from synthdb.models import DataType, Seeds, TableInfo

logger = logging.getLogger(__name__)

HEADER = "-- SynthDB Generated Dump"

_NUMERIC_TEXT = re.compile(r"^-?\d+(\.\d+)?([eE][-+]?\d+)?$")
_PLAIN_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")

# Keywords that cannot be used as bare table or column names
_RESERVED = frozenset(
    {
        "all", "analyse", "analyze", "and", "any", "array", "as", "asc", "both",
        "case", "cast", "check", "collate", "column", "constraint", "create",
        "default", "desc", "distinct", "do", "else", "end", "except", "false",
        "for", "foreign", "from", "grant", "group", "having", "in", "into",
        "leading", "limit", "not", "null", "offset", "on", "only", "or", "order",
        "primary", "references", "select", "table", "then", "to", "true", "union",
        "unique", "user", "using", "when", "where", "with",
    }
)


def quote_identifier(name: str) -> str:
    """Double-quote a table or column name unless it can be written bare."""
    if _PLAIN_IDENTIFIER.match(name) and name not in _RESERVED:
        return name
    return '"' + name.replace('"', '""') + '"'


def quote_text(text: str) -> str:
    """Single-quote a string literal, doubling embedded quotes."""
    return "'" + text.replace("'", "''") + "'"


def _array_literal(items: Iterable[Any]) -> str:
    elements = []
    for item in items:
        if item is None:
            elements.append("NULL")
            continue
        text = str(item).replace("\\", "\\\\").replace('"', '\\"')
        elements.append(f'"{text}"')
    return "{" + ",".join(elements) + "}"


def render_literal(value: Any, data_type: DataType = DataType.TEXT) -> str:
    """
    Render a Python value as a SQL literal for a column of data_type.

    Numbers are unquoted only in numeric columns; booleans and NULL are always
    unquoted; everything else is single-quoted.

    Examples:
        >>> render_literal("O'Brien")
        "'O''Brien'"
        >>> render_literal(Decimal("12.50"), DataType.DECIMAL)
        '12.50'
        >>> render_literal(None)
        'NULL'
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"

    if data_type.is_numeric:
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, str) and _NUMERIC_TEXT.match(value):
            return value

    if isinstance(value, datetime):
        return quote_text(value.strftime("%Y-%m-%d %H:%M:%S"))
    if isinstance(value, (date, time)):
        return quote_text(value.isoformat())
    if isinstance(value, dict):
        return quote_text(json.dumps(value))
    if isinstance(value, (list, tuple)):
        if data_type == DataType.ARRAY:
            return quote_text(_array_literal(value))
        return quote_text(json.dumps(list(value)))
    return quote_text(str(value))


class SqlDumpWriter:
    """
    Write generated rows as a single-transaction SQL script.

    Constraints are deferred for the whole transaction, so rows whose foreign
    keys point forward (cyclic schemas) load as long as the target rows exist
    by COMMIT.
    """

    def __init__(self, header_lines: list[str] | None = None):
        """
        Initialize writer.

        Args:
            header_lines: Extra comment lines written after the title
        """
        self.header_lines = list(header_lines or [])

    def write(self, seeds: Seeds, stream: TextIO) -> None:
        """Write every table of seeds, in generation order, to stream."""
        stream.write(f"{HEADER}\n")
        for line in self.header_lines:
            stream.write(f"-- {line}\n")
        stream.write("BEGIN;\n")
        stream.write("SET CONSTRAINTS ALL DEFERRED;\n")

        for name in seeds.table_names():
            rows = [row.as_dict() for row in seeds.rows(name)]
            self.write_table(seeds.table_info(name), rows, stream)

        stream.write("\nCOMMIT;\n")

    def write_table(
        self, table: TableInfo, rows: list[dict[str, Any]], stream: TextIO
    ) -> None:
        """
        Write one table as a single multi-row INSERT.

        Tables without rows or columns get the section comment only.
        """
        stream.write(f"\n-- Data for {table.name}\n")
        if not rows or not table.columns:
            logger.debug(f"Skipping INSERT for '{table.name}': nothing to write")
            return

        columns = ", ".join(quote_identifier(col.name) for col in table.columns)
        stream.write(f"INSERT INTO {quote_identifier(table.name)} ({columns}) VALUES\n")

        types = [col.data_type for col in table.columns]
        last = len(rows) - 1
        for i, row in enumerate(rows):
            values = ", ".join(
                render_literal(row.get(col.name), data_type)
                for col, data_type in zip(table.columns, types)
            )
            terminator = ";" if i == last else ","
            stream.write(f"({values}){terminator}\n")

    def dump(self, seeds: Seeds, path: str | Path) -> None:
        """Write seeds to a file (overwritten if it exists)."""
        with open(path, "w", encoding="utf-8") as f:
            self.write(seeds, f)
        logger.info(f"Wrote SQL dump to {path}")
