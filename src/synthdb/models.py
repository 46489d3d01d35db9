"""Data models and type definitions."""

import csv
import json
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

# numeric(10,2), varchar(255), numeric(8)
_TYPE_MODIFIER = re.compile(r"\(\s*(\d+)\s*(?:,\s*(\d+)\s*)?\)")


class DataType(str, Enum):
    """Abstract type tag for a declared column type."""

    INTEGER = "integer"
    DECIMAL = "decimal"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEXT = "text"
    DATE = "date"
    TIMESTAMP = "timestamp"
    TIME = "time"
    UUID = "uuid"
    JSON = "json"
    ARRAY = "array"
    INET = "inet"
    MACADDR = "macaddr"
    UNKNOWN = "unknown"

    @classmethod
    def from_pg(cls, pg_type: str) -> "DataType":
        """
        Map a declared (PostgreSQL-style) type name to its abstract tag.

        Args:
            pg_type: Declared type, e.g. "character varying", "numeric(10,2)",
                "timestamp with time zone", "text[]", "ARRAY"

        Returns:
            Matching DataType, UNKNOWN when the type is not recognized
        """
        raw = (pg_type or "").strip().lower()
        if raw.endswith("[]") or raw == "array" or raw.startswith("_"):
            return cls.ARRAY

        base = _TYPE_MODIFIER.sub("", raw).strip()
        if base in _INTEGER_TYPES:
            return cls.INTEGER
        if base in ("numeric", "decimal", "money"):
            return cls.DECIMAL
        if base in ("real", "double precision", "float", "float4", "float8", "double"):
            return cls.FLOAT
        if base in ("boolean", "bool"):
            return cls.BOOLEAN
        if base in _TEXT_TYPES:
            return cls.TEXT
        if base == "date":
            return cls.DATE
        if base.startswith("timestamp") or base == "datetime":
            return cls.TIMESTAMP
        if base.startswith("time"):
            return cls.TIME
        if base == "uuid":
            return cls.UUID
        if base in ("json", "jsonb"):
            return cls.JSON
        if base in ("inet", "cidr"):
            return cls.INET
        if base in ("macaddr", "macaddr8"):
            return cls.MACADDR
        return cls.UNKNOWN

    @property
    def is_numeric(self) -> bool:
        """Whether values of this type are emitted unquoted as numbers."""
        return self in (DataType.INTEGER, DataType.DECIMAL, DataType.FLOAT)

    @property
    def is_temporal(self) -> bool:
        """Whether this is a date, timestamp or time type."""
        return self in (DataType.DATE, DataType.TIMESTAMP, DataType.TIME)


_INTEGER_TYPES = frozenset(
    {
        "integer",
        "int",
        "int2",
        "int4",
        "int8",
        "smallint",
        "bigint",
        "serial",
        "smallserial",
        "bigserial",
    }
)

_TEXT_TYPES = frozenset(
    {
        "text",
        "character varying",
        "varchar",
        "character",
        "char",
        "bpchar",
        "citext",
        "name",
        "string",
    }
)


def parse_type_modifiers(pg_type: str) -> tuple[int | None, int | None]:
    """
    Extract precision and scale from a declared type.

    Malformed or missing modifiers yield (None, None).

    Examples:
        >>> parse_type_modifiers("numeric(10,2)")
        (10, 2)
        >>> parse_type_modifiers("numeric")
        (None, None)
    """
    match = _TYPE_MODIFIER.search(pg_type or "")
    if not match:
        return None, None
    precision = int(match.group(1))
    scale = int(match.group(2)) if match.group(2) is not None else None
    return precision, scale


@dataclass
class ColumnInfo:
    """
    Column metadata from a schema description or database introspection.

    Attributes:
        name: Column name
        pg_type: Declared data type (as reported by the database)
        is_nullable: Whether column allows NULL values
        is_primary_key: Whether column is the table's primary key
        numeric_precision: Declared precision for decimal types
        numeric_scale: Declared scale for decimal types
        sample_values: Small ordered sample of real values for this column
    """

    name: str
    pg_type: str
    is_nullable: bool = True
    is_primary_key: bool = False
    numeric_precision: int | None = None
    numeric_scale: int | None = None
    sample_values: list[str] = field(default_factory=list)

    def __post_init__(self):
        if self.numeric_precision is None and self.numeric_scale is None:
            self.numeric_precision, self.numeric_scale = parse_type_modifiers(
                self.pg_type
            )

    @property
    def data_type(self) -> DataType:
        """Abstract type tag of the declared type."""
        return DataType.from_pg(self.pg_type)

    @property
    def normalized_name(self) -> str:
        """Lower-cased, trimmed column name used for matching and context keys."""
        return self.name.strip().lower()


@dataclass
class ForeignKeyInfo:
    """
    Foreign key relationship metadata.

    Attributes:
        column: Foreign key column name in this table
        referenced_table: Parent table being referenced
        referenced_column: Column in parent table (usually PK)
        is_self_referencing: Whether this FK references the same table
    """

    column: str
    referenced_table: str
    referenced_column: str = "id"
    is_self_referencing: bool = False


@dataclass
class TableInfo:
    """
    Table metadata.

    Attributes:
        name: Table name
        columns: List of column metadata, in declaration order
        foreign_keys: List of foreign key relationships
    """

    name: str
    columns: list[ColumnInfo]
    foreign_keys: list[ForeignKeyInfo] = field(default_factory=list)

    def __post_init__(self):
        for fk in self.foreign_keys:
            if fk.referenced_table == self.name:
                fk.is_self_referencing = True

    @property
    def column_names(self) -> list[str]:
        """Column names in declaration order."""
        return [col.name for col in self.columns]

    @property
    def pk_column(self) -> str | None:
        """
        Get declared primary key column name.

        Returns:
            Primary key column name or None if no PK is declared
        """
        for col in self.columns:
            if col.is_primary_key:
                return col.name
        return None

    def get_column(self, name: str) -> ColumnInfo | None:
        """Get column metadata by name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def foreign_key_for(self, column: str) -> ForeignKeyInfo | None:
        """Get the foreign key owned by a column, if any."""
        for fk in self.foreign_keys:
            if fk.column == column:
                return fk
        return None


@dataclass
class SeedRow:
    """
    A single row of generated data with attribute access.

    Allows accessing column values as attributes:
        row.id       # Access primary key
        row.email    # Access email column

    Attributes:
        _data: Raw column data dict, in declaration order
    """

    _data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        """
        Allow attribute access to column values.

        Raises:
            AttributeError: If column doesn't exist
        """
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        if name in self._data:
            return self._data[name]
        raise AttributeError(f"No column '{name}' in seed data")

    def as_dict(self) -> dict[str, Any]:
        """Return a copy of the row data."""
        return dict(self._data)


class Seeds:
    """
    Container for generated data with attribute access.

    Tables keep the order in which they were generated (dependency order):
        seeds.companies   # List of SeedRow objects
        seeds.employees   # List of SeedRow objects
    """

    def __init__(self):
        self._tables: dict[str, list[SeedRow]] = {}
        self._info: dict[str, TableInfo] = {}

    def add_table(self, table: TableInfo, rows: list[dict[str, Any]]) -> None:
        """
        Add generated data for a table.

        Args:
            table: Table metadata (kept for rendering)
            rows: List of row dicts with column data
        """
        self._tables[table.name] = [SeedRow(_data=row) for row in rows]
        self._info[table.name] = table

    def table_names(self) -> list[str]:
        """Table names in generation order."""
        return list(self._tables)

    def table_info(self, name: str) -> TableInfo:
        """Metadata of a generated table."""
        return self._info[name]

    def rows(self, name: str) -> list[SeedRow]:
        """Rows of a generated table."""
        return self._tables[name]

    def __getattr__(self, name: str) -> list[SeedRow]:
        """
        Allow attribute access to tables.

        Raises:
            AttributeError: If table doesn't exist in seeds
        """
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        if name in self._tables:
            return self._tables[name]
        raise AttributeError(f"No table '{name}' in seeds")

    def __contains__(self, name: str) -> bool:
        return name in self._tables

    def to_json(self, path: str | Path) -> None:
        """
        Export all tables to a JSON file.

        Dates, decimals and UUIDs are written as strings.

        Args:
            path: Destination file
        """
        data = {
            name: [row.as_dict() for row in rows] for name, rows in self._tables.items()
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2, default=str)

    def to_csv(self, table: str, path: str | Path) -> None:
        """
        Export a single table to a CSV file with a header row.

        Args:
            table: Table name
            path: Destination file
        """
        info = self._info[table]
        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=info.column_names)
            writer.writeheader()
            for row in self._tables[table]:
                writer.writerow(
                    {k: "" if v is None else v for k, v in row.as_dict().items()}
                )


@dataclass
class SeedPlan:
    """
    Plan for generating data for a single table.

    Attributes:
        table: Table name
        count: Number of rows to generate
        strategy: Generation strategy ("semantic" is default)
        overrides: Column overrides (callable or static value)
    """

    table: str
    count: int
    strategy: str = "semantic"
    overrides: dict[str, Any] = field(default_factory=dict)
