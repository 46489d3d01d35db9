"""Schema description model and loaders.

A schema description is the input of a generation run: the tables, their
columns and foreign keys, optionally with a few sampled real values per
column. It comes either from live introspection (see ``introspection``) or
from a YAML/JSON file shaped like::

    tables:
      - name: companies
        columns:
          - {name: id, type: integer, primary_key: true, nullable: false}
          - {name: name, type: text}
      - name: employees
        columns:
          - {name: id, type: integer, primary_key: true}
          - {name: company_id, type: integer, references: companies.id}
          - {name: salary, type: "numeric(10,2)"}
          - {name: status, type: text, samples: [active, on_leave]}
        foreign_keys:
          - {column: manager_id, referenced_table: employees}
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from synthdb.exceptions import SchemaFileError, TableNotFoundError
from synthdb.models import ColumnInfo, ForeignKeyInfo, TableInfo

logger = logging.getLogger(__name__)


class SchemaModel:
    """Read-only collection of tables describing one database schema."""

    def __init__(self, tables: list[TableInfo]):
        self._tables: dict[str, TableInfo] = {}
        for table in tables:
            self._tables[table.name] = table

        for table in self._tables.values():
            for fk in table.foreign_keys:
                if fk.referenced_table not in self._tables:
                    logger.warning(
                        f"Table '{table.name}' column '{fk.column}' references unknown "
                        f"table '{fk.referenced_table}'; default values will be used"
                    )

    @property
    def tables(self) -> list[TableInfo]:
        """Tables in declaration order."""
        return list(self._tables.values())

    @property
    def table_names(self) -> list[str]:
        """Table names in declaration order."""
        return list(self._tables)

    def get_table(self, name: str) -> TableInfo:
        """
        Get table metadata by name.

        Raises:
            TableNotFoundError: If table is not part of the schema
        """
        if name not in self._tables:
            raise TableNotFoundError(name, self.table_names)
        return self._tables[name]

    def __contains__(self, name: str) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    @classmethod
    def from_file(cls, path: str | Path) -> "SchemaModel":
        """
        Load a schema description, picking the parser from the file suffix.

        ``.json`` files are parsed as JSON, everything else as YAML.

        Raises:
            FileNotFoundError: If the file does not exist
            SchemaFileError: If the description is malformed
        """
        path = Path(path)
        if path.suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SchemaModel":
        """Load a schema description from a YAML file."""
        path = Path(path)
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise SchemaFileError(str(path), f"YAML parse error: {e}") from e
        return cls.from_dict(data, source=str(path))

    @classmethod
    def from_json(cls, path: str | Path) -> "SchemaModel":
        """Load a schema description from a JSON file."""
        path = Path(path)
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise SchemaFileError(str(path), f"JSON parse error: {e}") from e
        return cls.from_dict(data, source=str(path))

    @classmethod
    def from_dict(cls, data: Any, source: str = "<dict>") -> "SchemaModel":
        """
        Build a schema model from already-parsed data.

        Args:
            data: Mapping with a ``tables`` list
            source: Name used in error messages

        Raises:
            SchemaFileError: If the description is malformed
        """
        if not isinstance(data, dict) or not isinstance(data.get("tables"), list):
            raise SchemaFileError(source, "expected a mapping with a 'tables' list")

        tables = [_parse_table(raw, source) for raw in data["tables"]]
        logger.debug(f"Loaded {len(tables)} tables from {source}")
        return cls(tables)


def _parse_table(raw: Any, source: str) -> TableInfo:
    if not isinstance(raw, dict) or not raw.get("name"):
        raise SchemaFileError(source, f"table entry without a name: {raw!r}")
    name = str(raw["name"])

    raw_columns = raw.get("columns")
    if not isinstance(raw_columns, list):
        raise SchemaFileError(source, f"table '{name}' has no 'columns' list")

    columns = []
    foreign_keys = []
    for raw_col in raw_columns:
        column, inline_fk = _parse_column(raw_col, name, source)
        columns.append(column)
        if inline_fk is not None:
            foreign_keys.append(inline_fk)

    for raw_fk in raw.get("foreign_keys") or []:
        if not isinstance(raw_fk, dict) or "column" not in raw_fk:
            raise SchemaFileError(source, f"table '{name}' has a foreign key without a column")
        if "references" in raw_fk:
            ref_table, ref_column = _split_reference(raw_fk["references"], name, source)
        elif "referenced_table" in raw_fk:
            ref_table = str(raw_fk["referenced_table"])
            ref_column = str(raw_fk.get("referenced_column", "id"))
        else:
            raise SchemaFileError(
                source, f"foreign key '{name}.{raw_fk['column']}' has no referenced table"
            )
        foreign_keys.append(
            ForeignKeyInfo(
                column=str(raw_fk["column"]),
                referenced_table=ref_table,
                referenced_column=ref_column,
            )
        )

    return TableInfo(name=name, columns=columns, foreign_keys=foreign_keys)


def _parse_column(
    raw: Any, table: str, source: str
) -> tuple[ColumnInfo, ForeignKeyInfo | None]:
    if not isinstance(raw, dict) or not raw.get("name"):
        raise SchemaFileError(source, f"column entry without a name in table '{table}'")
    name = str(raw["name"])
    if "type" not in raw:
        raise SchemaFileError(source, f"column '{table}.{name}' has no type")

    samples = raw.get("samples") or []
    if not isinstance(samples, list):
        raise SchemaFileError(source, f"samples of '{table}.{name}' must be a list")

    column = ColumnInfo(
        name=name,
        pg_type=str(raw["type"]),
        is_nullable=bool(raw.get("nullable", True)),
        is_primary_key=bool(raw.get("primary_key", False)),
        numeric_precision=_optional_int(raw.get("precision")),
        numeric_scale=_optional_int(raw.get("scale")),
        sample_values=[str(v) for v in samples if v is not None],
    )

    inline_fk = None
    if raw.get("references"):
        ref_table, ref_column = _split_reference(raw["references"], table, source)
        inline_fk = ForeignKeyInfo(
            column=name, referenced_table=ref_table, referenced_column=ref_column
        )
    return column, inline_fk


def _split_reference(value: Any, table: str, source: str) -> tuple[str, str]:
    """Split ``table.column`` (column defaults to ``id``)."""
    text = str(value).strip()
    if not text:
        raise SchemaFileError(source, f"empty reference in table '{table}'")
    ref_table, _, ref_column = text.partition(".")
    return ref_table, ref_column or "id"


def _optional_int(value: Any) -> int | None:
    # Malformed precision/scale falls back to the type string or defaults
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None
