"""Schema introspection of a live PostgreSQL database."""

import logging

import psycopg
from psycopg import Connection, sql

from synthdb.exceptions import SchemaNotFoundError, TableNotFoundError
from synthdb.models import ColumnInfo, DataType, ForeignKeyInfo, TableInfo
from synthdb.schema import SchemaModel

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_LIMIT = 20

# Columns whose names contain these are never sampled
_UNSAMPLED_NAME_PARTS = ("id", "email", "name")


def should_sample(column: ColumnInfo) -> bool:
    """Whether real values of a column may be reused in generated data."""
    if column.data_type != DataType.TEXT or column.is_primary_key:
        return False
    name = column.normalized_name
    return not any(part in name for part in _UNSAMPLED_NAME_PARTS)


class SchemaIntrospector:
    """Read table, column and foreign-key metadata from a PostgreSQL schema."""

    def __init__(
        self,
        conn: Connection,
        schema: str = "public",
        sample_limit: int = DEFAULT_SAMPLE_LIMIT,
    ):
        """
        Initialize introspector.

        Args:
            conn: PostgreSQL connection
            schema: Schema name
            sample_limit: Distinct values sampled per eligible column (0 disables)

        Raises:
            SchemaNotFoundError: If schema doesn't exist
        """
        self.conn = conn
        self.schema = schema
        self.sample_limit = sample_limit
        self._table_cache: dict[str, TableInfo] = {}

        self._validate_schema()

    @classmethod
    def connect(
        cls, url: str, schema: str = "public", sample_limit: int = DEFAULT_SAMPLE_LIMIT
    ) -> SchemaModel:
        """Connect to url, introspect schema and close the connection."""
        with psycopg.connect(url) as conn:
            return cls(conn, schema, sample_limit).load()

    def _validate_schema(self) -> None:
        """Validate that schema exists in database."""
        with self.conn.cursor() as cur:
            cur.execute(
                "SELECT EXISTS(SELECT 1 FROM information_schema.schemata WHERE schema_name = %s)",
                (self.schema,),
            )
            exists = cur.fetchone()[0]
            if not exists:
                raise SchemaNotFoundError(self.schema)

    def load(self) -> SchemaModel:
        """Introspect every base table of the schema into a SchemaModel."""
        tables = self.get_tables()
        logger.info(f"Introspected {len(tables)} tables from schema '{self.schema}'")
        return SchemaModel(tables)

    def get_table_names(self) -> list[str]:
        """Base table names in the schema, alphabetically."""
        with self.conn.cursor() as cur:
            cur.execute(
                """
                SELECT table_name
                FROM information_schema.tables
                WHERE table_schema = %s
                  AND table_type = 'BASE TABLE'
                ORDER BY table_name
                """,
                (self.schema,),
            )
            return [row[0] for row in cur.fetchall()]

    def get_tables(self) -> list[TableInfo]:
        """Get all tables in schema (cached)."""
        return [self.get_table_info(name) for name in self.get_table_names()]

    def get_table_info(self, table_name: str) -> TableInfo:
        """
        Get complete table information (cached).

        Raises:
            TableNotFoundError: If table doesn't exist in the schema
        """
        if table_name in self._table_cache:
            return self._table_cache[table_name]

        columns = self.get_columns(table_name)
        if not columns and table_name not in self.get_table_names():
            raise TableNotFoundError(table_name, self.get_table_names())

        for column in columns:
            if self.sample_limit > 0 and should_sample(column):
                column.sample_values = self.sample_values(table_name, column.name)

        table_info = TableInfo(
            name=table_name,
            columns=columns,
            foreign_keys=self.get_foreign_keys(table_name),
        )
        self._table_cache[table_name] = table_info
        return table_info

    def get_columns(self, table_name: str) -> list[ColumnInfo]:
        """Get all columns for a table in ordinal order."""
        with self.conn.cursor() as cur:
            cur.execute(
                """
                SELECT
                    c.column_name,
                    c.data_type,
                    c.is_nullable,
                    c.numeric_precision,
                    c.numeric_scale,
                    CASE WHEN pk.column_name IS NOT NULL THEN true ELSE false END as is_pk
                FROM information_schema.columns c
                LEFT JOIN (
                    SELECT kcu.column_name
                    FROM information_schema.table_constraints tc
                    JOIN information_schema.key_column_usage kcu
                      ON tc.constraint_name = kcu.constraint_name
                      AND tc.table_schema = kcu.table_schema
                    WHERE tc.constraint_type = 'PRIMARY KEY'
                      AND tc.table_schema = %s
                      AND tc.table_name = %s
                ) pk ON c.column_name = pk.column_name
                WHERE c.table_schema = %s
                  AND c.table_name = %s
                ORDER BY c.ordinal_position
                """,
                (self.schema, table_name, self.schema, table_name),
            )
            rows = cur.fetchall()

        return [
            ColumnInfo(
                name=row[0],
                pg_type=row[1],
                is_nullable=row[2] == "YES",
                numeric_precision=row[3] if row[1] in ("numeric", "decimal") else None,
                numeric_scale=row[4] if row[1] in ("numeric", "decimal") else None,
                is_primary_key=bool(row[5]),
            )
            for row in rows
        ]

    def get_foreign_keys(self, table_name: str) -> list[ForeignKeyInfo]:
        """Get all foreign keys for a table."""
        with self.conn.cursor() as cur:
            cur.execute(
                """
                SELECT
                    kcu.column_name,
                    ccu.table_name AS foreign_table_name,
                    ccu.column_name AS foreign_column_name
                FROM information_schema.table_constraints AS tc
                JOIN information_schema.key_column_usage AS kcu
                  ON tc.constraint_name = kcu.constraint_name
                  AND tc.table_schema = kcu.table_schema
                JOIN information_schema.constraint_column_usage AS ccu
                  ON ccu.constraint_name = tc.constraint_name
                  AND ccu.table_schema = tc.table_schema
                WHERE tc.constraint_type = 'FOREIGN KEY'
                  AND tc.table_schema = %s
                  AND tc.table_name = %s
                """,
                (self.schema, table_name),
            )
            rows = cur.fetchall()

        return [
            ForeignKeyInfo(column=row[0], referenced_table=row[1], referenced_column=row[2])
            for row in rows
        ]

    def sample_values(self, table_name: str, column_name: str) -> list[str]:
        """
        Read up to ``sample_limit`` distinct non-null values of a column.

        A failing sample query is logged and yields no samples.
        """
        query = sql.SQL(
            "SELECT DISTINCT {column}::text FROM {schema}.{table} "
            "WHERE {column} IS NOT NULL LIMIT %s"
        ).format(
            column=sql.Identifier(column_name),
            schema=sql.Identifier(self.schema),
            table=sql.Identifier(table_name),
        )
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, (self.sample_limit,))
                values = [row[0] for row in cur.fetchall()]
        except psycopg.Error as e:
            logger.debug(f"Could not sample {table_name}.{column_name}: {e}")
            self.conn.rollback()
            return []

        logger.debug(f"Sampled {len(values)} values from {table_name}.{column_name}")
        return values

    def clear_cache(self) -> None:
        """Clear cached introspection data."""
        self._table_cache.clear()
