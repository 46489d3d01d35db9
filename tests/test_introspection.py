"""Tests for database introspection against an in-memory fake connection."""

import psycopg
import pytest

from synthdb.exceptions import SchemaNotFoundError, TableNotFoundError
from synthdb.introspection import SchemaIntrospector, should_sample
from synthdb.models import ColumnInfo, DataType

COLUMNS = {
    "companies": [
        ("id", "integer", "NO", 32, 0, True),
        ("name", "text", "NO", None, None, False),
        ("segment", "character varying", "YES", None, None, False),
    ],
    "employees": [
        ("id", "integer", "NO", 32, 0, True),
        ("company_id", "integer", "NO", 32, 0, False),
        ("salary", "numeric", "YES", 10, 2, False),
        ("status", "text", "YES", None, None, False),
        ("tags", "ARRAY", "YES", None, None, False),
    ],
}

FOREIGN_KEYS = {
    "companies": [],
    "employees": [("company_id", "companies", "id")],
}

SAMPLE_ORDER = ["segment", "status"]

SAMPLES = {
    "segment": [("enterprise",), ("smb",)],
    "status": [("active",), ("on_leave",)],
}


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params=()):
        self.conn.queries.append((query, params))
        if not isinstance(query, str):
            # Composed sample query; eligible columns are sampled in table order
            column = SAMPLE_ORDER[self.conn.sample_calls]
            self.conn.sample_calls += 1
            if column in self.conn.failing_samples:
                raise psycopg.Error(f"permission denied for column {column}")
            self._rows = SAMPLES.get(column, [])
        elif "information_schema.schemata" in query:
            self._rows = [(params[0] in self.conn.schemas,)]
        elif "FOREIGN KEY" in query:
            self._rows = FOREIGN_KEYS.get(params[1], [])
        elif "information_schema.columns" in query:
            self._rows = COLUMNS.get(params[1], [])
        elif "information_schema.tables" in query:
            self._rows = [(name,) for name in sorted(COLUMNS)]
        else:
            raise AssertionError(f"unexpected query: {query}")

    def fetchone(self):
        return self._rows[0]

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, schemas=("public",), failing_samples=()):
        self.schemas = set(schemas)
        self.failing_samples = set(failing_samples)
        self.queries = []
        self.rollbacks = 0
        self.sample_calls = 0

    def cursor(self):
        return FakeCursor(self)

    def rollback(self):
        self.rollbacks += 1


def test_missing_schema_raises():
    with pytest.raises(SchemaNotFoundError, match="sales"):
        SchemaIntrospector(FakeConnection(), "sales")


def test_load_schema_model():
    model = SchemaIntrospector(FakeConnection()).load()

    assert model.table_names == ["companies", "employees"]
    employees = model.get_table("employees")

    assert employees.pk_column == "id"
    assert employees.get_column("company_id").is_nullable is False
    assert employees.foreign_keys[0].referenced_table == "companies"

    salary = employees.get_column("salary")
    assert (salary.numeric_precision, salary.numeric_scale) == (10, 2)
    assert salary.data_type == DataType.DECIMAL
    assert employees.get_column("tags").data_type == DataType.ARRAY

    # Integer precision reported by the catalog is not kept
    assert employees.get_column("id").numeric_precision is None


def test_samples_text_columns_only():
    conn = FakeConnection()
    model = SchemaIntrospector(conn, sample_limit=5).load()

    companies = model.get_table("companies")
    employees = model.get_table("employees")
    assert companies.get_column("segment").sample_values == ["enterprise", "smb"]
    assert companies.get_column("name").sample_values == []
    assert employees.get_column("status").sample_values == ["active", "on_leave"]
    assert employees.get_column("salary").sample_values == []

    sample_params = [params for query, params in conn.queries if not isinstance(query, str)]
    assert sample_params == [(5,), (5,)]


def test_sampling_disabled():
    conn = FakeConnection()
    SchemaIntrospector(conn, sample_limit=0).load()

    assert all(isinstance(query, str) for query, _ in conn.queries)


def test_sampling_failure_is_not_fatal():
    conn = FakeConnection(failing_samples={"status"})
    model = SchemaIntrospector(conn).load()

    assert model.get_table("employees").get_column("status").sample_values == []
    assert conn.rollbacks == 1


def test_unknown_table_raises():
    with pytest.raises(TableNotFoundError):
        SchemaIntrospector(FakeConnection()).get_table_info("payroll")


def test_table_info_cached():
    conn = FakeConnection()
    introspector = SchemaIntrospector(conn, sample_limit=0)

    first = introspector.get_table_info("companies")
    count = len(conn.queries)
    assert introspector.get_table_info("companies") is first
    assert len(conn.queries) == count

    introspector.clear_cache()
    assert introspector.get_table_info("companies") is not first


@pytest.mark.parametrize(
    "column, expected",
    [
        (ColumnInfo(name="status", pg_type="text"), True),
        (ColumnInfo(name="segment", pg_type="varchar(20)"), True),
        (ColumnInfo(name="user_id", pg_type="text"), False),
        (ColumnInfo(name="work_email", pg_type="text"), False),
        (ColumnInfo(name="nickname", pg_type="text"), False),
        (ColumnInfo(name="score", pg_type="integer"), False),
        (ColumnInfo(name="code", pg_type="text", is_primary_key=True), False),
    ],
)
def test_should_sample(column, expected):
    assert should_sample(column) is expected
